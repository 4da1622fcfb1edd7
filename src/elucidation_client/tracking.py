"""Record inbound HTTP traffic of a Starlette/FastAPI app as connection events."""
from __future__ import annotations

import asyncio
import logging
from typing import Any

from starlette.applications import Starlette
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import Route

from src.elucidation_client.client import ElucidationClient
from src.elucidation_client.recorder import ElucidationRecorder
from src.elucidation_client.result import ElucidationResult
from src.shared.constants import HTTP_COMMUNICATION_TYPE
from src.shared.models.events import ConnectionEvent, Direction

logger = logging.getLogger(__name__)

_SKIPPED_METHODS = frozenset({"OPTIONS", "HEAD"})


def http_identifier(method: str, path: str) -> str:
    return f"{method.upper()} {path}"


def _route_path(request: Request) -> str:
    route = request.scope.get("route")
    path = getattr(route, "path", None)
    return path or request.url.path


class InboundRequestTrackingMiddleware(BaseHTTPMiddleware):
    """Records an INBOUND HTTP event for every request the app handles.

    The identifier is ``"<METHOD> <route path template>"`` so that
    ``/users/42`` and ``/users/7`` both count as ``GET /users/{user_id}``.
    When *originating_service_header* is set and the caller sent it, the
    matching OUTBOUND event is recorded on the caller's behalf as well.
    Recording runs in the background and never affects the response.
    """

    def __init__(
        self,
        app: Any,
        client: ElucidationClient[ConnectionEvent],
        service_name: str,
        originating_service_header: str | None = None,
    ) -> None:
        super().__init__(app)
        self.client = client
        self.service_name = service_name
        self.originating_service_header = originating_service_header
        self._pending: set[asyncio.Task] = set()

    async def dispatch(self, request: Request, call_next: Any) -> Response:
        response = await call_next(request)

        if request.method.upper() in _SKIPPED_METHODS:
            return response

        identifier = http_identifier(request.method, _route_path(request))
        events = [
            ConnectionEvent(
                service_name=self.service_name,
                event_direction=Direction.INBOUND,
                communication_type=HTTP_COMMUNICATION_TYPE,
                connection_identifier=identifier,
            )
        ]

        if self.originating_service_header:
            caller = request.headers.get(self.originating_service_header, "").strip()
            if caller:
                events.append(
                    ConnectionEvent(
                        service_name=caller,
                        event_direction=Direction.OUTBOUND,
                        communication_type=HTTP_COMMUNICATION_TYPE,
                        connection_identifier=identifier,
                    )
                )

        for event in events:
            self._record_in_background(event)

        return response

    def _record_in_background(self, event: ConnectionEvent) -> None:
        task = asyncio.create_task(self.client.record_new_event(event))
        self._pending.add(task)
        task.add_done_callback(self._on_recorded)

    def _on_recorded(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        result = task.result()
        if not result.is_success:
            logger.debug(
                "Inbound event not recorded: status=%s error=%s",
                result.status.value,
                result.error_message or result.exception or result.skip_message,
            )


def endpoint_identifiers(app: Starlette) -> list[str]:
    """``"<METHOD> <path>"`` for every route of *app*.

    OPTIONS and HEAD are left out, as are routes hidden from the schema
    (FastAPI's docs and openapi.json routes).
    """
    identifiers = set()
    for route in app.routes:
        if not isinstance(route, Route) or not route.methods:
            continue
        if not route.include_in_schema:
            continue
        for method in route.methods:
            if method.upper() in _SKIPPED_METHODS:
                continue
            identifiers.add(http_identifier(method, route.path))
    return sorted(identifiers)


async def track_app_endpoints(
    app: Starlette,
    service_name: str,
    recorder: ElucidationRecorder,
) -> ElucidationResult:
    """Send every endpoint of *app* as a tracked HTTP identifier of *service_name*."""
    identifiers = endpoint_identifiers(app)
    if not identifiers:
        return ElucidationResult.from_skip_message(
            f"No endpoints found for service {service_name}"
        )

    logger.info(
        "Tracking %d endpoints for service %s", len(identifiers), service_name
    )
    return await recorder.track(service_name, HTTP_COMMUNICATION_TYPE, identifiers)
