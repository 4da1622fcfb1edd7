"""HTTP recorder sending events and tracked identifiers to the Elucidation server."""
from __future__ import annotations

import logging
from typing import Any, Callable, Sequence
from urllib.parse import quote

import httpx

from src.elucidation_client.result import ElucidationResult
from src.shared.models.events import ConnectionEvent

logger = logging.getLogger(__name__)

_EVENT_PATH = "/elucidate/event"
_TRACKED_PATH = "/elucidate/trackedIdentifier/{service_name}/{communication_type}"

_EVENT_ERROR_TEMPLATE = (
    "Unable to record connection event due to a problem communicating with "
    "the elucidation server. Status: {status}, Body: {body}"
)
_TRACK_ERROR_TEMPLATE = (
    "Unable to load tracked identifiers due to a problem communicating with "
    "the elucidation server. Status: {status}, Body: {body}"
)


class ElucidationRecorder:
    """Sends connection events and tracked identifiers to an Elucidation server.

    The server base URL is read through *base_url_supplier* on every request,
    so it may change at runtime. Methods never raise: failures come back as
    an ERROR :class:`ElucidationResult`.
    """

    def __init__(
        self,
        base_url: str | Callable[[], str],
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ) -> None:
        if callable(base_url):
            self._base_url_supplier = base_url
        else:
            self._base_url_supplier = lambda: base_url
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    def _url(self, path: str) -> str:
        return self._base_url_supplier().rstrip("/") + path

    async def _post(self, path: str, payload: Any, error_template: str) -> ElucidationResult:
        try:
            response = await self._client.post(self._url(path), json=payload)
        except httpx.HTTPError as exc:
            logger.warning("Request to elucidation server failed: %s", exc)
            return ElucidationResult.from_exception(exc)
        except Exception as exc:
            logger.exception("Unexpected error recording to elucidation server")
            return ElucidationResult.from_exception(exc)

        if response.is_success:
            return ElucidationResult.ok()

        return ElucidationResult.from_error_message(
            error_template.format(status=response.status_code, body=response.text)
        )

    async def record_new_event(self, event: ConnectionEvent) -> ElucidationResult:
        """Send *event* to the server."""
        payload = event.model_dump(mode="json", by_alias=True, exclude={"id"})
        return await self._post(_EVENT_PATH, payload, _EVENT_ERROR_TEMPLATE)

    async def track(
        self,
        service_name: str,
        communication_type: str,
        identifiers: Sequence[str],
    ) -> ElucidationResult:
        """Replace the identifiers tracked for *service_name* and *communication_type*."""
        path = _TRACKED_PATH.format(
            service_name=quote(service_name, safe=""),
            communication_type=quote(communication_type, safe=""),
        )
        return await self._post(path, list(identifiers), _TRACK_ERROR_TEMPLATE)

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this recorder created it."""
        if self._owns_client:
            await self._client.aclose()
