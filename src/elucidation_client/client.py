"""Client turning application-specific inputs into recorded events."""
from __future__ import annotations

import logging
from typing import Callable, Generic, Sequence, TypeVar

from src.elucidation_client.recorder import ElucidationRecorder
from src.elucidation_client.result import ElucidationResult
from src.shared.models.events import ConnectionEvent

logger = logging.getLogger(__name__)

T = TypeVar("T")

_DISABLED_MESSAGE = "Recorder not enabled"


class ElucidationClient(Generic[T]):
    """Records events built from inputs of type ``T`` by an event factory.

    A client without a recorder or factory is disabled; every call then
    returns a SKIPPED result. Use :meth:`noop` to build one on purpose.
    """

    def __init__(
        self,
        recorder: ElucidationRecorder | None,
        event_factory: Callable[[T], ConnectionEvent | None] | None,
    ) -> None:
        self._recorder = recorder
        self._event_factory = event_factory
        self.enabled = recorder is not None and event_factory is not None

        if not self.enabled:
            logger.warning(
                "ElucidationClient is not enabled so no events will be recorded "
                "(recorder: %s, event_factory: %s)",
                "OK" if recorder is not None else "None",
                "OK" if event_factory is not None else "None",
            )

    @classmethod
    def noop(cls) -> ElucidationClient[T]:
        return cls(None, None)

    async def record_new_event(self, value: T | None) -> ElucidationResult:
        """Build an event from *value* and send it."""
        if not self.enabled:
            return ElucidationResult.from_skip_message(_DISABLED_MESSAGE)

        if value is None:
            return ElucidationResult.from_error_message("input is None; cannot create event")

        try:
            event = self._event_factory(value)
        except Exception as exc:
            logger.warning("Error creating elucidation event from %r: %s", value, exc)
            return ElucidationResult.from_exception(exc)

        if event is None:
            return ElucidationResult.from_error_message("event is missing; cannot record")

        return await self._recorder.record_new_event(event)

    async def track_identifiers(
        self,
        service_name: str,
        communication_type: str,
        identifiers: Sequence[str],
    ) -> ElucidationResult:
        """Send the identifiers a service declares for *communication_type*."""
        if not self.enabled:
            return ElucidationResult.from_skip_message(_DISABLED_MESSAGE)

        return await self._recorder.track(service_name, communication_type, identifiers)
