"""Correlation of connection events with the other side of the connection."""
from __future__ import annotations

import logging
from typing import Iterable

from src.elucidation.storage.protocols import EventStore
from src.shared.constants import UNKNOWN_SERVICE
from src.shared.models.events import ConnectionEvent

logger = logging.getLogger(__name__)


class CorrelationEngine:
    """Finds the counterpart events of a connection event.

    A counterpart is any event with the opposite direction and the same
    communication type and connection identifier, reported by any service.
    When nobody reported the other side, a single placeholder attributed to
    ``UNKNOWN_SERVICE`` stands in for it, so every event resolves to at least
    one related service.
    """

    def __init__(self, event_store: EventStore) -> None:
        self._events = event_store

    def find_counterparts(self, event: ConnectionEvent) -> list[ConnectionEvent]:
        """Return the counterparts of *event*; never empty."""
        counterparts = self._events.find_by_direction_and_identifier(
            event.event_direction.opposite(),
            event.communication_type,
            event.connection_identifier,
        )
        if counterparts:
            return counterparts

        logger.debug(
            "No counterpart for %s %s %s from %s; using %s",
            event.event_direction.value, event.communication_type,
            event.connection_identifier, event.service_name, UNKNOWN_SERVICE,
        )
        return [self.synthesize_counterpart(event)]

    def counterpart_service_names(self, events: Iterable[ConnectionEvent]) -> set[str]:
        """Distinct names of the services on the other side of *events*."""
        return {
            counterpart.service_name
            for event in events
            for counterpart in self.find_counterparts(event)
        }

    @staticmethod
    def synthesize_counterpart(event: ConnectionEvent) -> ConnectionEvent:
        """Build the placeholder counterpart used when none was reported."""
        return ConnectionEvent(
            id=None,
            service_name=UNKNOWN_SERVICE,
            event_direction=event.event_direction.opposite(),
            communication_type=event.communication_type,
            connection_identifier=event.connection_identifier,
            observed_at=event.observed_at,
        )
