"""Tracked identifiers and detection of connection identifiers nobody uses."""
from __future__ import annotations

import logging
from typing import Sequence

from src.elucidation.storage.protocols import EventStore, IdentifierStore
from src.shared.models.events import Direction, TrackedConnectionIdentifier
from src.shared.models.relationships import UnusedIdentifier, UnusedServiceIdentifiers

logger = logging.getLogger(__name__)


class TrackedConnectionIdentifierService:
    """Finds produced or declared identifiers that no service consumes.

    Two sources feed the report:

    - observed: OUTBOUND events of a service with no INBOUND event for the
      same communication type and identifier, from any service;
    - tracked: declared identifiers of a service with no such INBOUND event.
      These catch HTTP endpoints that were never called, which otherwise
      leave no trace at all.

    Unlike counterpart resolution, a miss is recorded as "unused" and
    nothing is synthesized.
    """

    def __init__(
        self,
        tracked_store: IdentifierStore,
        event_store: EventStore,
    ) -> None:
        self._tracked = tracked_store
        self._events = event_store

    def load_new_identifiers(
        self,
        service_name: str,
        communication_type: str,
        connection_identifiers: Sequence[str],
    ) -> int:
        """Replace the tracked identifiers of a service and communication type.

        Any identifiers previously loaded for the same pair are removed, not
        merged. Returns the number of identifiers now tracked.
        """
        loaded = self._tracked.replace_for_service_and_type(
            service_name, communication_type, connection_identifiers
        )
        logger.info(
            "Loaded %d tracked identifiers for service=%s type=%s",
            loaded, service_name, communication_type,
        )
        return loaded

    def all_tracked_connection_identifiers(self) -> list[TrackedConnectionIdentifier]:
        return self._tracked.find_all()

    def find_unused_identifiers(self) -> list[UnusedServiceIdentifiers]:
        """Unused identifiers for every service that has at least one."""
        service_names = (
            self._events.find_all_service_names()
            | self._tracked.find_all_service_names()
        )

        results = []
        for service_name in sorted(service_names):
            unused = self.find_unused_identifiers_for_service(service_name)
            if unused.identifiers:
                results.append(unused)
        return results

    def find_unused_identifiers_for_service(
        self, service_name: str
    ) -> UnusedServiceIdentifiers:
        """Unused identifiers of one service; returned even when empty."""
        return UnusedServiceIdentifiers(
            service_name=service_name,
            identifiers=(
                self._unused_from_events(service_name)
                + self._unused_from_tracked(service_name)
            ),
        )

    def _has_consumer(self, communication_type: str, connection_identifier: str) -> bool:
        return bool(
            self._events.find_by_direction_and_identifier(
                Direction.INBOUND, communication_type, connection_identifier
            )
        )

    def _unused_from_events(self, service_name: str) -> list[UnusedIdentifier]:
        return [
            UnusedIdentifier(
                communication_type=event.communication_type,
                connection_identifier=event.connection_identifier,
            )
            for event in self._events.find_by_service_name(service_name)
            if event.event_direction is Direction.OUTBOUND
            and not self._has_consumer(event.communication_type, event.connection_identifier)
        ]

    def _unused_from_tracked(self, service_name: str) -> list[UnusedIdentifier]:
        return [
            UnusedIdentifier(
                communication_type=tracked.communication_type,
                connection_identifier=tracked.connection_identifier,
            )
            for tracked in self._tracked.find_by_service_name(service_name)
            if not self._has_consumer(tracked.communication_type, tracked.connection_identifier)
        ]
