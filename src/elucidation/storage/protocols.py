"""Runtime-checkable protocols for the stores the engine reads from."""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from src.shared.models.events import (
    ConnectionEvent,
    Direction,
    TrackedConnectionIdentifier,
)


@runtime_checkable
class EventStore(Protocol):
    """Key-indexed append/query store for connection events."""

    def insert(self, event: ConnectionEvent) -> int:
        """Store a new event and return its generated id."""
        ...

    def find_by_natural_key(
        self,
        service_name: str,
        event_direction: Direction,
        communication_type: str,
        connection_identifier: str,
    ) -> ConnectionEvent | None:
        ...

    def touch_observed_at(self, event: ConnectionEvent, timestamp: int) -> None:
        """Advance ``observed_at`` of the row matching *event*'s natural key."""
        ...

    def create_or_update(self, event: ConnectionEvent) -> None:
        """Insert *event*, or touch the stored row sharing its natural key."""
        ...

    def find_by_service_name(self, service_name: str) -> list[ConnectionEvent]:
        ...

    def find_by_direction_and_identifier(
        self,
        event_direction: Direction,
        communication_type: str,
        connection_identifier: str,
    ) -> list[ConnectionEvent]:
        """Events in *event_direction* for a type and identifier, any service."""
        ...

    def find_all_service_names(self) -> set[str]:
        ...

    def find_by_connection_identifier(
        self, connection_identifier: str
    ) -> list[ConnectionEvent]:
        ...

    def find_since(self, since: int, limit: int) -> list[ConnectionEvent]:
        """Newest-first events observed strictly after *since*."""
        ...

    def delete_older_than(self, timestamp: int) -> int:
        """Delete events observed strictly before *timestamp*; return the count."""
        ...


@runtime_checkable
class IdentifierStore(Protocol):
    """Store for declared connection identifiers."""

    def replace_for_service_and_type(
        self,
        service_name: str,
        communication_type: str,
        connection_identifiers: Sequence[str],
    ) -> int:
        """Atomically swap the batch stored for a service and type."""
        ...

    def find_all(self) -> list[TrackedConnectionIdentifier]:
        ...

    def find_by_service_name(
        self, service_name: str
    ) -> list[TrackedConnectionIdentifier]:
        ...

    def find_all_service_names(self) -> set[str]:
        ...
