"""In-memory stores and event builders for engine tests.

The fakes follow the SQLite stores closely enough (insertion order, natural
key merging) that the engine can be exercised without a database.
"""

from __future__ import annotations

from typing import Sequence

from src.shared.models.events import (
    ConnectionEvent,
    Direction,
    TrackedConnectionIdentifier,
)
from src.shared.utils import now_millis


def make_event(
    service_name: str,
    direction: Direction,
    connection_identifier: str,
    communication_type: str = "HTTP",
    observed_at: int | None = None,
) -> ConnectionEvent:
    """Build a ConnectionEvent with sensible defaults."""
    return ConnectionEvent(
        service_name=service_name,
        event_direction=direction,
        communication_type=communication_type,
        connection_identifier=connection_identifier,
        observed_at=observed_at if observed_at is not None else now_millis(),
    )


class FakeEventStore:
    """List-backed event store."""

    def __init__(self, events: Sequence[ConnectionEvent] = ()) -> None:
        self.events: list[ConnectionEvent] = []
        self.queries = 0
        for event in events:
            self.insert(event)

    def insert(self, event: ConnectionEvent) -> int:
        new_id = len(self.events) + 1
        self.events.append(event.model_copy(update={"id": new_id}))
        return new_id

    def find_by_natural_key(self, service_name, event_direction, communication_type,
                            connection_identifier):
        key = (service_name, event_direction, communication_type, connection_identifier)
        for event in self.events:
            if event.natural_key == key:
                return event
        return None

    def touch_observed_at(self, event: ConnectionEvent, timestamp: int) -> None:
        for index, stored in enumerate(self.events):
            if stored.natural_key == event.natural_key:
                self.events[index] = stored.model_copy(
                    update={"observed_at": max(stored.observed_at, timestamp)}
                )

    def create_or_update(self, event: ConnectionEvent) -> None:
        if self.find_by_natural_key(*event.natural_key) is None:
            self.insert(event)
        else:
            self.touch_observed_at(event, now_millis())

    def find_by_service_name(self, service_name: str) -> list[ConnectionEvent]:
        self.queries += 1
        return [e for e in self.events if e.service_name == service_name]

    def find_by_direction_and_identifier(self, event_direction, communication_type,
                                         connection_identifier):
        self.queries += 1
        return [
            e for e in self.events
            if e.event_direction is event_direction
            and e.communication_type == communication_type
            and e.connection_identifier == connection_identifier
        ]

    def find_all_service_names(self) -> set[str]:
        return {e.service_name for e in self.events}

    def find_by_connection_identifier(self, connection_identifier: str):
        return [e for e in self.events if e.connection_identifier == connection_identifier]

    def find_since(self, since: int, limit: int) -> list[ConnectionEvent]:
        newer = [e for e in self.events if e.observed_at > since]
        newer.sort(key=lambda e: e.observed_at, reverse=True)
        return newer[:limit]

    def delete_older_than(self, timestamp: int) -> int:
        kept = [e for e in self.events if e.observed_at >= timestamp]
        deleted = len(self.events) - len(kept)
        self.events = kept
        return deleted


class FakeIdentifierStore:
    """List-backed tracked identifier store."""

    def __init__(self) -> None:
        self.identifiers: list[TrackedConnectionIdentifier] = []

    def replace_for_service_and_type(self, service_name, communication_type,
                                     connection_identifiers) -> int:
        self.identifiers = [
            t for t in self.identifiers
            if not (t.service_name == service_name
                    and t.communication_type == communication_type)
        ]
        for identifier in connection_identifiers:
            self.identifiers.append(
                TrackedConnectionIdentifier(
                    id=len(self.identifiers) + 1,
                    service_name=service_name,
                    communication_type=communication_type,
                    connection_identifier=identifier,
                )
            )
        return len(connection_identifiers)

    def find_all(self) -> list[TrackedConnectionIdentifier]:
        return list(self.identifiers)

    def find_by_service_name(self, service_name: str):
        return [t for t in self.identifiers if t.service_name == service_name]

    def find_all_service_names(self) -> set[str]:
        return {t.service_name for t in self.identifiers}
