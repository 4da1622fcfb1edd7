"""Connection event Pydantic v2 data models.

Field names are snake_case in Python and camelCase on the wire
(``serviceName``, ``eventDirection``, ...), so reporters written against the
JSON shape keep working. Both spellings are accepted on input.
"""
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from src.shared.utils import now_millis

WIRE_CONFIG = ConfigDict(
    from_attributes=True,
    populate_by_name=True,
    alias_generator=to_camel,
)


class Direction(str, Enum):
    """Side of a connection an event was observed on."""
    INBOUND = "INBOUND"
    OUTBOUND = "OUTBOUND"

    def opposite(self) -> Direction:
        if self is Direction.INBOUND:
            return Direction.OUTBOUND
        return Direction.INBOUND


def _require_non_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


class ConnectionEvent(BaseModel):
    """An observed connection within a given service.

    Identity is the natural key ``(service_name, event_direction,
    communication_type, connection_identifier)``; ``id`` and ``observed_at``
    do not take part in it.
    """
    id: int | None = None
    service_name: str
    event_direction: Direction
    communication_type: str
    connection_identifier: str
    observed_at: int = Field(default_factory=now_millis)

    model_config = WIRE_CONFIG

    @field_validator("service_name", "communication_type", "connection_identifier")
    @classmethod
    def not_blank(cls, value: str) -> str:
        return _require_non_blank(value)

    @property
    def natural_key(self) -> tuple[str, Direction, str, str]:
        return (
            self.service_name,
            self.event_direction,
            self.communication_type,
            self.connection_identifier,
        )


class TrackedConnectionIdentifier(BaseModel):
    """A declared connection identifier, used to find ones that are never called.

    Mostly useful for HTTP: messaging protocols report both the produce and the
    consume side, but an endpoint nobody calls never produces an event.
    """
    id: int | None = None
    service_name: str
    communication_type: str
    connection_identifier: str

    model_config = WIRE_CONFIG

    @field_validator("service_name", "communication_type", "connection_identifier")
    @classmethod
    def not_blank(cls, value: str) -> str:
        return _require_non_blank(value)


class RelationshipDetails(BaseModel):
    """One correlated connection between two named services."""
    communication_type: str
    connection_identifier: str
    event_direction: Direction
    last_observed: int

    model_config = WIRE_CONFIG
