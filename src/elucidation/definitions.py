"""Communication definitions and the registry that selects them by type.

A communication definition decides, for one protocol, whether an event means
"this service depends on some other service". For request/response protocols
such as HTTP that is the OUTBOUND side (we need whoever we call); for async
messaging it is the INBOUND side (we need whoever produced what we consume).
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Protocol, runtime_checkable

from src.shared.constants import HTTP_COMMUNICATION_TYPE, JMS_COMMUNICATION_TYPE
from src.shared.errors import (
    DuplicateCommunicationTypeError,
    UnknownCommunicationTypeError,
)
from src.shared.models.events import ConnectionEvent, Direction


@runtime_checkable
class CommunicationDefinition(Protocol):
    """Protocol for per-protocol dependency semantics."""

    @property
    def communication_type(self) -> str:
        """Stable name of the communication type, e.g. ``"HTTP"``.

        The name is stored with every event, so it should not change once
        events have been recorded.
        """
        ...

    def is_dependent_event(self, event: ConnectionEvent) -> bool:
        """Return True if *event* means its service depends on another one."""
        ...


@dataclass(frozen=True)
class DirectionalCommunicationDefinition:
    """Definition where the event direction alone decides dependency."""
    communication_type: str
    dependent_direction: Direction

    def is_dependent_event(self, event: ConnectionEvent) -> bool:
        return event.event_direction is self.dependent_direction


class HttpCommunicationDefinition(DirectionalCommunicationDefinition):
    """HTTP: calling another service makes us depend on it."""

    def __init__(self) -> None:
        super().__init__(HTTP_COMMUNICATION_TYPE, Direction.OUTBOUND)


class AsyncMessagingCommunicationDefinition(DirectionalCommunicationDefinition):
    """Async messaging: consuming a message makes us depend on its producer.

    Publishing is not dependent; nobody has to consume what we publish.
    """

    def __init__(self, communication_type: str) -> None:
        super().__init__(communication_type, Direction.INBOUND)


class JmsCommunicationDefinition(AsyncMessagingCommunicationDefinition):

    def __init__(self) -> None:
        super().__init__(JMS_COMMUNICATION_TYPE)


def for_dependent_direction(
    communication_type: str, dependent_direction: Direction
) -> CommunicationDefinition:
    """Build a definition whose dependent events are those in *dependent_direction*."""
    return DirectionalCommunicationDefinition(communication_type, dependent_direction)


def default_definitions() -> tuple[CommunicationDefinition, ...]:
    """Return the built-in HTTP and JMS definitions."""
    return (HttpCommunicationDefinition(), JmsCommunicationDefinition())


def default_definitions_and(
    *additional: CommunicationDefinition,
) -> tuple[CommunicationDefinition, ...]:
    """Return the built-in definitions followed by *additional* ones."""
    return default_definitions() + tuple(additional)


class CommunicationDefinitionRegistry:
    """Immutable lookup of communication definitions by type.

    Built once at startup. Registering two definitions with the same type
    raises :class:`DuplicateCommunicationTypeError`; looking up a type that
    was never registered raises :class:`UnknownCommunicationTypeError`.
    """

    def __init__(self, definitions: Iterable[CommunicationDefinition]) -> None:
        by_type: dict[str, CommunicationDefinition] = {}
        for definition in definitions:
            communication_type = definition.communication_type
            if communication_type in by_type:
                raise DuplicateCommunicationTypeError(communication_type)
            by_type[communication_type] = definition
        self._definitions: Mapping[str, CommunicationDefinition] = MappingProxyType(by_type)

    @classmethod
    def with_defaults(cls) -> CommunicationDefinitionRegistry:
        return cls(default_definitions())

    def __contains__(self, communication_type: object) -> bool:
        return communication_type in self._definitions

    def __iter__(self) -> Iterator[str]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def get_definition(self, communication_type: str) -> CommunicationDefinition:
        """Return the definition for *communication_type* or fail fast."""
        try:
            return self._definitions[communication_type]
        except KeyError:
            raise UnknownCommunicationTypeError(communication_type) from None

    def is_dependent_event(self, event: ConnectionEvent) -> bool:
        """Classify *event* with the definition registered for its type."""
        return self.get_definition(event.communication_type).is_dependent_event(event)

    @property
    def communication_types(self) -> list[str]:
        return list(self._definitions)
