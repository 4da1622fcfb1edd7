"""Event and tracked identifier stores."""

from src.elucidation.storage.event_store import ConnectionEventStore
from src.elucidation.storage.protocols import EventStore, IdentifierStore
from src.elucidation.storage.tracked_identifier_store import TrackedIdentifierStore

__all__ = [
    "ConnectionEventStore",
    "EventStore",
    "IdentifierStore",
    "TrackedIdentifierStore",
]
