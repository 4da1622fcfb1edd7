"""Retention job deleting connection events older than the configured TTL."""
from __future__ import annotations

import logging
import sqlite3
from datetime import timedelta

from src.elucidation.storage.protocols import EventStore
from src.shared.utils import millis_ago

logger = logging.getLogger(__name__)


class ArchiveEventsJob:
    """Deletes events whose ``observed_at`` is older than *time_to_live*."""

    def __init__(self, event_store: EventStore, time_to_live: timedelta) -> None:
        self._events = event_store
        self._time_to_live = time_to_live

    @property
    def time_to_live(self) -> timedelta:
        return self._time_to_live

    def run(self) -> int:
        """Delete expired events and return how many were removed.

        Store failures are logged and reported as zero deletions so the
        schedule keeps running; the next run retries.
        """
        logger.debug("Cleaning up expired events")
        try:
            deleted = self._events.delete_older_than(millis_ago(self._time_to_live))
        except sqlite3.Error as exc:
            logger.error("Error when attempting to clean up events: %s", exc, exc_info=exc)
            return 0

        logger.info("Deleted %d expired events", deleted)
        return deleted
