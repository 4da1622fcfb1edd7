"""Polling job replicating events from another Elucidation deployment."""
from __future__ import annotations

import logging
from datetime import timedelta
from typing import Callable

import httpx

from src.elucidation.services.relationship_service import RelationshipService
from src.shared.constants import POLLING_LOOKBACK_DAYS
from src.shared.models.events import ConnectionEvent
from src.shared.utils import millis_ago

logger = logging.getLogger(__name__)

_EVENTS_PATH = "/elucidate/events"


class PollForEventsJob:
    """Pulls recent events from a remote instance and records them locally.

    Keeps the newest ``observed_at`` it has seen and asks only for events after
    it on the next run. Not thread-safe: run it from a single scheduled task.
    """

    def __init__(
        self,
        endpoint_supplier: Callable[[], str],
        client: httpx.Client,
        relationship_service: RelationshipService,
    ) -> None:
        self._endpoint_supplier = endpoint_supplier
        self._client = client
        self._relationship_service = relationship_service
        self.last_event_timestamp = millis_ago(timedelta(days=POLLING_LOOKBACK_DAYS))

    def run(self) -> int:
        """Fetch and record new events; return how many were received.

        Raises :class:`httpx.HTTPError` when the remote call fails; the
        timestamp is left unchanged so the next run asks again.
        """
        url = self._endpoint_supplier().rstrip("/") + _EVENTS_PATH
        response = self._client.get(url, params={"since": self.last_event_timestamp})
        response.raise_for_status()

        events = [ConnectionEvent.model_validate(item) for item in response.json()]
        for event in events:
            self.last_event_timestamp = max(self.last_event_timestamp, event.observed_at)
            self._relationship_service.create_event(event.model_copy(update={"id": None}))

        logger.info("Polled %d events from %s", len(events), url)
        return len(events)
