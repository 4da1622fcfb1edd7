"""Relationship assembly: connections, dependencies and relationship details."""
from __future__ import annotations

import logging
from collections import Counter

from src.elucidation.definitions import CommunicationDefinitionRegistry
from src.elucidation.services.correlation import CorrelationEngine
from src.elucidation.storage.protocols import EventStore
from src.shared.constants import EVENTS_SINCE_LIMIT
from src.shared.models.events import ConnectionEvent, Direction, RelationshipDetails
from src.shared.models.relationships import (
    ConnectionSummary,
    DependencyRelationshipDetails,
    ServiceConnections,
    ServiceDependencies,
    ServiceDependencyDetails,
    ServiceDetails,
)

logger = logging.getLogger(__name__)


class RelationshipService:
    """Builds relationship reports from the events in an event store.

    Holds no state besides its collaborators; every call re-reads the store,
    issuing one listing query followed by one counterpart query per event.
    """

    def __init__(
        self,
        event_store: EventStore,
        definitions: CommunicationDefinitionRegistry,
    ) -> None:
        self._events = event_store
        self._definitions = definitions
        self._correlation = CorrelationEngine(event_store)

    # ------------------------------------------------------------------
    # events
    # ------------------------------------------------------------------

    def create_event(self, event: ConnectionEvent) -> None:
        """Record *event*, or refresh ``observed_at`` if its natural key exists."""
        self._events.create_or_update(event)

    def list_events_since(self, since: int) -> list[ConnectionEvent]:
        return self._events.find_since(since, EVENTS_SINCE_LIMIT)

    def list_events_for_service(self, service_name: str) -> list[ConnectionEvent]:
        return self._events.find_by_service_name(service_name)

    def find_all_events_by_connection_identifier(
        self, connection_identifier: str
    ) -> list[ConnectionEvent]:
        return self._events.find_by_connection_identifier(connection_identifier)

    def current_service_names(self) -> set[str]:
        return self._events.find_all_service_names()

    def current_service_details(self) -> list[ServiceDetails]:
        """Per-service event counts by direction and communication type."""
        return [
            self._build_details(service_name)
            for service_name in sorted(self.current_service_names())
        ]

    def _build_details(self, service_name: str) -> ServiceDetails:
        events = self._events.find_by_service_name(service_name)
        by_direction = Counter(event.event_direction for event in events)
        by_type = Counter(event.communication_type for event in events)

        return ServiceDetails(
            service_name=service_name,
            inbound_events=by_direction[Direction.INBOUND],
            outbound_events=by_direction[Direction.OUTBOUND],
            communication_types=dict(by_type),
        )

    # ------------------------------------------------------------------
    # connections
    # ------------------------------------------------------------------

    def build_relationships(self, service_name: str) -> ServiceConnections:
        """Summarise every service connected to *service_name*.

        A service seen on both sides collapses into one summary with both
        flags set.
        """
        events = self._events.find_by_service_name(service_name)

        inbound_connections = self._correlation.counterpart_service_names(
            e for e in events if e.event_direction is Direction.INBOUND
        )
        outbound_connections = self._correlation.counterpart_service_names(
            e for e in events if e.event_direction is Direction.OUTBOUND
        )

        summaries: dict[str, ConnectionSummary] = {}
        for connected in inbound_connections | outbound_connections:
            summaries[connected] = ConnectionSummary(
                service_name=connected,
                has_inbound=connected in inbound_connections,
                has_outbound=connected in outbound_connections,
            )

        return ServiceConnections(
            service_name=service_name,
            children=list(summaries.values()),
        )

    # ------------------------------------------------------------------
    # dependencies
    # ------------------------------------------------------------------

    def build_all_dependencies(self) -> list[ServiceDependencies]:
        """Dependencies of every known service, including those with none."""
        return [
            self._find_dependencies(service_name)
            for service_name in sorted(self._events.find_all_service_names())
        ]

    def _find_dependencies(self, service_name: str) -> ServiceDependencies:
        dependent_events = [
            event
            for event in self._events.find_by_service_name(service_name)
            if self._definitions.is_dependent_event(event)
        ]
        return ServiceDependencies(
            service_name=service_name,
            dependencies=self._correlation.counterpart_service_names(dependent_events),
        )

    def build_all_dependencies_with_details(self) -> list[ServiceDependencyDetails]:
        """Every dependency edge expanded into its relationship details."""
        return [
            ServiceDependencyDetails(
                service_name=service.service_name,
                dependencies=[
                    DependencyRelationshipDetails(
                        service_name=dependency,
                        details=self.find_relationship_details(
                            service.service_name, dependency
                        ),
                    )
                    for dependency in sorted(service.dependencies)
                ],
            )
            for service in self.build_all_dependencies()
        ]

    # ------------------------------------------------------------------
    # details
    # ------------------------------------------------------------------

    def find_relationship_details(
        self, from_service: str, to_service: str
    ) -> list[RelationshipDetails]:
        """Connections between *from_service* and *to_service*.

        *to_service* is matched case-insensitively. The reported direction is
        the counterpart's, i.e. as observed by *to_service*. Results keep the
        order the store returned the events in.
        """
        target = to_service.lower()
        details: list[RelationshipDetails] = []

        for event in self._events.find_by_service_name(from_service):
            for counterpart in self._correlation.find_counterparts(event):
                if counterpart.service_name.lower() != target:
                    continue
                details.append(
                    RelationshipDetails(
                        communication_type=counterpart.communication_type,
                        connection_identifier=counterpart.connection_identifier,
                        event_direction=counterpart.event_direction,
                        last_observed=counterpart.observed_at,
                    )
                )

        return details
