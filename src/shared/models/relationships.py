"""Derived relationship report models.

None of these are persisted; they are rebuilt from the event store on every
query.
"""
from __future__ import annotations

from pydantic import BaseModel, Field

from src.shared.models.events import WIRE_CONFIG, RelationshipDetails


class ConnectionSummary(BaseModel):
    """A service connected to the one being inspected, with the sides seen."""
    service_name: str
    has_inbound: bool = False
    has_outbound: bool = False

    model_config = WIRE_CONFIG


class ServiceConnections(BaseModel):
    """A service and one summary per related service."""
    service_name: str
    children: list[ConnectionSummary] = Field(default_factory=list)

    model_config = WIRE_CONFIG


class ServiceDependencies(BaseModel):
    """Names of the services a service depends on."""
    service_name: str
    dependencies: set[str] = Field(default_factory=set)

    model_config = WIRE_CONFIG


class DependencyRelationshipDetails(BaseModel):
    """A single dependency expanded into its relationship details."""
    service_name: str
    details: list[RelationshipDetails] = Field(default_factory=list)

    model_config = WIRE_CONFIG


class ServiceDependencyDetails(BaseModel):
    service_name: str
    dependencies: list[DependencyRelationshipDetails] = Field(default_factory=list)

    model_config = WIRE_CONFIG


class ServiceDetails(BaseModel):
    """Event counts for a service, by direction and communication type."""
    service_name: str
    inbound_events: int = 0
    outbound_events: int = 0
    communication_types: dict[str, int] = Field(default_factory=dict)

    model_config = WIRE_CONFIG


class UnusedIdentifier(BaseModel):
    communication_type: str
    connection_identifier: str

    model_config = WIRE_CONFIG


class UnusedServiceIdentifiers(BaseModel):
    """Identifiers of a service that no other service consumes."""
    service_name: str
    identifiers: list[UnusedIdentifier] = Field(default_factory=list)

    model_config = WIRE_CONFIG
