"""Connection event and relationship endpoints."""
from __future__ import annotations

import asyncio

from fastapi import APIRouter, Query, Request, Response

from src.elucidation.services.relationship_service import RelationshipService
from src.shared.errors import ParsingError
from src.shared.models.events import ConnectionEvent, RelationshipDetails
from src.shared.models.relationships import (
    ServiceConnections,
    ServiceDependencies,
    ServiceDependencyDetails,
    ServiceDetails,
)

router = APIRouter(prefix="/elucidate", tags=["relationships"])


def _service(request: Request) -> RelationshipService:
    return request.app.state.relationship_service


def _parse_millis(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ParsingError(detail=f"'since' must be epoch milliseconds, got: {value}") from None


@router.post("/event", status_code=202)
async def record_event(event: ConnectionEvent, request: Request) -> Response:
    """Record an observed connection (or refresh it if already known)."""
    await asyncio.to_thread(_service(request).create_event, event)
    return Response(status_code=202)


@router.get("/events", response_model=list[ConnectionEvent])
async def view_events_since(
    request: Request,
    since: str = Query(...),
) -> list[ConnectionEvent]:
    """Most recent events observed after *since* (epoch millis)."""
    since_millis = _parse_millis(since)
    return await asyncio.to_thread(_service(request).list_events_since, since_millis)


@router.get("/service/{service_name}/events", response_model=list[ConnectionEvent])
async def view_events_for_service(service_name: str, request: Request) -> list[ConnectionEvent]:
    return await asyncio.to_thread(_service(request).list_events_for_service, service_name)


@router.get("/service/{service_name}/relationships", response_model=ServiceConnections)
async def calculate_relationships(service_name: str, request: Request) -> ServiceConnections:
    """Services connected to *service_name*, one summary each."""
    return await asyncio.to_thread(_service(request).build_relationships, service_name)


@router.get(
    "/service/{service_name}/relationship/{related_service_name}",
    response_model=list[RelationshipDetails],
)
async def view_relationship_details(
    service_name: str,
    related_service_name: str,
    request: Request,
) -> list[RelationshipDetails]:
    return await asyncio.to_thread(
        _service(request).find_relationship_details, service_name, related_service_name
    )


@router.get("/services", response_model=list[str])
async def current_service_names(request: Request) -> list[str]:
    names = await asyncio.to_thread(_service(request).current_service_names)
    return sorted(names)


@router.get("/services/details", response_model=list[ServiceDetails])
async def current_service_details(request: Request) -> list[ServiceDetails]:
    return await asyncio.to_thread(_service(request).current_service_details)


@router.get("/dependencies", response_model=list[ServiceDependencies])
async def calculate_all_dependencies(request: Request) -> list[ServiceDependencies]:
    """Dependencies of every known service."""
    return await asyncio.to_thread(_service(request).build_all_dependencies)


@router.get("/dependencies/details", response_model=list[ServiceDependencyDetails])
async def calculate_all_dependencies_with_details(
    request: Request,
) -> list[ServiceDependencyDetails]:
    return await asyncio.to_thread(_service(request).build_all_dependencies_with_details)


@router.get(
    "/connectionIdentifier/{connection_identifier:path}/events",
    response_model=list[ConnectionEvent],
)
async def view_events_for_connection_identifier(
    connection_identifier: str,
    request: Request,
) -> list[ConnectionEvent]:
    """Every event, any service or direction, for a connection identifier."""
    return await asyncio.to_thread(
        _service(request).find_all_events_by_connection_identifier, connection_identifier
    )
