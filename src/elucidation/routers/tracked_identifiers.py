"""Tracked identifier and unused identifier endpoints."""
from __future__ import annotations
import asyncio

from fastapi import APIRouter, Body, Request, Response

from src.elucidation.services.tracked_identifier_service import (
    TrackedConnectionIdentifierService,
)
from src.shared.errors import ValidationError
from src.shared.models.events import TrackedConnectionIdentifier
from src.shared.models.relationships import UnusedServiceIdentifiers

router = APIRouter(prefix="/elucidate", tags=["tracked-identifiers"])


def _service(request: Request) -> TrackedConnectionIdentifierService:
    return request.app.state.tracked_identifier_service


@router.post("/trackedIdentifier/{service_name}/{communication_type}", status_code=202)
async def load_tracked_identifiers(
    service_name: str,
    communication_type: str,
    request: Request,
    connection_identifiers: list[str] = Body(...),
) -> Response:
    """Replace the identifiers tracked for a service and communication type."""
    if not connection_identifiers:
        raise ValidationError(detail="At least one connection identifier is required")
    if any(not identifier.strip() for identifier in connection_identifiers):
        raise ValidationError(detail="Connection identifiers must not be blank")

    await asyncio.to_thread(
        _service(request).load_new_identifiers,
        service_name,
        communication_type,
        connection_identifiers,
    )
    return Response(status_code=202)


@router.get("/trackedIdentifiers", response_model=list[TrackedConnectionIdentifier])
async def all_tracked_identifiers(request: Request) -> list[TrackedConnectionIdentifier]:
    return await asyncio.to_thread(_service(request).all_tracked_connection_identifiers)


@router.get("/connectionIdentifier/unused", response_model=list[UnusedServiceIdentifiers])
async def find_unused_identifiers(request: Request) -> list[UnusedServiceIdentifiers]:
    """Services with identifiers that nobody consumes."""
    return await asyncio.to_thread(_service(request).find_unused_identifiers)


@router.get(
    "/connectionIdentifier/{service_name}/unused",
    response_model=UnusedServiceIdentifiers,
)
async def find_unused_identifiers_for_service(
    service_name: str,
    request: Request,
) -> UnusedServiceIdentifiers:
    return await asyncio.to_thread(
        _service(request).find_unused_identifiers_for_service, service_name
    )
