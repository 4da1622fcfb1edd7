"""Health check endpoint for the Elucidation service."""
from __future__ import annotations
import asyncio
import time
import sqlite3

from fastapi import APIRouter, Request

from src.shared.models.common import HealthStatus
from src.shared.constants import VERSION, ELUCIDATION_SERVICE_NAME

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", response_model=HealthStatus)
async def health(request: Request) -> HealthStatus:
    """Health check endpoint."""

    def _check() -> HealthStatus:
        db_status = "connected"
        details: dict[str, int] = {}
        event_store = getattr(request.app.state, "event_store", None)
        if event_store:
            try:
                details["connection_events"] = event_store.count()
            except sqlite3.Error:
                db_status = "disconnected"
        else:
            db_status = "disconnected"

        registry = getattr(request.app.state, "definitions", None)
        start_time = getattr(request.app.state, "start_time", time.time())

        return HealthStatus(
            status="healthy" if db_status == "connected" else "degraded",
            service_name=ELUCIDATION_SERVICE_NAME,
            version=VERSION,
            database=db_status,
            uptime_seconds=time.time() - start_time,
            communication_types=registry.communication_types if registry else [],
            details=details,
        )

    return await asyncio.to_thread(_check)
