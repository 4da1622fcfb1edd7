"""Common Pydantic v2 data models."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class HealthStatus(BaseModel):
    """Health status of the service and its event store."""
    status: str = Field(
        default="healthy",
        pattern=r"^(healthy|degraded|unhealthy)$"
    )
    service_name: str
    version: str
    database: str = Field(
        default="connected",
        pattern=r"^(connected|disconnected)$"
    )
    uptime_seconds: float
    communication_types: list[str] = Field(default_factory=list)
    details: dict[str, Any] = Field(default_factory=dict)

    model_config = {"from_attributes": True}
