"""Shared configuration management using pydantic-settings."""
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings

from src.shared.models.events import Direction


class SharedConfig(BaseSettings):
    """Base configuration shared across all services."""
    log_level: str = Field(default="info", validation_alias="LOG_LEVEL")
    database_path: str = Field(
        default="./data/service.db", validation_alias="DATABASE_PATH"
    )

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
    }


class ElucidationConfig(SharedConfig):
    """Configuration for the Elucidation service."""
    time_to_live_minutes: int = Field(
        default=7 * 24 * 60, ge=1, validation_alias="EVENT_TTL_MINUTES"
    )
    archive_delay_minutes: int = Field(
        default=1, ge=0, validation_alias="ARCHIVE_DELAY_MINUTES"
    )
    archive_interval_minutes: int = Field(
        default=60, ge=1, validation_alias="ARCHIVE_INTERVAL_MINUTES"
    )
    polling_endpoint: str | None = Field(
        default=None, validation_alias="POLLING_ENDPOINT"
    )
    polling_delay_minutes: int = Field(
        default=1, ge=0, validation_alias="POLLING_DELAY_MINUTES"
    )
    polling_interval_minutes: int = Field(
        default=1, ge=1, validation_alias="POLLING_INTERVAL_MINUTES"
    )
    cors_enabled: bool = Field(default=True, validation_alias="CORS_ENABLED")
    cors_allowed_origins: list[str] = Field(
        default_factory=lambda: ["*"], validation_alias="CORS_ALLOWED_ORIGINS"
    )
    register_db_exception_handlers: bool = Field(
        default=True, validation_alias="REGISTER_DB_EXCEPTION_HANDLERS"
    )
    # Communication type -> direction considered dependent, on top of HTTP/JMS.
    additional_communication_types: dict[str, Direction] = Field(
        default_factory=dict, validation_alias="ADDITIONAL_COMMUNICATION_TYPES"
    )

    @property
    def should_poll(self) -> bool:
        """Polling runs only when an endpoint to poll is configured."""
        return bool(self.polling_endpoint)
