"""Shared test fixtures for the Elucidation test suite."""
from __future__ import annotations

from pathlib import Path
from typing import Generator

import pytest

from src.elucidation.definitions import CommunicationDefinitionRegistry
from src.elucidation.storage.event_store import ConnectionEventStore
from src.elucidation.storage.tracked_identifier_store import TrackedIdentifierStore
from src.shared.db.connection import ConnectionPool
from src.shared.db.schema import init_elucidation_db
from src.shared.models.common import HealthStatus
from tests.fixtures import FakeEventStore, FakeIdentifierStore


@pytest.fixture
def tmp_db_path(tmp_path: Path) -> Path:
    """Provide a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
def connection_pool(tmp_db_path: Path) -> Generator[ConnectionPool, None, None]:
    """Provide a ConnectionPool with the Elucidation schema."""
    pool = ConnectionPool(tmp_db_path)
    init_elucidation_db(pool)
    yield pool
    pool.close()


@pytest.fixture
def event_store(connection_pool: ConnectionPool) -> ConnectionEventStore:
    return ConnectionEventStore(connection_pool)


@pytest.fixture
def tracked_store(connection_pool: ConnectionPool) -> TrackedIdentifierStore:
    return TrackedIdentifierStore(connection_pool)


@pytest.fixture
def fake_event_store() -> FakeEventStore:
    return FakeEventStore()


@pytest.fixture
def fake_identifier_store() -> FakeIdentifierStore:
    return FakeIdentifierStore()


@pytest.fixture
def registry() -> CommunicationDefinitionRegistry:
    """HTTP and JMS definitions."""
    return CommunicationDefinitionRegistry.with_defaults()


@pytest.fixture
def sample_health_status() -> HealthStatus:
    """Provide a sample HealthStatus instance."""
    return HealthStatus(
        status="healthy",
        service_name="elucidation",
        version="1.0.0",
        database="connected",
        uptime_seconds=120.5,
        communication_types=["HTTP", "JMS"],
    )


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set mock environment variables for config testing."""
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("DATABASE_PATH", "/tmp/test.db")
    monkeypatch.setenv("EVENT_TTL_MINUTES", "30")
    monkeypatch.setenv("POLLING_ENDPOINT", "http://elucidation-east:8000")
    monkeypatch.setenv("ADDITIONAL_COMMUNICATION_TYPES", '{"Kafka": "INBOUND"}')
