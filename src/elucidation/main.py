"""Elucidation service FastAPI application."""
from __future__ import annotations

import asyncio
import time
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import AsyncGenerator

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.elucidation.definitions import (
    CommunicationDefinitionRegistry,
    default_definitions_and,
    for_dependent_direction,
)
from src.elucidation.jobs.archive import ArchiveEventsJob
from src.elucidation.jobs.poll import PollForEventsJob
from src.elucidation.jobs.scheduler import cancel_all, schedule
from src.elucidation.services.relationship_service import RelationshipService
from src.elucidation.services.tracked_identifier_service import (
    TrackedConnectionIdentifierService,
)
from src.elucidation.storage.event_store import ConnectionEventStore
from src.elucidation.storage.tracked_identifier_store import TrackedIdentifierStore
from src.shared.config import ElucidationConfig
from src.shared.constants import ELUCIDATION_PORT, ELUCIDATION_SERVICE_NAME, VERSION
from src.shared.db.connection import ConnectionPool
from src.shared.db.schema import init_elucidation_db
from src.shared.errors import register_exception_handlers
from src.shared.logging import TraceIDMiddleware, setup_logging

config = ElucidationConfig()
logger = setup_logging(ELUCIDATION_SERVICE_NAME, config.log_level)


def build_registry(cfg: ElucidationConfig) -> CommunicationDefinitionRegistry:
    """HTTP and JMS plus any configured direction-only communication types."""
    additional = [
        for_dependent_direction(communication_type, direction)
        for communication_type, direction in cfg.additional_communication_types.items()
    ]
    return CommunicationDefinitionRegistry(default_definitions_and(*additional))


def _start_jobs(app: FastAPI) -> list[asyncio.Task]:
    tasks = []

    archive_job = ArchiveEventsJob(
        app.state.event_store, timedelta(minutes=config.time_to_live_minutes)
    )
    tasks.append(schedule(
        "Event-Archive-Job",
        archive_job.run,
        config.archive_delay_minutes * 60,
        config.archive_interval_minutes * 60,
    ))

    if config.should_poll:
        endpoint = config.polling_endpoint
        poll_job = PollForEventsJob(
            lambda: endpoint,
            app.state.http_client,
            app.state.relationship_service,
        )
        tasks.append(schedule(
            "Event-Polling-Job",
            poll_job.run,
            config.polling_delay_minutes * 60,
            config.polling_interval_minutes * 60,
        ))
    else:
        logger.info("No polling endpoint configured; event polling disabled")

    return tasks


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan - initialize and cleanup resources."""
    app.state.start_time = time.time()

    app.state.pool = ConnectionPool(config.database_path)
    init_elucidation_db(app.state.pool)

    app.state.definitions = build_registry(config)
    app.state.event_store = ConnectionEventStore(app.state.pool)
    app.state.tracked_store = TrackedIdentifierStore(app.state.pool)
    app.state.relationship_service = RelationshipService(
        app.state.event_store, app.state.definitions
    )
    app.state.tracked_identifier_service = TrackedConnectionIdentifierService(
        app.state.tracked_store, app.state.event_store
    )
    app.state.http_client = httpx.Client(timeout=30.0)
    app.state.jobs = _start_jobs(app)

    logger.info(
        "Service started: name=%s version=%s db=%s communication_types=%s",
        ELUCIDATION_SERVICE_NAME, VERSION, config.database_path,
        ",".join(app.state.definitions.communication_types),
    )
    yield

    await cancel_all(app.state.jobs)
    app.state.http_client.close()
    if app.state.pool:
        app.state.pool.close()
    logger.info("Service stopped: name=%s", ELUCIDATION_SERVICE_NAME)


app = FastAPI(
    title="Elucidation",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(TraceIDMiddleware)
if config.cors_enabled:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_allowed_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
else:
    logger.warning("CORS is not enabled; skipping CORS middleware")
register_exception_handlers(app, include_db_errors=config.register_db_exception_handlers)

# Register all routers
from src.elucidation.routers.health import router as health_router
from src.elucidation.routers.relationships import router as relationships_router
from src.elucidation.routers.tracked_identifiers import router as tracked_identifiers_router

app.include_router(health_router)
app.include_router(relationships_router)
app.include_router(tracked_identifiers_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=ELUCIDATION_PORT)
