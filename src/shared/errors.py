"""Custom exception classes and FastAPI exception handlers."""
from __future__ import annotations

import logging
import sqlite3

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from starlette.requests import Request

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base application error."""

    def __init__(self, detail: str, status_code: int = 500) -> None:
        self.detail = detail
        self.status_code = status_code
        super().__init__(detail)


class ValidationError(AppError):
    """Validation error (422)."""

    def __init__(self, detail: str = "Validation error") -> None:
        super().__init__(detail=detail, status_code=422)


class ParsingError(AppError):
    """Parsing error (400)."""

    def __init__(self, detail: str = "Parsing error") -> None:
        super().__init__(detail=detail, status_code=400)


class ConfigurationError(AppError):
    """Programming or wiring mistake detected at runtime (500)."""

    def __init__(self, detail: str = "Configuration error") -> None:
        super().__init__(detail=detail, status_code=500)


class UnknownCommunicationTypeError(ConfigurationError):
    """No communication definition is registered for a type."""

    def __init__(self, communication_type: str) -> None:
        self.communication_type = communication_type
        super().__init__(
            detail=f"No communication definition registered for type: {communication_type}"
        )


class DuplicateCommunicationTypeError(ConfigurationError):
    """Two communication definitions claim the same type."""

    def __init__(self, communication_type: str) -> None:
        self.communication_type = communication_type
        super().__init__(
            detail=f"Duplicate communication definition for type: {communication_type}"
        )


def register_exception_handlers(app: FastAPI, include_db_errors: bool = True) -> None:
    """Register custom exception handlers with a FastAPI app.

    When *include_db_errors* is set, SQLite failures are logged and answered
    with a generic 500 instead of bubbling up as an unhandled error.
    """

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
        )

    if include_db_errors:

        @app.exception_handler(sqlite3.Error)
        async def db_error_handler(request: Request, exc: sqlite3.Error) -> JSONResponse:
            logger.error(
                "Database error on %s %s: %s",
                request.method, request.url.path, exc,
                exc_info=exc,
            )
            return JSONResponse(
                status_code=500,
                content={"detail": "Database error"},
            )
