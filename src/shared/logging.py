"""Structured JSON logging with trace_id support."""
from __future__ import annotations

import contextvars
import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

TRACE_ID_HEADER = "X-Trace-ID"

# Context variable for trace_id
trace_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "trace_id", default=""
)


class JSONFormatter(logging.Formatter):
    """Render log records as single-line JSON documents."""

    def __init__(self, service_name: str = "unknown") -> None:
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "service_name": self.service_name,
            "logger": record.name,
            "trace_id": trace_id_var.get(""),
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = str(record.exc_info[1])
        return json.dumps(log_entry)


def setup_logging(service_name: str, level: str = "INFO") -> logging.Logger:
    """Configure structured JSON logging for a service.

    The handler is attached to the service logger and to the ``src`` package
    logger so that module-level loggers (``logging.getLogger(__name__)``)
    emit in the same format.

    Args:
        service_name: Name of the service for log entries.
        level: Log level string (e.g. "INFO", "DEBUG").

    Returns:
        Configured service logger.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    formatter = JSONFormatter(service_name=service_name)

    for name in (service_name, "src"):
        target = logging.getLogger(name)
        target.setLevel(numeric_level)
        target.handlers.clear()
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        target.addHandler(handler)
        target.propagate = False

    return logging.getLogger(service_name)


class TraceIDMiddleware(BaseHTTPMiddleware):
    """Sets a trace_id per request, reusing the caller's X-Trace-ID if sent."""

    async def dispatch(self, request: Request, call_next: Any) -> Response:
        request_trace_id = request.headers.get(TRACE_ID_HEADER) or str(uuid.uuid4())
        trace_id_var.set(request_trace_id)
        response = await call_next(request)
        response.headers[TRACE_ID_HEADER] = request_trace_id
        return response
