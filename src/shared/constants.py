"""Shared constants used across the service and the client library."""
from __future__ import annotations

# Application version
VERSION: str = "1.0.0"

# Default HTTP port
ELUCIDATION_PORT: int = 8004

# Database settings
DB_BUSY_TIMEOUT_MS: int = 30000

# Service names
ELUCIDATION_SERVICE_NAME: str = "elucidation"

# Counterpart name used when no service reported the other side of a connection
UNKNOWN_SERVICE: str = "unknown-service"

# Built-in communication types
HTTP_COMMUNICATION_TYPE: str = "HTTP"
JMS_COMMUNICATION_TYPE: str = "JMS"

# Maximum number of events returned by the "events since" query
EVENTS_SINCE_LIMIT: int = 100

# How far back a freshly started polling job asks for events
POLLING_LOOKBACK_DAYS: int = 7

# Header a caller may set so the callee records the OUTBOUND side on its behalf
ORIGINATING_SERVICE_HEADER: str = "Elucidation-Originating-Service"
