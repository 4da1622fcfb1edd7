"""Tests for shared constants values."""
from __future__ import annotations

from src.shared.constants import (
    DB_BUSY_TIMEOUT_MS,
    ELUCIDATION_SERVICE_NAME,
    EVENTS_SINCE_LIMIT,
    HTTP_COMMUNICATION_TYPE,
    JMS_COMMUNICATION_TYPE,
    ORIGINATING_SERVICE_HEADER,
    POLLING_LOOKBACK_DAYS,
    UNKNOWN_SERVICE,
    VERSION,
)


class TestConstants:
    def test_version_is_semver(self):
        assert len(VERSION.split(".")) == 3

    def test_service_name(self):
        assert ELUCIDATION_SERVICE_NAME == "elucidation"

    def test_unknown_service_name(self):
        assert UNKNOWN_SERVICE == "unknown-service"

    def test_builtin_communication_types(self):
        assert HTTP_COMMUNICATION_TYPE == "HTTP"
        assert JMS_COMMUNICATION_TYPE == "JMS"

    def test_limits(self):
        assert EVENTS_SINCE_LIMIT == 100
        assert POLLING_LOOKBACK_DAYS == 7
        assert DB_BUSY_TIMEOUT_MS == 30000

    def test_originating_service_header(self):
        assert ORIGINATING_SERVICE_HEADER == "Elucidation-Originating-Service"
