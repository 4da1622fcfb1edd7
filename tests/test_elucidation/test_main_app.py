"""Tests for the assembled Elucidation application and its lifespan."""
from __future__ import annotations

import sys

import pytest
from fastapi.testclient import TestClient

from src.elucidation.definitions import CommunicationDefinitionRegistry
from src.shared.config import ElucidationConfig
from src.shared.errors import DuplicateCommunicationTypeError
from src.shared.models.events import Direction


def _load_app(monkeypatch: pytest.MonkeyPatch, tmp_path, **env):
    monkeypatch.setenv("DATABASE_PATH", str(tmp_path / "app.db"))
    for name in ("POLLING_ENDPOINT", "ADDITIONAL_COMMUNICATION_TYPES", "CORS_ENABLED"):
        monkeypatch.delenv(name, raising=False)
    for name, value in env.items():
        monkeypatch.setenv(name, value)
    # Clear cached modules so the app picks up the new environment
    for mod_name in list(sys.modules.keys()):
        if mod_name.startswith("src.elucidation.main"):
            del sys.modules[mod_name]
    from src.elucidation.main import app
    return app


class TestApplication:
    def test_lifespan_wires_services(self, monkeypatch, tmp_path):
        app = _load_app(monkeypatch, tmp_path)

        with TestClient(app) as client:
            assert client.get("/api/health").json()["status"] == "healthy"
            assert isinstance(app.state.definitions, CommunicationDefinitionRegistry)
            assert len(app.state.jobs) == 1

            response = client.post("/elucidate/event", json={
                "serviceName": "a",
                "eventDirection": "OUTBOUND",
                "communicationType": "HTTP",
                "connectionIdentifier": "GET /x",
            })
            assert response.status_code == 202
            assert client.get("/elucidate/services").json() == ["a"]

        assert all(task.done() for task in app.state.jobs)
        assert (tmp_path / "app.db").exists()

    def test_polling_job_scheduled_when_configured(self, monkeypatch, tmp_path):
        app = _load_app(monkeypatch, tmp_path, POLLING_ENDPOINT="http://remote:8080")

        with TestClient(app):
            assert len(app.state.jobs) == 2

    def test_additional_communication_types(self, monkeypatch, tmp_path):
        app = _load_app(
            monkeypatch, tmp_path, ADDITIONAL_COMMUNICATION_TYPES='{"Kafka": "INBOUND"}'
        )

        with TestClient(app) as client:
            types = client.get("/api/health").json()["communication_types"]
            assert types == ["HTTP", "JMS", "Kafka"]

    def test_cors_headers(self, monkeypatch, tmp_path):
        app = _load_app(monkeypatch, tmp_path)

        with TestClient(app) as client:
            response = client.get("/api/health", headers={"Origin": "https://ui.example"})
            assert response.headers["access-control-allow-origin"] == "*"

    def test_cors_disabled(self, monkeypatch, tmp_path):
        app = _load_app(monkeypatch, tmp_path, CORS_ENABLED="false")

        with TestClient(app) as client:
            response = client.get("/api/health", headers={"Origin": "https://ui.example"})
            assert "access-control-allow-origin" not in response.headers


class TestBuildRegistry:
    def test_defaults_only(self, monkeypatch, tmp_path):
        _load_app(monkeypatch, tmp_path)
        from src.elucidation.main import build_registry

        registry = build_registry(ElucidationConfig())
        assert registry.communication_types == ["HTTP", "JMS"]

    def test_duplicate_of_builtin_rejected(self, monkeypatch, tmp_path):
        _load_app(monkeypatch, tmp_path)
        from src.elucidation.main import build_registry

        config = ElucidationConfig(additional_communication_types={"HTTP": Direction.INBOUND})
        with pytest.raises(DuplicateCommunicationTypeError):
            build_registry(config)
