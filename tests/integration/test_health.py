"""
Integration tests for /healthz and /readyz
"""

import pytest
from fastapi.testclient import TestClient

from gamedb.db import StorageGateway
from gamedb.errors import StorageUnavailable
from gamedb.main import create_app

pytestmark = pytest.mark.integration


def test_healthz(client):
    response = client.get("/healthz")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["uptime"] >= 0


def test_readyz_healthy(client):
    response = client.get("/readyz", headers={"X-Trace-Id": "ready-1"})

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["db"] == "ok"
    assert "T" in data["ts"]
    assert data["traceId"] == "ready-1"


def test_readyz_degraded_when_ping_fails(app, client, monkeypatch):
    async def failing_health():
        return {"status": "error", "connected": False, "error": "connection refused"}

    monkeypatch.setattr(app.state.gateway, "check_health", failing_health)

    response = client.get("/readyz")

    assert response.status_code == 503
    data = response.json()
    assert data["status"] == "degraded"
    assert data["db"] == "error"
    assert data["db_error"] == "connection refused"


def test_readyz_before_startup(app):
    client = TestClient(app)  # no context manager: lifespan not run
    response = client.get("/readyz")
    assert response.status_code == 503
    assert response.json()["status"] == "not_ready"


def test_startup_fails_fast_without_database(test_config, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    gateway = StorageGateway(f"sqlite+aiosqlite:///{blocker / 'gamedb.db'}")
    app = create_app(test_config, gateway)

    with pytest.raises(StorageUnavailable):
        with TestClient(app):
            pass
