"""
Pytest configuration and fixtures
"""

from pathlib import Path

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from gamedb.config import Config
from gamedb.db import StorageGateway
from gamedb.main import create_app


@pytest.fixture
def test_db_url(tmp_path: Path) -> str:
    """SQLite file private to one test"""
    return f"sqlite+aiosqlite:///{tmp_path / 'gamedb_test.db'}"


@pytest.fixture
def test_config(test_db_url) -> Config:
    return Config(DATABASE_URL=test_db_url, DB_CREATE_SCHEMA=True)


@pytest.fixture
def gateway(test_config) -> StorageGateway:
    return StorageGateway.from_config(test_config)


@pytest_asyncio.fixture
async def connected_gateway(gateway):
    """Gateway with the catalog table created"""
    await gateway.connect()
    yield gateway
    await gateway.close()


@pytest.fixture
def app(test_config, gateway):
    return create_app(test_config, gateway)


@pytest.fixture
def client(app):
    """Test client with startup/shutdown hooks run"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def sample_game():
    """Sample catalog entry without an id"""
    return {"gamename": "Portal", "price": 9.99, "imageurl": "x.png"}


# Test markers
def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, isolated)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (database, HTTP)"
    )
