"""Pytest configuration: per-test SQLite database & FastAPI TestClient."""

from __future__ import annotations

import os
from typing import Generator

import pytest
from fastapi.testclient import TestClient

# Override env BEFORE importing app modules so Settings picks up test values.
os.environ.update(
    {
        "APP_ENV": "test",
        "DATABASE_URL": "sqlite:///:memory:",
        "PUBLIC_BASE_URL": "",
        "LOG_LEVEL": "WARNING",
    }
)

from guardmap.config import Settings  # noqa: E402
from guardmap.main import create_app  # noqa: E402

PUBLIC_BASE_URL = "https://guardmap.test"


@pytest.fixture()
def settings(tmp_path) -> Settings:
    """Settings pointing at a fresh SQLite file; migrations run on startup."""
    return Settings(
        _env_file=None,
        app_env="test",
        log_level="WARNING",
        database_url=f"sqlite:///{tmp_path / 'guardmap.db'}",
        public_base_url=PUBLIC_BASE_URL,
        run_migrations_on_startup=True,
    )


@pytest.fixture()
def client(settings: Settings) -> Generator[TestClient, None, None]:
    """FastAPI TestClient; entering it runs the lifespan (engine + migrations)."""
    app = create_app(settings)
    with TestClient(app) as tc:
        yield tc


def _create(client: TestClient, path: str, payload: dict) -> int:
    resp = client.post(path, json=payload)
    assert resp.status_code == 200, resp.text
    return resp.json()["id"]


@pytest.fixture()
def make_location(client: TestClient):
    """Create a location through the RPC facade and return its id."""

    def _make(**overrides) -> int:
        payload = {
            "name": "Gate 1",
            "latitude": "24.7365",
            "longitude": "46.5762",
            "locationType": "security",
        }
        payload.update(overrides)
        return _create(client, "/rpc/locations.create", payload)

    return _make


@pytest.fixture()
def make_personnel(client: TestClient):
    """Create a person at a location through the RPC facade and return the id."""

    def _make(location_id: int, **overrides) -> int:
        payload = {"locationId": location_id, "name": "Ali", "role": "officer"}
        payload.update(overrides)
        return _create(client, "/rpc/personnel.create", payload)

    return _make
