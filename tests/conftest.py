from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Make the guardian package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from guardian.app import create_app  # noqa: E402
from guardian.core import config as core_config  # noqa: E402
from guardian.db import models  # noqa: E402
from guardian.db import session as db_session  # noqa: E402

_ENV_DEFAULTS = {
    "JWT_SECRET": "test-secret-with-at-least-32-bytes!!",
    "AUTHORIZED_CLIENT_IPS": "",
    "MOBILERUN_API_KEY": "",
    "MOBILERUN_DEVICE_ID": "",
    "AGENT_SKIP_NORMAL_DISPATCH": "true",
    "AGENT_TASK_TIMEOUT_SECONDS": "0",
    "AGENT_VISION": "false",
    "EMERGENCY_CONTACT_NAME": "Jane Doe",
}


def _reset_caches() -> None:
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture()
def db_env(tmp_path, monkeypatch):
    """Temporary SQLite database plus a clean settings cache."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    for key, value in _ENV_DEFAULTS.items():
        monkeypatch.setenv(key, value)
    _reset_caches()

    engine = db_session.get_engine()
    models.Base.metadata.drop_all(bind=engine)
    models.Base.metadata.create_all(bind=engine)

    yield db_file

    models.Base.metadata.drop_all(bind=engine)
    engine.dispose()
    _reset_caches()


@pytest.fixture()
def make_client(db_env, monkeypatch):
    """Build a TestClient after applying extra environment overrides."""

    def _make(raise_server_exceptions: bool = True, **env: str) -> TestClient:
        for key, value in env.items():
            monkeypatch.setenv(key, value)
        core_config.get_settings.cache_clear()
        return TestClient(create_app(), raise_server_exceptions=raise_server_exceptions)

    return _make


@pytest.fixture()
def client(make_client) -> TestClient:
    return make_client()


def register(client: TestClient, email: str = "owner@example.com", name: str = "Owner", password: str = "secret123") -> dict:
    response = client.post("/auth/register", json={"email": email, "name": name, "password": password})
    assert response.status_code == 201, response.text
    return response.json()


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
