"""Shared fixtures: a throwaway SQLite backend, local auth and an API client."""

import pytest
from fastapi.testclient import TestClient

from forge.api.middleware.rate_limit import limiter
from forge.config import Settings
from forge.db.backends import SQLiteBackend
from forge.main import create_app
from forge.services.auth_service import LocalAuthService


TEST_PASSWORD = "correct-horse-battery"


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings isolated from the developer's environment and .env file."""
    return Settings(
        _env_file=None,
        backend="sqlite",
        database_path=tmp_path / "forge.db",
        rate_limit_enabled=False,
    )


@pytest.fixture
def backend(settings) -> SQLiteBackend:
    backend = SQLiteBackend(db_path=settings.database_path)
    backend.initialize()
    return backend


@pytest.fixture
def auth_service(backend, settings) -> LocalAuthService:
    return LocalAuthService(backend, settings)


@pytest.fixture
def session(auth_service):
    """A signed-up user with a valid access token."""
    return auth_service.sign_up("kanan@example.com", TEST_PASSWORD)


@pytest.fixture
def user_id(session) -> str:
    return session.user.id


@pytest.fixture
def app(settings, backend, auth_service):
    limiter.enabled = False
    return create_app(settings=settings, backend=backend, session_provider=auth_service)


@pytest.fixture
def client(app):
    """Anonymous client; redirects are not followed."""
    with TestClient(app, follow_redirects=False) as c:
        yield c


@pytest.fixture
def auth_client(client, session):
    """Client authenticated with a bearer token."""
    client.headers.update({"Authorization": f"Bearer {session.access_token}"})
    return client
