"""
Pytest configuration and fixtures for backend tests.

This module is automatically loaded by pytest and provides:
- TESTING environment flag to disable .env loading
- Shared fixtures for database sessions, OAuth config and test clients
"""

import os

# Set TESTING flag BEFORE any coraserver imports
# This prevents loading .env file during tests, ensuring test isolation
os.environ["TESTING"] = "1"

# Never touch a real database from tests
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from coraserver.api.deps import get_db
from coraserver.core.config import Settings
from coraserver.core.oauth_config import OAuthConfig
from coraserver.main import create_app
from coraserver.services.oauth_state import clear_oauth_states


@pytest.fixture(autouse=True)
def _reset_oauth_states():
    """Issued login states must not leak between tests."""
    clear_oauth_states()
    yield
    clear_oauth_states()


@pytest.fixture(name="session")
def session_fixture():
    """Create a new in-memory database session for each test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session


@pytest.fixture(name="oauth_config")
def oauth_config_fixture() -> OAuthConfig:
    """OAuth client configuration with explicit test values."""
    return OAuthConfig(
        client_id="test-client-id",
        client_secret="test-client-secret",
        redirect_url="http://localhost:42069/oauth/exchange",
        scopes=("User.Read", "offline_access"),
        tenant="test-tenant",
    )


@pytest.fixture(name="app_settings")
def app_settings_fixture() -> Settings:
    return Settings()


@pytest.fixture(name="app")
def app_fixture(oauth_config: OAuthConfig, app_settings: Settings) -> FastAPI:
    return create_app(oauth_config, app_settings)


@pytest.fixture(name="client")
def client_fixture(app: FastAPI, session: Session):
    """Create a test client with database session override."""

    def get_session_override():
        return session

    app.dependency_overrides[get_db] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()
