# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import pytest
from fastapi.testclient import TestClient
from typing import Generator

from core.config import settings
from core.rate_limiter import reset_rate_limits
from dependencies.auth import CurrentUser
from dependencies.store import get_store
from main import create_app
from tests.fakes import InMemoryStore, as_actor


@pytest.fixture(autouse=True)
def fast_profile_polling(monkeypatch):
    """No real sleeping while polling for provisioned profiles."""
    monkeypatch.setattr(settings, "PROFILE_POLL_INTERVAL_SECONDS", 0)


@pytest.fixture(autouse=True)
def clear_rate_limits():
    reset_rate_limits()
    yield
    reset_rate_limits()


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def admin(store) -> CurrentUser:
    identity = store.create_user("admin@example.com", "Ada Admin", role="admin")
    return as_actor(identity, role="admin")


@pytest.fixture
def creator(store) -> CurrentUser:
    """Volunteer A: proposes projects."""
    return as_actor(store.create_user("alice@example.com", "Alice"))


@pytest.fixture
def volunteer(store) -> CurrentUser:
    """Volunteer B: joins projects and submits hours."""
    return as_actor(store.create_user("bob@example.com", "Bob"))


@pytest.fixture
def project_fields() -> dict:
    return {
        "title": "Beach Cleanup Drive",
        "description": "Pick up litter along the shoreline",
        "expected_hours": 4,
        "location": "Ala Moana Beach",
        "date": "2026-05-01",
        "thumbnail_url": None,
    }


@pytest.fixture(scope="function")
def app(store):
    """Create a test FastAPI application bound to the in-memory store."""
    application = create_app()
    application.dependency_overrides[get_store] = lambda: store
    yield application
    application.dependency_overrides = {}


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client
