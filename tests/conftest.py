# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import os

# Settings are read at import time; keep the background monitor out of
# request tests and point the backend somewhere harmless.
os.environ.setdefault("ELECTION_MONITOR_ENABLED", "false")
os.environ.setdefault("BACKEND_API_URL", "http://backend.test")

import pytest
from fastapi.testclient import TestClient
from typing import Generator

from main import create_app
from models.user import ConsoleUser


@pytest.fixture(scope="function")
def app():
    """Create a test FastAPI application instance."""
    return create_app()


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers():
    return {"Authorization": "Bearer test-token"}


@pytest.fixture
def admin_user():
    return ConsoleUser(id="admin-id", username="admin", role="admin")


@pytest.fixture
def viewer_user():
    return ConsoleUser(id="viewer-id", username="viewer", role="viewer", permissions={})


@pytest.fixture
def structured_editor():
    """Structured role; the top-level map is what gets consulted."""
    return ConsoleUser(
        id="editor-id",
        username="editor",
        role={"name": "editor", "permissions": {}},
        permissions={"voters": {"edit": True}},
    )


@pytest.fixture
def string_editor():
    """Free-text string role with the same table as structured_editor."""
    return ConsoleUser(
        id="string-editor-id",
        username="string-editor",
        role="editor",
        permissions={"voters": {"edit": True}},
    )


@pytest.fixture(autouse=True)
def reset_cache():
    """Reset cache before each test."""
    from core.cache import cache_clear
    cache_clear()
    yield
    cache_clear()
