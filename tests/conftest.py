# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import Mock
from typing import Generator

from main import create_app
from dependencies.auth import CurrentUser, get_current_user
from models.role_assignment import RoleAssignment


def assign(role, active=True, district_id=None, community_id=None, **extra):
    """Shorthand for building a RoleAssignment in tests."""
    return RoleAssignment(
        role=role,
        active=active,
        district_id=district_id,
        community_id=community_id,
        **extra,
    )


@pytest.fixture(scope="function")
def app():
    """Create a test FastAPI application instance."""
    return create_app()


@pytest.fixture
def current_user():
    """The authenticated caller for API tests."""
    return CurrentUser(
        id="actor-id",
        email="actor@example.com",
        full_name="Acting User",
    )


@pytest.fixture
def snapshots(monkeypatch):
    """
    Per-user role assignment snapshots served instead of Supabase.

    Tests fill the dict: snapshots["actor-id"] = [assign("state_admin")]
    """
    data = {}

    def fake_load(user_id):
        return tuple(data.get(user_id, ()))

    monkeypatch.setattr("core.permission_helpers.load_access_snapshot", fake_load)
    monkeypatch.setattr("routers.access.load_access_snapshot", fake_load)
    return data


@pytest.fixture(scope="function")
def client(app, current_user, snapshots) -> Generator[TestClient, None, None]:
    """Test client with authentication replaced by `current_user`."""
    app.dependency_overrides[get_current_user] = lambda: current_user
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides = {}


@pytest.fixture
def mock_supabase_client():
    """
    Create a mock Supabase client whose query builder chains onto itself.

    Set `mock_client.query.execute.return_value = Mock(data=[...])`.
    """
    mock_client = Mock()
    query = Mock()
    for method in ("select", "eq", "limit", "insert", "update"):
        getattr(query, method).return_value = query
    query.execute.return_value = Mock(data=[])
    mock_client.table.return_value = query
    mock_client.query = query
    return mock_client


@pytest.fixture(autouse=True)
def reset_cache():
    """Reset cache before each test."""
    from core.cache import cache_clear
    cache_clear()
    yield
    cache_clear()
