# tests/test_access_api.py

"""
Tests for the /access endpoints.
"""

import logging

from fastapi.testclient import TestClient

from conftest import assign


def test_role_catalog(client: TestClient):
    response = client.get("/access/roles")

    assert response.status_code == 200
    data = response.json()["data"]
    assert [r["level"] for r in data] == list(range(1, 11))
    assert data[1]["role"] == "state_service_manager"
    assert data[1]["scope"] == "state"


def test_my_profile(client: TestClient, snapshots):
    snapshots["actor-id"] = [
        assign("service_provider", community_id="c-1"),
        assign("community_leader", community_id="c-1"),
    ]

    response = client.get("/access/me")

    assert response.status_code == 200
    body = response.json()
    assert body["data"]["level"] == 4
    assert body["data"]["scope"] == "community"
    assert body["data"]["capabilities"] == ["community", "services"]
    assert body["filters"] == {"community_id": ["c-1"]}


def test_my_profile_without_roles(client: TestClient):
    response = client.get("/access/me")

    assert response.status_code == 200
    body = response.json()
    assert body["data"]["level"] is None
    assert body["data"]["scope"] == "none"
    assert body["filters"] is None


def test_my_profile_reports_unknown_roles(client: TestClient, snapshots):
    snapshots["actor-id"] = [assign("wizard")]

    body = client.get("/access/me").json()

    assert body["data"]["level"] is None
    assert body["data"]["unknown_roles"] == ["wizard"]


def test_my_routes(client: TestClient, snapshots):
    snapshots["actor-id"] = [assign("resident")]

    routes = client.get("/access/me/routes").json()["data"]

    assert "/my-profile" in routes
    assert "/directory" in routes
    assert "/admin/users" not in routes


def test_check_route(client: TestClient, snapshots):
    snapshots["actor-id"] = [assign("resident")]

    denied = client.get("/access/check/route", params={"path": "/admin/users"}).json()
    allowed = client.get("/access/check/route", params={"path": "/my-profile"}).json()

    assert denied == {"path": "/admin/users", "allowed": False}
    assert allowed == {"path": "/my-profile", "allowed": True}


def test_check_function(client: TestClient, snapshots):
    snapshots["actor-id"] = [
        assign("security_officer"),
        assign("facility_manager", active=False),
    ]

    assert client.get("/access/check/function/security").json()["allowed"] is True
    assert client.get("/access/check/function/facilities").json()["allowed"] is False
    assert client.get("/access/check/function/flying").json()["allowed"] is False


def test_check_scope(client: TestClient, snapshots):
    snapshots["actor-id"] = [assign("district_coordinator", district_id="d-1")]

    assert client.get("/access/check/scope/community").json()["allowed"] is True
    assert client.get("/access/check/scope/state").json()["allowed"] is False
    assert client.get("/access/check/scope/galaxy").status_code == 422


def test_manage_user(client: TestClient, snapshots):
    snapshots["actor-id"] = [assign("state_admin")]
    snapshots["coordinator"] = [assign("district_coordinator")]
    snapshots["peer"] = [assign("state_admin")]

    below = client.get("/access/users/coordinator/manage").json()
    equal = client.get("/access/users/peer/manage").json()
    roleless = client.get("/access/users/newcomer/manage").json()

    assert below == {"user_id": "coordinator", "target_level": 9, "allowed": True}
    assert equal["allowed"] is False
    assert roleless == {"user_id": "newcomer", "target_level": None, "allowed": True}


def test_cannot_manage_self(client: TestClient, snapshots):
    snapshots["actor-id"] = [assign("state_admin")]

    assert client.get("/access/users/actor-id/manage").json()["allowed"] is False


def test_user_profile_requires_administration(client: TestClient, snapshots):
    snapshots["actor-id"] = [assign("facility_manager")]
    snapshots["resident"] = [assign("resident")]

    response = client.get("/access/users/resident/profile")

    assert response.status_code == 403


def test_user_profile_for_admin(client: TestClient, snapshots):
    snapshots["actor-id"] = [assign("community_admin", community_id="c-1")]
    snapshots["resident"] = [assign("resident", community_id="c-1")]
    snapshots["coordinator"] = [assign("district_coordinator")]

    ok = client.get("/access/users/resident/profile")
    too_senior = client.get("/access/users/coordinator/profile")

    assert ok.status_code == 200
    assert ok.json()["data"]["roles"] == ["resident"]
    assert too_senior.status_code == 403


def test_health_app(client: TestClient):
    response = client.get("/health/app")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_health_db_not_configured(client: TestClient, monkeypatch):
    monkeypatch.setattr("core.supabase_client.settings.SUPABASE_URL", None)

    response = client.get("/health/db")

    assert response.status_code == 200
    assert response.json()["status"] == "not_configured"


def test_requires_bearer_token(app):
    with TestClient(app) as anonymous:
        response = anonymous.get("/access/me")

    assert response.status_code in (401, 403)


def test_startup_logs_routes_at_debug(app, caplog):
    caplog.set_level(logging.DEBUG, logger="community_access")

    with TestClient(app) as test_client:
        response = test_client.get("/health/app")

    assert response.status_code == 200
    assert "Starting Community Access Control API" in caplog.text
