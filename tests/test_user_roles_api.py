# tests/test_user_roles_api.py

"""
Tests for role assignment management endpoints.
"""

from fastapi.testclient import TestClient
from unittest.mock import patch

from conftest import assign


def test_assign_role_below_own_level(client: TestClient, snapshots):
    snapshots["actor-id"] = [assign("community_admin", community_id="c-1")]
    snapshots["target"] = [assign("resident", community_id="c-1")]

    created = assign("security_officer", community_id="c-1", id="a-9", user_id="target")
    with patch("routers.user_roles.create_role_assignment", return_value=created) as create:
        response = client.post(
            "/users/target/roles",
            json={"role": "security_officer", "community_id": "c-1"},
        )

    assert response.status_code == 200
    assert response.json()["data"]["role"] == "security_officer"
    user_id, payload = create.call_args[0]
    assert user_id == "target"
    assert payload.role == "security_officer"
    assert create.call_args[1]["assigned_by"] == "actor-id"


def test_assign_role_at_own_level_forbidden(client: TestClient, snapshots):
    snapshots["actor-id"] = [assign("community_admin")]
    snapshots["target"] = [assign("resident")]

    with patch("routers.user_roles.create_role_assignment") as create:
        response = client.post("/users/target/roles", json={"role": "community_admin"})

    assert response.status_code == 403
    create.assert_not_called()


def test_assign_role_to_peer_forbidden(client: TestClient, snapshots):
    snapshots["actor-id"] = [assign("district_coordinator")]
    snapshots["target"] = [assign("district_coordinator")]

    with patch("routers.user_roles.create_role_assignment") as create:
        response = client.post("/users/target/roles", json={"role": "resident"})

    assert response.status_code == 403
    create.assert_not_called()


def test_assign_role_without_administration(client: TestClient, snapshots):
    snapshots["actor-id"] = [assign("facility_manager")]

    response = client.post("/users/target/roles", json={"role": "resident"})

    assert response.status_code == 403


def test_assign_unknown_role_rejected(client: TestClient, snapshots):
    snapshots["actor-id"] = [assign("state_admin")]

    response = client.post("/users/target/roles", json={"role": "wizard"})

    assert response.status_code == 422


def test_cannot_assign_to_self(client: TestClient, snapshots):
    snapshots["actor-id"] = [assign("state_admin")]

    response = client.post("/users/actor-id/roles", json={"role": "resident"})

    assert response.status_code == 403


def test_assign_role_in_other_community_forbidden(client: TestClient, snapshots):
    snapshots["actor-id"] = [assign("community_admin", community_id="c-1")]

    with patch("routers.user_roles.create_role_assignment") as create:
        response = client.post(
            "/users/stranger/roles",
            json={"role": "security_officer", "community_id": "c-other"},
        )

    assert response.status_code == 403
    create.assert_not_called()


def test_assign_role_without_location_needs_state_scope(client: TestClient, snapshots):
    snapshots["actor-id"] = [assign("community_admin", community_id="c-1")]

    with patch("routers.user_roles.create_role_assignment") as create:
        response = client.post("/users/stranger/roles", json={"role": "resident"})

    assert response.status_code == 403
    create.assert_not_called()


def test_district_coordinator_assigns_within_district(client: TestClient, snapshots):
    snapshots["actor-id"] = [assign("district_coordinator", district_id="d-1")]

    created = assign("community_admin", district_id="d-1", community_id="c-5", user_id="target")
    with patch("routers.user_roles.create_role_assignment", return_value=created):
        inside = client.post(
            "/users/target/roles",
            json={"role": "community_admin", "district_id": "d-1", "community_id": "c-5"},
        )
    with patch("routers.user_roles.create_role_assignment") as create:
        outside = client.post(
            "/users/target/roles",
            json={"role": "community_admin", "district_id": "d-2", "community_id": "c-9"},
        )

    assert inside.status_code == 200
    assert outside.status_code == 403
    create.assert_not_called()


def test_state_admin_assigns_anywhere(client: TestClient, snapshots):
    snapshots["actor-id"] = [assign("state_admin")]

    created = assign("resident", user_id="target")
    with patch("routers.user_roles.create_role_assignment", return_value=created):
        response = client.post("/users/target/roles", json={"role": "resident"})

    assert response.status_code == 200

def test_deactivate_role(client: TestClient, snapshots):
    snapshots["actor-id"] = [assign("state_admin")]
    snapshots["target"] = [assign("district_coordinator", id="a-1")]

    existing = assign("district_coordinator", id="a-1", user_id="target")
    inactive = assign("district_coordinator", active=False, id="a-1", user_id="target")
    with patch("routers.user_roles.get_role_assignment", return_value=existing), \
            patch("routers.user_roles.deactivate_role_assignment", return_value=inactive) as deactivate:
        response = client.post("/users/target/roles/a-1/deactivate")

    assert response.status_code == 200
    assert response.json()["data"]["active"] is False
    deactivate.assert_called_once_with("target", "a-1")


def test_deactivate_unknown_role_allowed(client: TestClient, snapshots):
    snapshots["actor-id"] = [assign("community_admin", community_id="c-1")]
    snapshots["target"] = [assign("wizard", id="a-2", community_id="c-1")]

    existing = assign("wizard", id="a-2", user_id="target", community_id="c-1")
    with patch("routers.user_roles.get_role_assignment", return_value=existing), \
            patch("routers.user_roles.deactivate_role_assignment", return_value=existing):
        response = client.post("/users/target/roles/a-2/deactivate")

    assert response.status_code == 200


def test_list_own_roles(client: TestClient, snapshots):
    history = [
        assign("resident", id="a-1", user_id="actor-id"),
        assign("service_provider", active=False, id="a-0", user_id="actor-id"),
    ]
    with patch("routers.user_roles.fetch_role_assignments", return_value=history) as fetch:
        response = client.get("/users/actor-id/roles")

    assert response.status_code == 200
    assert [a["role"] for a in response.json()["data"]] == ["resident", "service_provider"]
    fetch.assert_called_once_with("actor-id", include_inactive=True)


def test_list_senior_user_roles_forbidden(client: TestClient, snapshots):
    snapshots["actor-id"] = [assign("resident")]
    snapshots["boss"] = [assign("state_admin")]

    with patch("routers.user_roles.fetch_role_assignments") as fetch:
        response = client.get("/users/boss/roles")

    assert response.status_code == 403
    fetch.assert_not_called()


def test_deactivate_in_other_community_forbidden(client: TestClient, snapshots):
    snapshots["actor-id"] = [assign("community_admin", community_id="c-1")]
    snapshots["target"] = [assign("resident", id="a-3", community_id="c-2")]

    existing = assign("resident", id="a-3", user_id="target", community_id="c-2")
    with patch("routers.user_roles.get_role_assignment", return_value=existing), \
            patch("routers.user_roles.deactivate_role_assignment") as deactivate:
        response = client.post("/users/target/roles/a-3/deactivate")

    assert response.status_code == 403
    deactivate.assert_not_called()
