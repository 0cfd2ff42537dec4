"""Tests for the HTTP routes."""

from collections import Counter

import pytest
from fastapi.testclient import TestClient

from core.session_manager import session_manager
from main import app


@pytest.fixture
def client():
    """Test client with a clean session store."""
    session_manager.sessions.clear()
    yield TestClient(app)
    session_manager.sessions.clear()


@pytest.fixture
def created_session(client, five_names):
    """A session created through the API."""
    response = client.post(
        "/api/sessions",
        json={"player_names": five_names, "role_counts": {"MAFIA": 1, "POLICE": 1, "DOCTOR": 1}},
    )
    assert response.status_code == 201
    return response.json()


class TestRoleRoutes:
    """Tests for catalog and validation endpoints."""

    def test_list_roles(self, client):
        """Test that roles are listed in display order."""
        response = client.get("/api/roles")
        assert response.status_code == 200
        assert [role["id"] for role in response.json()] == ["MAFIA", "POLICE", "DOCTOR", "VILLAGER"]

    def test_get_role(self, client):
        """Test a single role lookup."""
        response = client.get("/api/roles/police")
        assert response.status_code == 200
        assert response.json()["constraints"] == {"min": 0, "max": 2, "default": 0}

    def test_get_unknown_role(self, client):
        """Test that unknown roles are 404."""
        assert client.get("/api/roles/jester").status_code == 404

    def test_defaults(self, client):
        """Test the recommended configuration."""
        assert client.get("/api/roles/defaults").json() == {"MAFIA": 1, "POLICE": 0, "DOCTOR": 0}

    def test_validate_uses_camel_case(self, client):
        """Test the validation response shape."""
        response = client.post(
            "/api/validate",
            json={"role_counts": {"MAFIA": 10, "POLICE": 2, "DOCTOR": 2}, "total_players": 14},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["isValid"] is True
        assert body["villagerCount"] == 0
        assert body["requiresConfirmation"] is True

    def test_validate_errors_are_not_http_errors(self, client):
        """Test that configuration errors come back in the body."""
        response = client.post(
            "/api/validate", json={"role_counts": {"MAFIA": -5}, "total_players": 10}
        )
        assert response.status_code == 200
        assert response.json()["isValid"] is False

    def test_validate_reports_fractional_counts(self, client):
        """Test that a fractional count is a validation error, not a parsing failure."""
        response = client.post(
            "/api/validate", json={"role_counts": {"MAFIA": 2.5}, "total_players": 10}
        )
        assert response.status_code == 200
        body = response.json()
        assert body["isValid"] is False
        assert [e["rule"] for e in body["errors"]] == ["NegativeCountRule"]

    def test_validate_includes_edge_case(self, client):
        """Test that a valid but unusual configuration names its edge case."""
        response = client.post(
            "/api/validate", json={"role_counts": {"MAFIA": 0}, "total_players": 8}
        )
        body = response.json()
        assert body["requiresConfirmation"] is True
        assert body["edgeCase"]["type"] == "NO_MAFIA"
        assert "gameplayImpact" in body["edgeCase"]

    def test_validate_standard_configuration_has_no_edge_case(self, client):
        """Test that ordinary games carry no edge case."""
        response = client.post(
            "/api/validate", json={"role_counts": {"MAFIA": 2}, "total_players": 10}
        )
        assert response.json()["edgeCase"] is None


class TestSessionRoutes:
    """Tests for allocation and reveal endpoints."""

    def test_create_session_hides_roles(self, created_session):
        """Test that the created session exposes no roles."""
        assert all("role" not in p for p in created_session["players"])
        assert created_session["role_distribution"] == {
            "MAFIA": 1,
            "POLICE": 1,
            "DOCTOR": 1,
            "VILLAGER": 2,
        }

    def test_create_rejects_invalid_configuration(self, client, five_names):
        """Test that blocking errors stop allocation."""
        response = client.post(
            "/api/sessions", json={"player_names": five_names, "role_counts": {"MAFIA": 6}}
        )
        assert response.status_code == 422

    def test_create_requires_acknowledged_warnings(self, client, five_names):
        """Test that warnings need explicit confirmation."""
        payload = {"player_names": five_names, "role_counts": {"MAFIA": 0}}
        response = client.post("/api/sessions", json=payload)
        assert response.status_code == 409
        detail = response.json()["detail"]
        assert detail["edgeCase"]["type"] == "NO_MAFIA"
        assert detail["warnings"]

        payload["acknowledge_warnings"] = True
        assert client.post("/api/sessions", json=payload).status_code == 201

    def test_create_rejects_duplicate_names(self, client):
        """Test that duplicate names are rejected."""
        response = client.post(
            "/api/sessions", json={"player_names": ["Ann", "Ann", "Cy"], "role_counts": {"MAFIA": 1}}
        )
        assert response.status_code == 400

    def test_reveal_in_order(self, client, created_session):
        """Test the full reveal sequence."""
        session_id = created_session["session_id"]
        roles = []
        for player_id in range(5):
            response = client.post(f"/api/sessions/{session_id}/players/{player_id}/reveal")
            assert response.status_code == 200
            roles.append(response.json()["player"]["role"]["id"])

        assert response.json()["all_revealed"] is True
        assert response.json()["next_player_id"] is None
        assert Counter(roles) == {"MAFIA": 1, "POLICE": 1, "DOCTOR": 1, "VILLAGER": 2}

    def test_reveal_out_of_order(self, client, created_session):
        """Test that players must reveal in order."""
        session_id = created_session["session_id"]
        response = client.post(f"/api/sessions/{session_id}/players/3/reveal")
        assert response.status_code == 409

    def test_reallocate(self, client, created_session):
        """Test that re-allocation replaces the assignment."""
        session_id = created_session["session_id"]
        response = client.post(f"/api/sessions/{session_id}/reallocate")
        assert response.status_code == 200
        assert response.json()["assignment_id"] != created_session["assignment_id"]
        assert response.json()["reallocations"] == 1

    def test_reset(self, client, created_session):
        """Test that reset removes the session."""
        session_id = created_session["session_id"]
        assert client.delete(f"/api/sessions/{session_id}").status_code == 204
        assert client.get(f"/api/sessions/{session_id}").status_code == 404

    def test_create_rejects_empty_player_list(self, client):
        """Test that a session needs at least one player."""
        response = client.post("/api/sessions", json={"player_names": [], "role_counts": {}})
        assert response.status_code == 422

    def test_stats(self, client, created_session):
        """Test the session statistics endpoint."""
        session_id = created_session["session_id"]
        client.post(f"/api/sessions/{session_id}/reallocate")

        response = client.get("/api/stats")
        assert response.status_code == 200
        assert response.json() == {
            "total_sessions": 1,
            "fully_revealed": 0,
            "total_players": 5,
            "total_reallocations": 1,
        }
