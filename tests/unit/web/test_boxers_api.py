"""
API tests for /api/boxers and /health.
"""
import uuid

import pytest

from core.boxers.models import UserRole
from tests import auth_headers

pytestmark = pytest.mark.db


@pytest.fixture
def seeded(rows, db_session):
    """Two Cardiff amateurs and a user without a profile."""
    me = rows.boxer(weight_kg=70.0)
    rival = rows.boxer(weight_kg=71.0)
    newcomer = rows.user(name="Newcomer")
    data = {
        'me': str(me.id),
        'me_headers': auth_headers(me.user),
        'rival': str(rival.id),
        'rival_headers': auth_headers(rival.user),
        'newcomer_headers': auth_headers(newcomer),
    }
    db_session.commit()
    return data


def test_health(api_client):
    response = api_client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "boxmatch-api"}


def test_unknown_route_uses_error_envelope(api_client):
    response = api_client.get("/api/nowhere")
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Not Found", "type": "HTTPException"}


def test_wrong_method_uses_error_envelope(api_client):
    response = api_client.delete("/health")
    assert response.status_code == 405
    assert response.json() == {"success": False, "error": "Method Not Allowed", "type": "HTTPException"}


class TestAuthentication:

    def test_missing_header(self, api_client):
        response = api_client.get("/api/boxers/me")
        assert response.status_code == 401
        assert response.json() == {
            "success": False, "error": "Authentication required", "type": "HTTPException"
        }

    def test_unknown_user(self, api_client):
        response = api_client.get("/api/boxers/me", headers={"X-User-Id": str(uuid.uuid4())})
        assert response.status_code == 401

    def test_inactive_user(self, api_client, rows, db_session):
        headers = auth_headers(rows.user(is_active=False))
        db_session.commit()
        assert api_client.get("/api/boxers/me", headers=headers).status_code == 401


class TestProfiles:

    def test_create_profile(self, api_client, seeded):
        response = api_client.post("/api/boxers", headers=seeded['newcomer_headers'], json={
            "name": "Jamie Lewis",
            "weight_kg": 71.5,
            "experience_level": "AMATEUR",
            "city": "Cardiff",
            "wins": 6,
            "losses": 2,
        })

        assert response.status_code == 201
        boxer = response.json()["boxer"]
        assert boxer["name"] == "Jamie Lewis"
        assert boxer["total_fights"] == 8
        assert boxer["is_searchable"] is True

        me = api_client.get("/api/boxers/me", headers=seeded['newcomer_headers'])
        assert me.json()["boxer"]["id"] == boxer["id"]

    def test_create_rejects_invalid_body(self, api_client, seeded):
        response = api_client.post("/api/boxers", headers=seeded['newcomer_headers'], json={
            "name": "J", "weight_kg": 20
        })
        assert response.status_code == 422

    def test_missing_profile(self, api_client, seeded):
        response = api_client.get("/api/boxers/me", headers=seeded['newcomer_headers'])
        assert response.status_code == 404
        assert response.json() == {
            "success": False, "error": "Boxer profile not found", "type": "BoxerNotFoundException"
        }

    def test_get_by_id(self, api_client, seeded):
        response = api_client.get(f"/api/boxers/{seeded['rival']}", headers=seeded['me_headers'])
        assert response.status_code == 200
        assert response.json()["boxer"]["weight_kg"] == 71.0

    def test_invalid_id(self, api_client, seeded):
        response = api_client.get("/api/boxers/not-a-uuid", headers=seeded['me_headers'])
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_unknown_id(self, api_client, seeded):
        response = api_client.get(f"/api/boxers/{uuid.uuid4()}", headers=seeded['me_headers'])
        assert response.status_code == 404

    def test_owner_updates(self, api_client, seeded):
        response = api_client.put(
            f"/api/boxers/{seeded['me']}", headers=seeded['me_headers'], json={"city": "Newport"}
        )
        assert response.status_code == 200
        assert response.json()["boxer"]["city"] == "Newport"
        assert response.json()["boxer"]["weight_kg"] == 70.0

    def test_non_owner_update_forbidden(self, api_client, seeded):
        response = api_client.put(
            f"/api/boxers/{seeded['me']}", headers=seeded['rival_headers'], json={"city": "Newport"}
        )
        assert response.status_code == 403
        assert response.json()["type"] == "ForbiddenException"

    def test_deactivate_hides_from_search(self, api_client, seeded):
        response = api_client.delete(f"/api/boxers/{seeded['rival']}", headers=seeded['rival_headers'])
        assert response.status_code == 200
        assert response.json()["boxer"]["is_searchable"] is False

        search = api_client.get("/api/boxers", headers=seeded['me_headers']).json()
        assert [b["id"] for b in search["boxers"]] == [seeded['me']]


class TestSearch:

    def test_search_filters(self, api_client, rows, seeded, db_session):
        rows.boxer(city="Bristol", country="England")
        db_session.commit()

        response = api_client.get(
            "/api/boxers", headers=seeded['me_headers'], params={"city": "cardiff", "limit": 1}
        )

        body = response.json()
        assert response.status_code == 200
        assert body["total"] == 2
        assert body["total_pages"] == 2
        assert len(body["boxers"]) == 1

    def test_rejects_unknown_level(self, api_client, seeded):
        response = api_client.get(
            "/api/boxers", headers=seeded['me_headers'], params={"experience_level": "CHAMPION"}
        )
        assert response.status_code == 422


class TestMatches:

    def test_compatible_boxers(self, api_client, seeded):
        response = api_client.get(f"/api/boxers/{seeded['me']}/matches", headers=seeded['me_headers'])

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        match = body["matches"][0]
        assert match["boxer"]["id"] == seeded['rival']
        assert match["score"] == 94
        assert match["weight_difference"] == 1.0
        assert match["same_city"] is True

    def test_matches_for_someone_elses_profile(self, api_client, seeded):
        response = api_client.get(f"/api/boxers/{seeded['me']}/matches", headers=seeded['rival_headers'])
        assert response.status_code == 403

    def test_update_invalidates_cached_matches(self, api_client, seeded, match_cache):
        first = api_client.get(f"/api/boxers/{seeded['me']}/matches", headers=seeded['me_headers'])
        assert first.json()["total"] == 1
        assert any(key.startswith("matches:") for key in match_cache.data)

        api_client.put(f"/api/boxers/{seeded['rival']}", headers=seeded['rival_headers'], json={"weight_kg": 90})

        assert not any(key.startswith("matches:") for key in match_cache.data)
        second = api_client.get(f"/api/boxers/{seeded['me']}/matches", headers=seeded['me_headers'])
        assert second.json()["total"] == 0

    def test_suggestions(self, api_client, seeded, match_cache):
        response = api_client.get("/api/boxers/me/suggestions", headers=seeded['me_headers'])

        assert response.status_code == 200
        assert [m["boxer"]["id"] for m in response.json()["matches"]] == [seeded['rival']]
        assert f"suggestions:{seeded['me']}:10" in match_cache.data

    def test_suggestions_without_profile(self, api_client, seeded):
        response = api_client.get("/api/boxers/me/suggestions", headers=seeded['newcomer_headers'])
        assert response.status_code == 404


def test_roles_do_not_gate_profiles(api_client, rows, db_session):
    coach = rows.user(role=UserRole.COACH)
    headers = auth_headers(coach)
    db_session.commit()

    response = api_client.post("/api/boxers", headers=headers, json={"name": "Coach Carter"})
    assert response.status_code == 201
