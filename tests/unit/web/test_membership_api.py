"""
API tests for club membership requests and gym-owner review.
"""
import uuid

import pytest

from core.boxers.models import UserRole
from tests import auth_headers

pytestmark = pytest.mark.db


@pytest.fixture
def seeded(rows, db_session):
    owner = rows.user(role=UserRole.GYM_OWNER, name="Owner")
    other_owner = rows.user(role=UserRole.GYM_OWNER)
    club = rows.club(owner=owner)
    boxer = rows.boxer(gym_affiliation="Old Gym")
    data = {
        'club': str(club.id),
        'boxer': str(boxer.id),
        'boxer_headers': auth_headers(boxer.user),
        'owner_headers': auth_headers(owner),
        'other_owner_headers': auth_headers(other_owner),
    }
    db_session.commit()
    return data


@pytest.fixture
def membership(api_client, seeded):
    response = api_client.post(
        f"/api/clubs/{seeded['club']}/membership-requests", headers=seeded['boxer_headers']
    )
    assert response.status_code == 201
    return response.json()["request"]


class TestRequestMembership:

    def test_create(self, membership, seeded):
        assert membership["status"] == "PENDING"
        assert membership["club_id"] == seeded['club']
        assert membership["club_name"] == "Splott ABC"

    def test_repeat_returns_same_request(self, api_client, seeded, membership):
        again = api_client.post(
            f"/api/clubs/{seeded['club']}/membership-requests", headers=seeded['boxer_headers']
        )
        assert again.status_code == 201
        assert again.json()["request"]["id"] == membership["id"]

    def test_unknown_club(self, api_client, seeded):
        response = api_client.post(
            f"/api/clubs/{uuid.uuid4()}/membership-requests", headers=seeded['boxer_headers']
        )
        assert response.status_code == 404
        assert response.json()["type"] == "ClubNotFoundException"


class TestOwnerReview:

    def test_list_pending(self, api_client, seeded, membership):
        response = api_client.get("/api/gym-owner/membership-requests", headers=seeded['owner_headers'])

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 1
        assert body["requests"][0]["id"] == membership["id"]
        assert body["requests"][0]["user_name"]

    def test_other_owner_sees_nothing(self, api_client, seeded, membership):
        response = api_client.get("/api/gym-owner/membership-requests", headers=seeded['other_owner_headers'])
        assert response.json() == {"success": True, "count": 0, "requests": []}

    def test_boxer_role_forbidden(self, api_client, seeded):
        response = api_client.get("/api/gym-owner/membership-requests", headers=seeded['boxer_headers'])
        assert response.status_code == 403
        assert response.json()["error"] == "Insufficient permissions"

    def test_approve(self, api_client, seeded, membership):
        response = api_client.post(
            f"/api/gym-owner/membership-requests/{membership['id']}/approve", headers=seeded['owner_headers']
        )

        assert response.status_code == 200
        boxer = response.json()["boxer"]
        assert boxer["id"] == seeded['boxer']
        assert boxer["club_id"] == seeded['club']
        assert boxer["gym_affiliation"] == "Splott ABC"

        pending = api_client.get("/api/gym-owner/membership-requests", headers=seeded['owner_headers'])
        assert pending.json()["count"] == 0

    def test_approve_twice(self, api_client, seeded, membership):
        url = f"/api/gym-owner/membership-requests/{membership['id']}/approve"
        api_client.post(url, headers=seeded['owner_headers'])

        response = api_client.post(url, headers=seeded['owner_headers'])

        assert response.status_code == 400
        assert response.json()["current_status"] == "APPROVED"

    def test_non_owner_cannot_approve(self, api_client, seeded, membership):
        response = api_client.post(
            f"/api/gym-owner/membership-requests/{membership['id']}/approve", headers=seeded['other_owner_headers']
        )
        assert response.status_code == 403

    def test_reject_with_notes(self, api_client, seeded, membership):
        response = api_client.post(
            f"/api/gym-owner/membership-requests/{membership['id']}/reject",
            headers=seeded['owner_headers'],
            json={"notes": "Squad is full"}
        )

        assert response.status_code == 200
        rejected = response.json()["request"]
        assert rejected["status"] == "REJECTED"
        assert rejected["notes"] == "Squad is full"
        assert rejected["reviewed_at"] is not None

    def test_unknown_request(self, api_client, seeded):
        response = api_client.post(
            f"/api/gym-owner/membership-requests/{uuid.uuid4()}/reject", headers=seeded['owner_headers']
        )
        assert response.status_code == 404


class TestOwnerEditsMembers:

    def test_owner_updates_approved_member(self, api_client, seeded, membership):
        api_client.post(
            f"/api/gym-owner/membership-requests/{membership['id']}/approve", headers=seeded['owner_headers']
        )

        response = api_client.put(
            f"/api/boxers/{seeded['boxer']}", headers=seeded['owner_headers'], json={"weight_kg": 72.5}
        )

        assert response.status_code == 200
        assert response.json()["boxer"]["weight_kg"] == 72.5

    def test_owner_cannot_update_non_member(self, api_client, seeded):
        response = api_client.put(
            f"/api/boxers/{seeded['boxer']}", headers=seeded['owner_headers'], json={"weight_kg": 72.5}
        )
        assert response.status_code == 403

    def test_other_owner_cannot_update_member(self, api_client, seeded, membership):
        api_client.post(
            f"/api/gym-owner/membership-requests/{membership['id']}/approve", headers=seeded['owner_headers']
        )

        response = api_client.put(
            f"/api/boxers/{seeded['boxer']}", headers=seeded['other_owner_headers'], json={"weight_kg": 72.5}
        )
        assert response.status_code == 403
