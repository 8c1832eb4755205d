"""
Tests for club membership requests (MembershipService).
"""
import unittest
from unittest.mock import MagicMock, patch

from core.boxers.models import ClubRecord
from core.exceptions import (
    ClubNotFoundException,
    ForbiddenException,
    MembershipRequestNotFoundException,
    MissingBoxerProfileException,
    StateConflictException,
)
from core.membership.models import MembershipStatus
from core.membership.service import MembershipService
from tests.mocks.boxing_mocks import (
    FixedClock,
    InMemoryBoxerStore,
    InMemoryClubStore,
    InMemoryMembershipStore,
    make_boxer,
    new_id,
)


class TestMembershipService(unittest.TestCase):

    def setUp(self):
        self.clock = FixedClock()
        self.owner_id = new_id()
        self.club = ClubRecord(id=new_id(), name="Splott ABC", owner_id=self.owner_id)
        self.other_club = ClubRecord(id=new_id(), name="Rhondda ABC", owner_id=new_id())
        self.boxer = make_boxer(gym_affiliation="Old Gym")

        self.memberships = InMemoryMembershipStore()
        self.clubs = InMemoryClubStore([self.club, self.other_club])
        self.boxers = InMemoryBoxerStore([self.boxer])
        self.matching = MagicMock()

        self.service = MembershipService(
            self.memberships, self.clubs, self.boxers,
            matching_service=self.matching, clock=self.clock
        )

    def _request(self, user_id=None, club_id=None):
        return self.service.create_membership_request(user_id or self.boxer.user_id, club_id or self.club.id)

    def test_create_request(self):
        request = self._request()

        self.assertEqual(request.status, MembershipStatus.PENDING)
        self.assertEqual(request.club_id, self.club.id)
        self.assertEqual(request.requested_at, self.clock.now)
        self.assertEqual(self.memberships.commits, 1)

    def test_create_for_unknown_club(self):
        with self.assertRaises(ClubNotFoundException):
            self._request(club_id=new_id())

    def test_create_is_idempotent_while_pending(self):
        first = self._request()
        self.clock.advance(hours=1)
        second = self._request()

        self.assertEqual(first.id, second.id)
        self.assertEqual(second.requested_at, first.requested_at)
        self.assertEqual(len(self.memberships.requests), 1)

    def test_rerequest_after_rejection_reopens_same_row(self):
        first = self._request()
        self.service.reject_request(first.id, self.owner_id, notes="Full up")
        self.clock.advance(days=1)

        reopened = self._request()

        self.assertEqual(reopened.id, first.id)
        self.assertEqual(reopened.status, MembershipStatus.PENDING)
        self.assertEqual(reopened.requested_at, self.clock.now)
        self.assertIsNone(reopened.reviewed_by)
        self.assertIsNone(reopened.notes)

    def test_pending_requests_only_for_owned_clubs(self):
        mine = self._request()
        self._request(user_id=new_id(), club_id=self.other_club.id)
        reviewed = self._request(user_id=new_id())
        self.service.reject_request(reviewed.id, self.owner_id)

        pending = self.service.get_pending_requests_for_owner(self.owner_id)

        self.assertEqual([r.id for r in pending], [mine.id])

    def test_no_clubs_no_requests(self):
        self._request()
        self.assertEqual(self.service.get_pending_requests_for_owner(new_id()), [])

    def test_approve_assigns_club(self):
        request = self._request()

        boxer = self.service.approve_request(request.id, self.owner_id)

        self.assertEqual(boxer.club_id, self.club.id)
        self.assertEqual(boxer.gym_affiliation, "Splott ABC")
        stored = self.memberships.get_by_id(request.id)
        self.assertEqual(stored.status, MembershipStatus.APPROVED)
        self.assertEqual(stored.reviewed_by, self.owner_id)
        self.assertEqual(stored.reviewed_at, self.clock.now)
        self.matching.invalidate_match_cache.assert_called_once_with(self.boxer.id)

    def test_approve_commits_once(self):
        request = self._request()
        commits = self.memberships.commits

        self.service.approve_request(request.id, self.owner_id)

        self.assertEqual(self.memberships.commits, commits + 1)
        self.assertEqual(self.boxers.commits, 0)

    def test_approve_rolls_back_when_review_fails(self):
        request = self._request()

        with patch.object(self.memberships, 'mark_reviewed', side_effect=RuntimeError("db down")):
            with self.assertRaises(RuntimeError):
                self.service.approve_request(request.id, self.owner_id)

        self.assertEqual(self.memberships.rollbacks, 1)
        self.matching.invalidate_match_cache.assert_not_called()

    def test_approve_without_boxer_profile(self):
        request = self._request(user_id=new_id())
        with self.assertRaises(MissingBoxerProfileException):
            self.service.approve_request(request.id, self.owner_id)
        self.assertTrue(self.memberships.get_by_id(request.id).is_pending)

    def test_only_owner_may_review(self):
        request = self._request()
        with self.assertRaisesRegex(ForbiddenException, "approve"):
            self.service.approve_request(request.id, new_id())
        with self.assertRaisesRegex(ForbiddenException, "reject"):
            self.service.reject_request(request.id, new_id())

    def test_unknown_request(self):
        with self.assertRaises(MembershipRequestNotFoundException):
            self.service.approve_request(new_id(), self.owner_id)

    def test_processed_request_cannot_be_reviewed_again(self):
        request = self._request()
        self.service.approve_request(request.id, self.owner_id)

        with self.assertRaises(StateConflictException) as ctx:
            self.service.reject_request(request.id, self.owner_id)

        self.assertEqual(str(ctx.exception), "Request has already been processed")
        self.assertEqual(ctx.exception.current_status, "APPROVED")

    def test_reject_records_notes(self):
        request = self._request()

        rejected = self.service.reject_request(request.id, self.owner_id, notes="Full up")

        self.assertEqual(rejected.status, MembershipStatus.REJECTED)
        self.assertEqual(rejected.notes, "Full up")
        self.assertEqual(rejected.reviewed_by, self.owner_id)
        self.assertIsNone(self.boxers.get_by_id(self.boxer.id).club_id)


if __name__ == "__main__":
    unittest.main()
