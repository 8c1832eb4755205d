#!/usr/bin/env python3
"""
Membership Service - Club membership requests reviewed by club owners.

A request is keyed by (user, club). Re-requesting after a rejection reuses
the same row, reset to PENDING.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from core.boxers.models import BoxerRecord
from core.exceptions import (
    ClubNotFoundException,
    ForbiddenException,
    MembershipRequestNotFoundException,
    MissingBoxerProfileException,
    StateConflictException,
)
from core.interfaces import BoxerStore, ClubStore, MembershipStore
from core.matching.service import MatchingService
from core.membership.models import MembershipRequestRecord, MembershipStatus

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MembershipService:
    """
    Create, approve and reject club membership requests.

    The membership and boxer stores must share one unit of work: approval
    writes to both and commits once.
    """

    def __init__(
        self,
        membership_store: MembershipStore,
        club_store: ClubStore,
        boxer_store: BoxerStore,
        matching_service: Optional[MatchingService] = None,
        clock: Callable[[], datetime] = utc_now
    ):
        self.memberships = membership_store
        self.clubs = club_store
        self.boxers = boxer_store
        self.matching_service = matching_service
        self.clock = clock

    def create_membership_request(self, user_id: str, club_id: str) -> MembershipRequestRecord:
        """
        Ask to join ``club_id``.

        Idempotent while PENDING; a reviewed request is reopened.
        """
        club = self.clubs.get_by_id(club_id)
        if club is None:
            raise ClubNotFoundException("Club not found")

        existing = self.memberships.get_by_user_and_club(user_id, club_id)
        if existing is not None and existing.is_pending:
            return existing

        now = self.clock()
        if existing is None:
            request = self.memberships.create(user_id, club_id, requested_at=now)
        else:
            request = self.memberships.reset_to_pending(existing.id, requested_at=now)
        self.memberships.commit()

        logger.info(f"Membership request {request.id}: user {user_id} -> club {club_id}")
        return request

    def get_pending_requests_for_owner(self, owner_id: str) -> List[MembershipRequestRecord]:
        club_ids = self.clubs.owned_club_ids(owner_id)
        if not club_ids:
            return []
        return self.memberships.list_pending_for_clubs(club_ids)

    def _get_reviewable(self, request_id: str, owner_id: str, action: str) -> MembershipRequestRecord:
        request = self.memberships.get_by_id(request_id)
        if request is None:
            raise MembershipRequestNotFoundException("Membership request not found")

        if not self.clubs.is_owner(owner_id, request.club_id):
            raise ForbiddenException(f"Not authorized to {action} requests for this club")

        if not request.is_pending:
            raise StateConflictException(
                "Request has already been processed",
                current_status=request.status.value
            )
        return request

    def approve_request(self, request_id: str, owner_id: str) -> BoxerRecord:
        """
        Approve a PENDING request: assign the user's boxer to the club and
        mark the request APPROVED in a single commit.

        Returns:
            The updated boxer profile.
        """
        request = self._get_reviewable(request_id, owner_id, "approve")

        boxer = self.boxers.get_by_user_id(request.user_id)
        if boxer is None:
            raise MissingBoxerProfileException("User does not have a boxer profile")

        club = self.clubs.get_by_id(request.club_id)
        if club is None:
            raise ClubNotFoundException("Club not found")

        try:
            updated = self.boxers.update(boxer.id, {
                'club_id': club.id,
                'gym_affiliation': club.name,
            })
            self.memberships.mark_reviewed(
                request.id,
                MembershipStatus.APPROVED,
                reviewed_by=owner_id,
                reviewed_at=self.clock(),
            )
            self.memberships.commit()
        except Exception:
            self.memberships.rollback()
            raise

        logger.info(f"Membership request {request.id} approved by {owner_id}: boxer {boxer.id} joined {club.id}")

        if self.matching_service is not None:
            self.matching_service.invalidate_match_cache(boxer.id)
        return updated

    def reject_request(
        self,
        request_id: str,
        owner_id: str,
        notes: Optional[str] = None
    ) -> MembershipRequestRecord:
        request = self._get_reviewable(request_id, owner_id, "reject")

        rejected = self.memberships.mark_reviewed(
            request.id,
            MembershipStatus.REJECTED,
            reviewed_by=owner_id,
            reviewed_at=self.clock(),
            notes=notes,
        )
        self.memberships.commit()

        logger.info(f"Membership request {request.id} rejected by {owner_id}")
        return rejected
