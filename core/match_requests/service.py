#!/usr/bin/env python3
"""
Match Request Service - The match request state machine.

    PENDING -> ACCEPTED   (target, before expiry)
    PENDING -> DECLINED   (target, before expiry)
    PENDING -> CANCELLED  (requester)
    PENDING -> EXPIRED    (sweep, or an accept attempt after expiry)

All non-PENDING states are terminal.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional

from core.boxers.models import BoxerRecord
from core.config_loader import MatchingRules, MatchRequestPolicy
from core.exceptions import (
    BoxerNotFoundException,
    BoxerUnavailableException,
    DuplicateMatchRequestException,
    ForbiddenException,
    IncompatibleBoxersException,
    MatchRequestExpiredException,
    MatchRequestNotFoundException,
    ReverseMatchRequestException,
    SelfRequestException,
    StateConflictException,
)
from core.interfaces import BoxerStore, MatchRequestStore
from core.match_requests.models import (
    MatchRequestRecord,
    MatchRequestStats,
    MatchRequestStatus,
    PaginatedMatchRequests,
    RequestDirection,
)
from core.matching.compatibility import check_compatibility

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MatchRequestService:
    """
    Creates match requests and drives them through their lifecycle.

    Every mutating method commits through the match request store before
    returning, including the PENDING -> EXPIRED transition recorded when
    an accept arrives after expiry.
    """

    def __init__(
        self,
        match_request_store: MatchRequestStore,
        boxer_store: BoxerStore,
        rules: Optional[MatchingRules] = None,
        policy: Optional[MatchRequestPolicy] = None,
        clock: Callable[[], datetime] = utc_now
    ):
        self.requests = match_request_store
        self.boxers = boxer_store
        self.rules = rules or MatchingRules()
        self.policy = policy or MatchRequestPolicy()
        self.clock = clock

    def _expiry_from(self, now: datetime) -> datetime:
        return now + timedelta(days=self.policy.expiry_days)

    def _get_request(self, request_id: str) -> MatchRequestRecord:
        request = self.requests.get_by_id(request_id)
        if request is None:
            raise MatchRequestNotFoundException("Match request not found")
        return request

    def _require_pending(self, request: MatchRequestRecord, action: str) -> None:
        if request.status.is_terminal:
            raise StateConflictException(
                f"Cannot {action} a match request that is {request.status.value.lower()}",
                current_status=request.status.value
            )

    def _expire_if_due(self, request: MatchRequestRecord) -> None:
        """Record EXPIRED and fail when ``request`` is past its expiry."""
        if not request.is_expired_at(self.clock()):
            return
        self.requests.update_status(request.id, MatchRequestStatus.EXPIRED)
        self.requests.commit()
        logger.info(f"Match request {request.id} expired on response attempt")
        raise MatchRequestExpiredException()

    def create_match_request(
        self,
        requester_boxer_id: str,
        target_boxer_id: str,
        message: Optional[str] = None,
        proposed_date: Optional[datetime] = None,
        proposed_venue: Optional[str] = None
    ) -> MatchRequestRecord:
        """
        Send a match request from one boxer to another.

        Checks run in order: self request, both boxers exist, target is
        searchable, hard compatibility, no PENDING request either way.

        Raises:
            SelfRequestException, BoxerNotFoundException,
            BoxerUnavailableException, IncompatibleBoxersException,
            DuplicateMatchRequestException, ReverseMatchRequestException
        """
        if requester_boxer_id == target_boxer_id:
            raise SelfRequestException("Cannot send match request to yourself")

        requester = self.boxers.get_by_id(requester_boxer_id)
        if requester is None:
            raise BoxerNotFoundException("Requester boxer not found")

        target = self.boxers.get_by_id(target_boxer_id)
        if target is None:
            raise BoxerNotFoundException("Target boxer not found")

        self._check_pairing(requester, target)

        if self.requests.find_pending(requester.id, target.id) is not None:
            raise DuplicateMatchRequestException(
                "You already have a pending match request to this boxer"
            )

        if self.requests.find_pending(target.id, requester.id) is not None:
            raise ReverseMatchRequestException(
                "This boxer has already sent you a match request. Check your incoming requests."
            )

        now = self.clock()
        try:
            created = self.requests.create(
                requester_boxer_id=requester.id,
                target_boxer_id=target.id,
                expires_at=self._expiry_from(now),
                message=message,
                proposed_date=proposed_date,
                proposed_venue=proposed_venue,
            )
            self.requests.commit()
        except DuplicateMatchRequestException:
            # Lost a race with a concurrent create for the same pair
            self.requests.rollback()
            raise

        logger.info(f"Match request {created.id} created: {requester.id} -> {target.id}")
        return created

    def _check_pairing(self, requester: BoxerRecord, target: BoxerRecord) -> None:
        if not target.is_searchable:
            raise BoxerUnavailableException("Target boxer is not available for matching")

        reason = check_compatibility(requester, target, self.rules)
        if reason is not None:
            raise IncompatibleBoxersException(reason)

    def get_match_request(self, request_id: str, viewer_boxer_id: str) -> MatchRequestRecord:
        """Fetch a request visible to one of its two boxers."""
        request = self._get_request(request_id)
        if not request.involves(viewer_boxer_id):
            raise ForbiddenException("Not authorized to view this match request")
        return request

    def get_match_requests_for_boxer(
        self,
        boxer_id: str,
        direction: RequestDirection = RequestDirection.INCOMING,
        status: Optional[MatchRequestStatus] = None,
        page: int = 1,
        limit: Optional[int] = None
    ) -> PaginatedMatchRequests:
        """Incoming (boxer is target) or outgoing (boxer is requester) requests, newest first."""
        limit = min(limit or self.policy.page_size, self.policy.max_page_size)
        page = max(page, 1)
        direction = RequestDirection(direction)
        offset = (page - 1) * limit

        items = self.requests.list_for_boxer(boxer_id, direction, status, offset, limit)
        total = self.requests.count(boxer_id, direction, status)
        return PaginatedMatchRequests(items=items, total=total, page=page, limit=limit)

    def accept_match_request(
        self,
        request_id: str,
        boxer_id: str,
        response_message: Optional[str] = None
    ) -> MatchRequestRecord:
        """
        Accept a PENDING request as its target.

        Raises:
            MatchRequestNotFoundException: unknown request
            ForbiddenException: ``boxer_id`` is not the target
            StateConflictException: request is not PENDING
            MatchRequestExpiredException: request was past expiry; it is
                committed as EXPIRED before this is raised
        """
        request = self._get_request(request_id)
        if request.target_boxer_id != boxer_id:
            raise ForbiddenException("Not authorized to accept this match request")
        self._require_pending(request, "accept")
        self._expire_if_due(request)

        updated = self.requests.update_status(request.id, MatchRequestStatus.ACCEPTED, response_message)
        self.requests.commit()
        logger.info(f"Match request {request.id} accepted by boxer {boxer_id}")
        return updated

    def decline_match_request(
        self,
        request_id: str,
        boxer_id: str,
        response_message: Optional[str] = None
    ) -> MatchRequestRecord:
        """Decline a PENDING request as its target. Past-expiry requests can still be declined."""
        request = self._get_request(request_id)
        if request.target_boxer_id != boxer_id:
            raise ForbiddenException("Not authorized to decline this match request")
        self._require_pending(request, "decline")

        updated = self.requests.update_status(request.id, MatchRequestStatus.DECLINED, response_message)
        self.requests.commit()
        logger.info(f"Match request {request.id} declined by boxer {boxer_id}")
        return updated

    def cancel_match_request(self, request_id: str, boxer_id: str) -> MatchRequestRecord:
        """Withdraw a PENDING request as its requester."""
        request = self._get_request(request_id)
        if request.requester_boxer_id != boxer_id:
            raise ForbiddenException("Not authorized to cancel this match request")
        self._require_pending(request, "cancel")

        updated = self.requests.update_status(request.id, MatchRequestStatus.CANCELLED)
        self.requests.commit()
        logger.info(f"Match request {request.id} cancelled by boxer {boxer_id}")
        return updated

    def expire_old_requests(self) -> int:
        """Bulk-expire PENDING requests past their expiry. Safe to run repeatedly."""
        count = self.requests.expire_pending_before(self.clock())
        self.requests.commit()
        if count:
            logger.info(f"Expired {count} match requests")
        return count

    def get_request_stats(self, boxer_id: str) -> Dict[str, MatchRequestStats]:
        """Per-status counts for both directions: {'incoming': ..., 'outgoing': ...}."""
        stats = {}
        for direction in RequestDirection:
            counts = {
                status.value.lower(): self.requests.count(boxer_id, direction, status)
                for status in MatchRequestStatus
            }
            stats[direction.value] = MatchRequestStats(
                total=self.requests.count(boxer_id, direction), **counts
            )
        return stats
