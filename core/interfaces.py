"""
Storage and cache interfaces - abstract seams for the core services.

The SQLAlchemy repositories under database.repositories implement the
store interfaces; core.cache.match_cache implements MatchCache on Redis.
Tests swap in in-memory fakes (tests/mocks).
"""
from abc import ABC, abstractmethod
from datetime import date, datetime, time
from typing import Any, Dict, List, Optional, Tuple

from core.availability.models import AvailabilityRecord
from core.boxers.models import (
    BoxerRecord, BoxerSearchFilters, CandidateQuery, ClubRecord, UserRecord
)
from core.clubs.models import ClubSearchFilters
from core.match_requests.models import MatchRequestRecord, MatchRequestStatus, RequestDirection
from core.membership.models import MembershipRequestRecord, MembershipStatus


class MatchCache(ABC):
    """
    Narrow JSON cache with TTL.

    Implementations are best-effort: failures are logged and reported as a
    miss (get) or a no-op (set/delete).
    """

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        pass

    @abstractmethod
    def set(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> bool:
        pass

    @abstractmethod
    def delete_by_pattern(self, pattern: str) -> int:
        """Delete keys matching a glob pattern (``matches:*``). Returns the count."""
        pass


class UnitOfWork(ABC):
    """Commit boundary shared by the stores."""

    @abstractmethod
    def commit(self) -> None:
        pass

    @abstractmethod
    def rollback(self) -> None:
        pass


class UserStore(ABC):

    @abstractmethod
    def get_by_id(self, user_id: str) -> Optional[UserRecord]:
        pass


class BoxerStore(UnitOfWork):

    @abstractmethod
    def get_by_id(self, boxer_id: str) -> Optional[BoxerRecord]:
        pass

    @abstractmethod
    def get_by_user_id(self, user_id: str) -> Optional[BoxerRecord]:
        pass

    @abstractmethod
    def find_candidates(self, query: CandidateQuery) -> List[BoxerRecord]:
        """Searchable boxers of active users matching ``query``, at most query.take."""
        pass

    @abstractmethod
    def create(self, user_id: str, fields: Dict[str, Any]) -> BoxerRecord:
        pass

    @abstractmethod
    def update(self, boxer_id: str, fields: Dict[str, Any]) -> BoxerRecord:
        pass

    @abstractmethod
    def search(
        self,
        filters: BoxerSearchFilters,
        offset: int,
        limit: int
    ) -> Tuple[List[BoxerRecord], int]:
        """Returns (page of boxers, total matching)."""
        pass


class ClubStore(ABC):

    @abstractmethod
    def get_by_id(self, club_id: str) -> Optional[ClubRecord]:
        pass

    @abstractmethod
    def is_owner(self, user_id: str, club_id: str) -> bool:
        pass

    @abstractmethod
    def owned_club_ids(self, user_id: str) -> List[str]:
        pass

    @abstractmethod
    def list_by_owner(self, user_id: str) -> List[ClubRecord]:
        """Clubs owned by ``user_id``, ordered by name."""
        pass

    @abstractmethod
    def search(
        self,
        filters: ClubSearchFilters,
        offset: int = 0,
        limit: int = 50
    ) -> Tuple[List[ClubRecord], int]:
        """Returns (page of clubs ordered by name, total matching)."""
        pass


class MatchRequestStore(UnitOfWork):

    @abstractmethod
    def get_by_id(self, request_id: str) -> Optional[MatchRequestRecord]:
        pass

    @abstractmethod
    def find_pending(self, requester_boxer_id: str, target_boxer_id: str) -> Optional[MatchRequestRecord]:
        """First PENDING request for the ordered (requester, target) pair."""
        pass

    @abstractmethod
    def create(
        self,
        requester_boxer_id: str,
        target_boxer_id: str,
        expires_at: datetime,
        message: Optional[str] = None,
        proposed_date: Optional[datetime] = None,
        proposed_venue: Optional[str] = None
    ) -> MatchRequestRecord:
        """
        Insert a PENDING request.

        Raises:
            DuplicateMatchRequestException: if the storage layer already
                holds a PENDING request for the pair.
        """
        pass

    @abstractmethod
    def update_status(
        self,
        request_id: str,
        status: MatchRequestStatus,
        response_message: Optional[str] = None
    ) -> MatchRequestRecord:
        pass

    @abstractmethod
    def list_for_boxer(
        self,
        boxer_id: str,
        direction: RequestDirection,
        status: Optional[MatchRequestStatus],
        offset: int,
        limit: int
    ) -> List[MatchRequestRecord]:
        """Newest first."""
        pass

    @abstractmethod
    def count(
        self,
        boxer_id: str,
        direction: RequestDirection,
        status: Optional[MatchRequestStatus] = None
    ) -> int:
        pass

    @abstractmethod
    def expire_pending_before(self, now: datetime) -> int:
        """Bulk PENDING -> EXPIRED where expires_at < now. Returns rows changed."""
        pass


class MembershipStore(UnitOfWork):

    @abstractmethod
    def get_by_id(self, request_id: str) -> Optional[MembershipRequestRecord]:
        pass

    @abstractmethod
    def get_by_user_and_club(self, user_id: str, club_id: str) -> Optional[MembershipRequestRecord]:
        pass

    @abstractmethod
    def create(self, user_id: str, club_id: str, requested_at: datetime) -> MembershipRequestRecord:
        pass

    @abstractmethod
    def reset_to_pending(self, request_id: str, requested_at: datetime) -> MembershipRequestRecord:
        """Back to PENDING with reviewed_at / reviewed_by / notes cleared."""
        pass

    @abstractmethod
    def mark_reviewed(
        self,
        request_id: str,
        status: MembershipStatus,
        reviewed_by: str,
        reviewed_at: datetime,
        notes: Optional[str] = None
    ) -> MembershipRequestRecord:
        pass

    @abstractmethod
    def list_pending_for_clubs(self, club_ids: List[str]) -> List[MembershipRequestRecord]:
        """Newest first."""
        pass


class AvailabilityStore(UnitOfWork):

    @abstractmethod
    def get_by_id(self, slot_id: str) -> Optional[AvailabilityRecord]:
        pass

    @abstractmethod
    def find_overlapping(
        self,
        boxer_id: str,
        on: date,
        start: time,
        end: time,
        exclude_id: Optional[str] = None
    ) -> Optional[AvailabilityRecord]:
        """Any slot of the boxer on ``on`` overlapping [start, end)."""
        pass

    @abstractmethod
    def find_covering(self, boxer_id: str, on: date, start: time, end: time) -> Optional[AvailabilityRecord]:
        """An open slot containing the whole window."""
        pass

    @abstractmethod
    def create(self, boxer_id: str, fields: Dict[str, Any]) -> AvailabilityRecord:
        pass

    @abstractmethod
    def update(self, slot_id: str, fields: Dict[str, Any]) -> AvailabilityRecord:
        pass

    @abstractmethod
    def delete(self, slot_id: str) -> None:
        pass

    @abstractmethod
    def list_for_boxer(
        self,
        boxer_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        only_available: bool = True
    ) -> List[AvailabilityRecord]:
        """Inclusive date range, ordered by date then start time."""
        pass

    @abstractmethod
    def list_all_for_boxer(self, boxer_id: str) -> List[AvailabilityRecord]:
        """Newest date first, then start time."""
        pass

    @abstractmethod
    def delete_before(self, boxer_id: str, before: date) -> int:
        pass
