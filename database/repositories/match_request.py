import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select, update, func
from sqlalchemy.exc import IntegrityError

from core.exceptions import DuplicateMatchRequestException, MatchRequestNotFoundException
from core.interfaces import MatchRequestStore
from core.match_requests.models import MatchRequestRecord, MatchRequestStatus, RequestDirection
from database.models import MatchRequest
from database.repositories.base import BaseRepository, as_uuid, as_utc
from database.repositories.boxer import boxer_to_record

logger = logging.getLogger(__name__)


def match_request_to_record(request: MatchRequest, include_boxers: bool = True) -> MatchRequestRecord:
    requester = target = None
    if include_boxers:
        requester = boxer_to_record(request.requester_boxer) if request.requester_boxer else None
        target = boxer_to_record(request.target_boxer) if request.target_boxer else None

    return MatchRequestRecord(
        id=str(request.id),
        requester_boxer_id=str(request.requester_boxer_id),
        target_boxer_id=str(request.target_boxer_id),
        status=MatchRequestStatus(request.status),
        expires_at=as_utc(request.expires_at),
        created_at=as_utc(request.created_at),
        updated_at=as_utc(request.updated_at),
        message=request.message,
        response_message=request.response_message,
        proposed_date=as_utc(request.proposed_date),
        proposed_venue=request.proposed_venue,
        requester=requester,
        target=target,
    )


class MatchRequestRepository(BaseRepository, MatchRequestStore):

    def _get_row(self, request_id: str) -> Optional[MatchRequest]:
        uid = as_uuid(request_id)
        if uid is None:
            return None
        stmt = select(MatchRequest).where(MatchRequest.id == uid)
        return self.db.execute(stmt).scalar_one_or_none()

    @staticmethod
    def _direction_clause(boxer_id: str, direction: RequestDirection):
        uid = as_uuid(boxer_id)
        if RequestDirection(direction) == RequestDirection.INCOMING:
            return MatchRequest.target_boxer_id == uid
        return MatchRequest.requester_boxer_id == uid

    def get_by_id(self, request_id: str) -> Optional[MatchRequestRecord]:
        request = self._get_row(request_id)
        return match_request_to_record(request) if request else None

    def find_pending(self, requester_boxer_id: str, target_boxer_id: str) -> Optional[MatchRequestRecord]:
        stmt = select(MatchRequest).where(
            MatchRequest.requester_boxer_id == as_uuid(requester_boxer_id),
            MatchRequest.target_boxer_id == as_uuid(target_boxer_id),
            MatchRequest.status == MatchRequestStatus.PENDING.value
        ).limit(1)
        request = self.db.execute(stmt).scalars().first()
        return match_request_to_record(request, include_boxers=False) if request else None

    def create(
        self,
        requester_boxer_id: str,
        target_boxer_id: str,
        expires_at: datetime,
        message: Optional[str] = None,
        proposed_date: Optional[datetime] = None,
        proposed_venue: Optional[str] = None
    ) -> MatchRequestRecord:
        request = MatchRequest(
            requester_boxer_id=as_uuid(requester_boxer_id),
            target_boxer_id=as_uuid(target_boxer_id),
            status=MatchRequestStatus.PENDING.value,
            expires_at=expires_at,
            message=message,
            proposed_date=proposed_date,
            proposed_venue=proposed_venue,
        )
        self.db.add(request)
        try:
            self.db.flush()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Pending request insert rejected for {requester_boxer_id} -> {target_boxer_id}: {e.orig}")
            raise DuplicateMatchRequestException(
                "You already have a pending match request to this boxer"
            ) from e
        return match_request_to_record(request)

    def update_status(
        self,
        request_id: str,
        status: MatchRequestStatus,
        response_message: Optional[str] = None
    ) -> MatchRequestRecord:
        request = self._get_row(request_id)
        if request is None:
            raise MatchRequestNotFoundException("Match request not found")

        request.status = MatchRequestStatus(status).value
        if response_message is not None:
            request.response_message = response_message
        self.db.flush()
        return match_request_to_record(request)

    def list_for_boxer(
        self,
        boxer_id: str,
        direction: RequestDirection,
        status: Optional[MatchRequestStatus],
        offset: int,
        limit: int
    ) -> List[MatchRequestRecord]:
        stmt = select(MatchRequest).where(self._direction_clause(boxer_id, direction))
        if status is not None:
            stmt = stmt.where(MatchRequest.status == MatchRequestStatus(status).value)

        stmt = stmt.order_by(MatchRequest.created_at.desc()).offset(offset).limit(limit)
        return [match_request_to_record(r) for r in self.db.execute(stmt).scalars().all()]

    def count(
        self,
        boxer_id: str,
        direction: RequestDirection,
        status: Optional[MatchRequestStatus] = None
    ) -> int:
        stmt = select(func.count(MatchRequest.id)).where(self._direction_clause(boxer_id, direction))
        if status is not None:
            stmt = stmt.where(MatchRequest.status == MatchRequestStatus(status).value)
        return self.db.execute(stmt).scalar_one()

    def expire_pending_before(self, now: datetime) -> int:
        stmt = (
            update(MatchRequest)
            .where(
                MatchRequest.status == MatchRequestStatus.PENDING.value,
                MatchRequest.expires_at < now
            )
            .values(status=MatchRequestStatus.EXPIRED.value, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        return result.rowcount or 0
