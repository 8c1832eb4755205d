from datetime import datetime
from typing import List, Optional

from sqlalchemy import select

from core.exceptions import MembershipRequestNotFoundException
from core.interfaces import MembershipStore
from core.membership.models import MembershipRequestRecord, MembershipStatus
from database.models import ClubMembershipRequest
from database.repositories.base import BaseRepository, as_uuid, as_utc, id_str


def membership_to_record(request: ClubMembershipRequest) -> MembershipRequestRecord:
    return MembershipRequestRecord(
        id=str(request.id),
        user_id=str(request.user_id),
        club_id=str(request.club_id),
        status=MembershipStatus(request.status),
        requested_at=as_utc(request.requested_at),
        reviewed_at=as_utc(request.reviewed_at),
        reviewed_by=id_str(request.reviewed_by),
        notes=request.notes,
        club_name=request.club.name if request.club else None,
        user_name=request.user.name if request.user else None,
        user_email=request.user.email if request.user else None,
    )


class MembershipRepository(BaseRepository, MembershipStore):

    def _get_row(self, request_id: str) -> ClubMembershipRequest:
        uid = as_uuid(request_id)
        request = self.db.get(ClubMembershipRequest, uid) if uid is not None else None
        if request is None:
            raise MembershipRequestNotFoundException("Membership request not found")
        return request

    def get_by_id(self, request_id: str) -> Optional[MembershipRequestRecord]:
        uid = as_uuid(request_id)
        if uid is None:
            return None
        request = self.db.get(ClubMembershipRequest, uid)
        return membership_to_record(request) if request else None

    def get_by_user_and_club(self, user_id: str, club_id: str) -> Optional[MembershipRequestRecord]:
        stmt = select(ClubMembershipRequest).where(
            ClubMembershipRequest.user_id == as_uuid(user_id),
            ClubMembershipRequest.club_id == as_uuid(club_id)
        )
        request = self.db.execute(stmt).scalar_one_or_none()
        return membership_to_record(request) if request else None

    def create(self, user_id: str, club_id: str, requested_at: datetime) -> MembershipRequestRecord:
        request = ClubMembershipRequest(
            user_id=as_uuid(user_id),
            club_id=as_uuid(club_id),
            status=MembershipStatus.PENDING.value,
            requested_at=requested_at,
        )
        self.db.add(request)
        self.db.flush()
        return membership_to_record(request)

    def reset_to_pending(self, request_id: str, requested_at: datetime) -> MembershipRequestRecord:
        request = self._get_row(request_id)
        request.status = MembershipStatus.PENDING.value
        request.requested_at = requested_at
        request.reviewed_at = None
        request.reviewed_by = None
        request.notes = None
        self.db.flush()
        return membership_to_record(request)

    def mark_reviewed(
        self,
        request_id: str,
        status: MembershipStatus,
        reviewed_by: str,
        reviewed_at: datetime,
        notes: Optional[str] = None
    ) -> MembershipRequestRecord:
        request = self._get_row(request_id)
        request.status = MembershipStatus(status).value
        request.reviewed_by = as_uuid(reviewed_by)
        request.reviewed_at = reviewed_at
        request.notes = notes
        self.db.flush()
        return membership_to_record(request)

    def list_pending_for_clubs(self, club_ids: List[str]) -> List[MembershipRequestRecord]:
        uids = [uid for uid in (as_uuid(c) for c in club_ids) if uid is not None]
        if not uids:
            return []
        stmt = (
            select(ClubMembershipRequest)
            .where(
                ClubMembershipRequest.club_id.in_(uids),
                ClubMembershipRequest.status == MembershipStatus.PENDING.value
            )
            .order_by(ClubMembershipRequest.requested_at.desc())
        )
        return [membership_to_record(r) for r in self.db.execute(stmt).scalars().all()]
