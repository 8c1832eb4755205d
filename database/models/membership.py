import uuid

from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, Enum, Index, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from core.membership.models import MembershipStatus
from .base import Base, utc_now


class ClubMembershipRequest(Base):
    """
    A user's request to join a club. One row per (user, club); a rejected
    request is reopened rather than duplicated.
    """
    __tablename__ = 'club_membership_requests'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    club_id = Column(Uuid, ForeignKey('clubs.id', ondelete='CASCADE'), nullable=False)

    status = Column(
        Enum(*[s.value for s in MembershipStatus], name='membership_status'),
        nullable=False,
        default=MembershipStatus.PENDING.value
    )
    requested_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utc_now)
    reviewed_at = Column(TIMESTAMP(timezone=True))
    reviewed_by = Column(Uuid, ForeignKey('users.id', ondelete='SET NULL'), nullable=True)
    notes = Column(Text)

    user = relationship("User", foreign_keys=[user_id])
    club = relationship("Club")

    __table_args__ = (
        UniqueConstraint('user_id', 'club_id', name='uq_membership_user_club'),
        Index('idx_membership_club_status', 'club_id', 'status'),
    )
