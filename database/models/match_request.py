import uuid

from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, Enum, Index, CheckConstraint, Uuid, func
from sqlalchemy.sql import text as sql_text
from sqlalchemy.orm import relationship

from core.match_requests.models import MatchRequestStatus
from .base import Base, utc_now


class MatchRequest(Base):
    """
    A proposed bout from a requester boxer to a target boxer.

    At most one PENDING request may exist per ordered (requester, target)
    pair; the partial unique index enforces it under concurrent inserts.
    """
    __tablename__ = 'match_requests'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    requester_boxer_id = Column(Uuid, ForeignKey('boxers.id', ondelete='CASCADE'), nullable=False)
    target_boxer_id = Column(Uuid, ForeignKey('boxers.id', ondelete='CASCADE'), nullable=False)

    status = Column(
        Enum(*[s.value for s in MatchRequestStatus], name='match_request_status'),
        nullable=False,
        default=MatchRequestStatus.PENDING.value
    )

    message = Column(Text)
    response_message = Column(Text)
    proposed_date = Column(TIMESTAMP(timezone=True))
    proposed_venue = Column(Text)

    expires_at = Column(TIMESTAMP(timezone=True), nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utc_now, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utc_now, server_default=func.now(), onupdate=utc_now)

    requester_boxer = relationship("Boxer", foreign_keys=[requester_boxer_id])
    target_boxer = relationship("Boxer", foreign_keys=[target_boxer_id])

    __table_args__ = (
        CheckConstraint('requester_boxer_id <> target_boxer_id', name='ck_match_requests_distinct_boxers'),
        Index(
            'uq_match_requests_pending_pair',
            'requester_boxer_id', 'target_boxer_id',
            unique=True,
            postgresql_where=sql_text("status = 'PENDING'"),
            sqlite_where=sql_text("status = 'PENDING'"),
        ),
        Index('idx_match_requests_requester', 'requester_boxer_id'),
        Index('idx_match_requests_target', 'target_boxer_id'),
        Index('idx_match_requests_status', 'status'),
        Index('idx_match_requests_expires_at', 'expires_at'),
        Index('idx_match_requests_status_expires', 'status', 'expires_at'),
    )
