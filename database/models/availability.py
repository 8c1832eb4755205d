import uuid

from sqlalchemy import Column, Boolean, Date, String, Time, TIMESTAMP, ForeignKey, Index, CheckConstraint, Uuid, func
from sqlalchemy.orm import relationship

from .base import Base, utc_now


class Availability(Base):
    """
    A window on one date when a boxer can train or spar. Overlaps between
    slots of the same boxer are rejected by the service.
    """
    __tablename__ = 'availability'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    boxer_id = Column(Uuid, ForeignKey('boxers.id', ondelete='CASCADE'), nullable=False)

    date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    is_available = Column(Boolean, nullable=False, default=True)
    notes = Column(String(500))

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utc_now, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utc_now, server_default=func.now(), onupdate=utc_now)

    boxer = relationship("Boxer")

    __table_args__ = (
        CheckConstraint('end_time > start_time', name='ck_availability_window'),
        Index('idx_availability_boxer', 'boxer_id'),
        Index('idx_availability_date', 'date'),
        Index('idx_availability_open_date', 'is_available', 'date'),
    )
