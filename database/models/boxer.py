import uuid

from sqlalchemy import Column, Text, Boolean, Integer, Numeric, TIMESTAMP, ForeignKey, Enum, Index, Uuid, func
from sqlalchemy.orm import relationship

from core.boxers.models import ExperienceLevel, Gender
from .base import Base, utc_now


class Boxer(Base):
    """
    Boxer profile, one per user.

    Never hard-deleted while match requests reference it; deactivation
    clears ``is_searchable`` instead.
    """
    __tablename__ = 'boxers'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True)

    name = Column(Text, nullable=False)
    gender = Column(Enum(*[g.value for g in Gender], name='gender'))
    weight_kg = Column(Numeric(5, 2, asdecimal=False))
    height_cm = Column(Integer)
    city = Column(Text)
    country = Column(Text)

    experience_level = Column(
        Enum(*[e.value for e in ExperienceLevel], name='experience_level'),
        nullable=False,
        default=ExperienceLevel.BEGINNER.value
    )
    wins = Column(Integer, nullable=False, default=0)
    losses = Column(Integer, nullable=False, default=0)
    draws = Column(Integer, nullable=False, default=0)

    gym_affiliation = Column(Text)
    club_id = Column(Uuid, ForeignKey('clubs.id', ondelete='SET NULL'), nullable=True)
    bio = Column(Text)

    is_searchable = Column(Boolean, nullable=False, default=True)
    is_verified = Column(Boolean, nullable=False, default=False)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utc_now, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utc_now, server_default=func.now(), onupdate=utc_now)

    user = relationship("User", back_populates="boxer")
    club = relationship("Club", back_populates="boxers")

    __table_args__ = (
        Index('idx_boxers_searchable_level', 'is_searchable', 'experience_level'),
        Index('idx_boxers_weight', 'weight_kg'),
        Index('idx_boxers_club', 'club_id'),
    )
