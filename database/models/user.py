import uuid

from sqlalchemy import Column, Text, Boolean, TIMESTAMP, ForeignKey, Enum, Index, Uuid, func
from sqlalchemy.orm import relationship

from core.boxers.models import UserRole
from .base import Base, utc_now


class User(Base):
    """
    User account. Credentials live with the auth gateway, not here.
    """
    __tablename__ = 'users'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(Text, nullable=False, unique=True)
    name = Column(Text, nullable=False)
    role = Column(
        Enum(*[r.value for r in UserRole], name='user_role'),
        nullable=False,
        default=UserRole.BOXER.value
    )
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utc_now, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utc_now, server_default=func.now(), onupdate=utc_now)

    boxer = relationship("Boxer", back_populates="user", uselist=False)
    owned_clubs = relationship("Club", back_populates="owner")

    __table_args__ = (
        Index('idx_users_role', 'role'),
    )


class Club(Base):
    """
    Boxing club. ``owner_id`` is the gym owner who reviews membership requests.
    """
    __tablename__ = 'clubs'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    owner_id = Column(Uuid, ForeignKey('users.id', ondelete='SET NULL'), nullable=True)
    city = Column(Text)
    country = Column(Text)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utc_now, server_default=func.now())

    owner = relationship("User", back_populates="owned_clubs")
    boxers = relationship("Boxer", back_populates="club")

    __table_args__ = (
        Index('idx_clubs_owner', 'owner_id'),
    )
