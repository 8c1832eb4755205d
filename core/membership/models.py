"""Club membership request value types."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class MembershipStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


@dataclass(frozen=True)
class MembershipRequestRecord:
    id: str
    user_id: str
    club_id: str
    status: MembershipStatus
    requested_at: datetime
    reviewed_at: Optional[datetime] = None
    reviewed_by: Optional[str] = None
    notes: Optional[str] = None
    club_name: Optional[str] = None
    user_name: Optional[str] = None
    user_email: Optional[str] = None

    @property
    def is_pending(self) -> bool:
        return self.status == MembershipStatus.PENDING
