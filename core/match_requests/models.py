#!/usr/bin/env python3
"""
Match Request Models - Status enum and value types for the request lifecycle.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Dict, Any, Optional

from core.boxers.models import BoxerRecord


class MatchRequestStatus(str, Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    DECLINED = "DECLINED"
    CANCELLED = "CANCELLED"
    EXPIRED = "EXPIRED"

    @property
    def is_terminal(self) -> bool:
        return self is not MatchRequestStatus.PENDING


class RequestDirection(str, Enum):
    INCOMING = "incoming"  # boxer is the target
    OUTGOING = "outgoing"  # boxer is the requester


@dataclass(frozen=True)
class MatchRequestRecord:
    id: str
    requester_boxer_id: str
    target_boxer_id: str
    status: MatchRequestStatus
    expires_at: datetime
    created_at: datetime
    updated_at: Optional[datetime] = None
    message: Optional[str] = None
    response_message: Optional[str] = None
    proposed_date: Optional[datetime] = None
    proposed_venue: Optional[str] = None
    requester: Optional[BoxerRecord] = None
    target: Optional[BoxerRecord] = None

    @property
    def is_pending(self) -> bool:
        return self.status == MatchRequestStatus.PENDING

    def is_expired_at(self, now: datetime) -> bool:
        return now > self.expires_at

    def involves(self, boxer_id: str) -> bool:
        return boxer_id in (self.requester_boxer_id, self.target_boxer_id)


@dataclass
class MatchRequestStats:
    pending: int = 0
    accepted: int = 0
    declined: int = 0
    cancelled: int = 0
    expired: int = 0
    total: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            'pending': self.pending,
            'accepted': self.accepted,
            'declined': self.declined,
            'cancelled': self.cancelled,
            'expired': self.expired,
            'total': self.total,
        }


@dataclass
class PaginatedMatchRequests:
    items: List[MatchRequestRecord] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 20

    @property
    def total_pages(self) -> int:
        return (self.total + self.limit - 1) // self.limit if self.limit else 0
