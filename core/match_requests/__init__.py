"""Match Requests Module - Request lifecycle types. The service lives in core.match_requests.service."""
from core.match_requests.models import (
    MatchRequestStatus, RequestDirection, MatchRequestRecord,
    MatchRequestStats, PaginatedMatchRequests
)

__all__ = [
    'MatchRequestStatus', 'RequestDirection', 'MatchRequestRecord',
    'MatchRequestStats', 'PaginatedMatchRequests'
]
