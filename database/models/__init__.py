from .base import Base
from .user import User, Club
from .boxer import Boxer
from .match_request import MatchRequest
from .membership import ClubMembershipRequest
from .availability import Availability

__all__ = [
    'Base',
    'User',
    'Club',
    'Boxer',
    'MatchRequest',
    'ClubMembershipRequest',
    'Availability',
]
