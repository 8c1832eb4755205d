from database.repositories.base import BaseRepository
from database.repositories.boxer import BoxerRepository
from database.repositories.user import UserRepository, ClubRepository
from database.repositories.match_request import MatchRequestRepository
from database.repositories.membership import MembershipRepository
from database.repositories.availability import AvailabilityRepository

__all__ = [
    'BaseRepository',
    'BoxerRepository',
    'UserRepository',
    'ClubRepository',
    'MatchRequestRepository',
    'MembershipRepository',
    'AvailabilityRepository',
]
