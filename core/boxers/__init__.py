"""Boxers Module - Boxer profile value types. The service lives in core.boxers.service."""
from core.boxers.models import (
    ExperienceLevel, Gender, UserRole, UserRecord, ClubRecord, BoxerRecord,
    CandidateQuery, BoxerSearchFilters, PaginatedBoxers
)

__all__ = [
    'ExperienceLevel', 'Gender', 'UserRole', 'UserRecord', 'ClubRecord', 'BoxerRecord',
    'CandidateQuery', 'BoxerSearchFilters', 'PaginatedBoxers'
]
