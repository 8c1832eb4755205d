"""Clubs Module - Club directory lookups."""
from core.clubs.models import ClubSearchFilters, PaginatedClubs

__all__ = ['ClubSearchFilters', 'PaginatedClubs']
