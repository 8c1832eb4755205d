#!/usr/bin/env python3
"""
Club Service - Read-only club directory.

Clubs are listed by name so a boxer can find the club id to send a
membership request to.
"""

import logging
from typing import List, Optional

from core.boxers.models import ClubRecord
from core.clubs.models import ClubSearchFilters, PaginatedClubs
from core.exceptions import ClubNotFoundException
from core.interfaces import ClubStore

logger = logging.getLogger(__name__)


class ClubService:

    def __init__(self, club_store: ClubStore, max_page_size: int = 100):
        self.clubs = club_store
        self.max_page_size = max_page_size

    def get_clubs(
        self,
        filters: Optional[ClubSearchFilters] = None,
        page: int = 1,
        limit: int = 50
    ) -> PaginatedClubs:
        """Clubs matching ``filters``, ordered by name."""
        filters = filters or ClubSearchFilters()
        page = max(page, 1)
        limit = min(max(limit, 1), self.max_page_size)
        clubs, total = self.clubs.search(filters, offset=(page - 1) * limit, limit=limit)
        return PaginatedClubs(clubs=clubs, total=total, page=page, limit=limit)

    def get_club(self, club_id: str) -> ClubRecord:
        club = self.clubs.get_by_id(club_id)
        if club is None:
            raise ClubNotFoundException("Club not found")
        return club

    def search_clubs_by_name(self, query: str, limit: int = 10) -> List[ClubRecord]:
        """Name autocomplete. A blank query matches nothing."""
        query = (query or "").strip()
        if not query:
            return []
        clubs, _ = self.clubs.search(ClubSearchFilters(name=query), offset=0, limit=limit)
        return clubs

    def get_clubs_by_owner(self, owner_id: str) -> List[ClubRecord]:
        return self.clubs.list_by_owner(owner_id)
