#!/usr/bin/env python3
"""
Boxer Service - Boxer profile management.

Every mutation that can change how a boxer scores against others clears
the match cache through the MatchingService.
"""

import logging
from typing import Any, Dict, Optional

from core.boxers.models import BoxerRecord, BoxerSearchFilters, PaginatedBoxers
from core.exceptions import BoxerNotFoundException, ClubNotFoundException, ForbiddenException
from core.interfaces import BoxerStore, ClubStore
from core.matching.service import MatchingService

logger = logging.getLogger(__name__)

# Fields a profile owner may write directly
EDITABLE_FIELDS = frozenset({
    'name', 'gender', 'weight_kg', 'height_cm', 'city', 'country',
    'experience_level', 'wins', 'losses', 'draws', 'gym_affiliation',
    'bio', 'is_searchable', 'club_id',
})


class BoxerService:
    """Create, read, update and deactivate boxer profiles."""

    def __init__(
        self,
        boxer_store: BoxerStore,
        club_store: ClubStore,
        matching_service: Optional[MatchingService] = None
    ):
        self.boxers = boxer_store
        self.clubs = club_store
        self.matching_service = matching_service

    def _invalidate(self, boxer_id: str) -> None:
        if self.matching_service is not None:
            self.matching_service.invalidate_match_cache(boxer_id)

    def _clean(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Keep editable fields and resolve club_id into a club assignment."""
        fields = {k: v for k, v in data.items() if k in EDITABLE_FIELDS}

        if 'club_id' in fields and fields['club_id']:
            club = self.clubs.get_by_id(fields['club_id'])
            if club is None:
                raise ClubNotFoundException("Club not found")
            fields['club_id'] = club.id
            fields['gym_affiliation'] = club.name
        elif 'club_id' in fields:
            fields['club_id'] = None
        return fields

    def create_boxer(self, user_id: str, data: Dict[str, Any]) -> BoxerRecord:
        """
        Complete the user's boxer profile.

        A basic profile may already exist from registration; it is updated
        in place instead of inserting a second one.
        """
        fields = self._clean(data)
        existing = self.boxers.get_by_user_id(user_id)
        if existing is not None:
            boxer = self.boxers.update(existing.id, fields)
            self.boxers.commit()
            logger.info(f"Completed boxer profile {boxer.id} for user {user_id}")
            self._invalidate(boxer.id)
            return boxer

        boxer = self.boxers.create(user_id, fields)
        self.boxers.commit()
        logger.info(f"Created boxer profile {boxer.id} for user {user_id}")
        self._invalidate(boxer.id)
        return boxer

    def _can_edit(self, boxer: BoxerRecord, acting_user_id: str) -> bool:
        if boxer.user_id == acting_user_id:
            return True
        return bool(boxer.club_id) and self.clubs.is_owner(acting_user_id, boxer.club_id)

    def get_boxer(self, boxer_id: str) -> BoxerRecord:
        boxer = self.boxers.get_by_id(boxer_id)
        if boxer is None:
            raise BoxerNotFoundException("Boxer not found")
        return boxer

    def get_boxer_by_user(self, user_id: str) -> BoxerRecord:
        boxer = self.boxers.get_by_user_id(user_id)
        if boxer is None:
            raise BoxerNotFoundException("Boxer profile not found")
        return boxer

    def update_boxer(
        self,
        boxer_id: str,
        acting_user_id: str,
        changes: Dict[str, Any]
    ) -> BoxerRecord:
        """
        Update a profile as its owner or as the owner of the boxer's club.

        Raises:
            BoxerNotFoundException: unknown boxer
            ForbiddenException: caller is neither the boxer nor their club owner
            ClubNotFoundException: ``club_id`` names no club
        """
        boxer = self.boxers.get_by_id(boxer_id)
        if boxer is None:
            raise BoxerNotFoundException("Boxer profile not found")

        if not self._can_edit(boxer, acting_user_id):
            raise ForbiddenException("Not authorized to update this profile")

        fields = self._clean(changes)
        if not fields:
            return boxer

        updated = self.boxers.update(boxer.id, fields)
        self.boxers.commit()
        logger.info(f"Updated boxer {boxer.id}: {sorted(fields)}")
        self._invalidate(boxer.id)
        return updated

    def deactivate_boxer(self, boxer_id: str, acting_user_id: str) -> BoxerRecord:
        """Soft delete: the profile stays but is no longer searchable."""
        boxer = self.boxers.get_by_id(boxer_id)
        if boxer is None:
            raise BoxerNotFoundException("Boxer profile not found")

        if boxer.user_id != acting_user_id:
            raise ForbiddenException("Not authorized to delete this profile")

        updated = self.boxers.update(boxer.id, {'is_searchable': False})
        self.boxers.commit()
        logger.info(f"Deactivated boxer {boxer.id}")
        self._invalidate(boxer.id)
        return updated

    def search_boxers(
        self,
        filters: Optional[BoxerSearchFilters] = None,
        page: int = 1,
        limit: int = 20
    ) -> PaginatedBoxers:
        """Searchable boxers of active users, verified first then newest."""
        filters = filters or BoxerSearchFilters()
        page = max(page, 1)
        boxers, total = self.boxers.search(filters, offset=(page - 1) * limit, limit=limit)
        return PaginatedBoxers(boxers=boxers, total=total, page=page, limit=limit)
