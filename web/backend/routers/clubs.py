#!/usr/bin/env python3
"""
Club directory endpoints - find a club to request membership of.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from core.boxers.models import UserRecord, UserRole
from core.clubs.models import ClubSearchFilters
from core.clubs.service import ClubService
from ..dependencies import get_club_service, get_current_user, require_role
from ..models.responses import ClubEnvelope, ClubListResponse, ClubResponse, ClubSearchResponse
from ..rate_limit import limiter, search_limit
from ..utils import validate_uuid

logger = logging.getLogger(__name__)

router = APIRouter(tags=["clubs"])


@router.get("/api/clubs", response_model=ClubListResponse)
@limiter.limit(search_limit)
def list_clubs(
    request: Request,
    name: Optional[str] = Query(default=None, max_length=100),
    city: Optional[str] = Query(default=None, max_length=100),
    country: Optional[str] = Query(default=None, max_length=100),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=50, ge=1, le=100),
    user: UserRecord = Depends(get_current_user),
    service: ClubService = Depends(get_club_service)
):
    """Clubs ordered by name, filtered by case-insensitive substrings."""
    filters = ClubSearchFilters(name=name, city=city, country=country)
    return ClubListResponse.from_page(service.get_clubs(filters, page=page, limit=limit))


@router.get("/api/clubs/search", response_model=ClubSearchResponse)
@limiter.limit(search_limit)
def search_clubs(
    request: Request,
    q: str = Query(..., min_length=1, max_length=100),
    limit: int = Query(default=10, ge=1, le=50),
    user: UserRecord = Depends(get_current_user),
    service: ClubService = Depends(get_club_service)
):
    """Name autocomplete."""
    clubs = service.search_clubs_by_name(q, limit=limit)
    return ClubSearchResponse(clubs=[ClubResponse.from_record(c) for c in clubs])


@router.get("/api/clubs/{club_id}", response_model=ClubEnvelope)
def get_club(
    club_id: str,
    user: UserRecord = Depends(get_current_user),
    service: ClubService = Depends(get_club_service)
):
    validate_uuid(club_id, "club_id")
    return ClubEnvelope(club=ClubResponse.from_record(service.get_club(club_id)))


@router.get("/api/gym-owner/clubs", response_model=ClubSearchResponse)
def list_owned_clubs(
    owner: UserRecord = Depends(require_role(UserRole.GYM_OWNER, UserRole.ADMIN)),
    service: ClubService = Depends(get_club_service)
):
    """Clubs the caller owns."""
    clubs = service.get_clubs_by_owner(owner.id)
    return ClubSearchResponse(clubs=[ClubResponse.from_record(c) for c in clubs])
