#!/usr/bin/env python3
"""
Boxer endpoints - profiles, search and compatible opponents.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request

from core.boxers.models import BoxerRecord, BoxerSearchFilters, ExperienceLevel, UserRecord
from core.boxers.service import BoxerService
from core.exceptions import ForbiddenException
from core.matching.models import MatchingOptions
from core.matching.service import MatchingService
from ..dependencies import get_boxer_service, get_current_boxer, get_current_user, get_matching_service
from ..models.requests import BoxerCreate, BoxerUpdate
from ..models.responses import (
    BoxerEnvelope,
    BoxerListResponse,
    BoxerResponse,
    MatchesResponse,
    MatchScoreResponse,
)
from ..rate_limit import create_limit, limiter, search_limit
from ..utils import validate_uuid

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/boxers", tags=["boxers"])


@router.post("", response_model=BoxerEnvelope, status_code=201)
@limiter.limit(create_limit)
def create_boxer(
    request: Request,
    body: BoxerCreate,
    user: UserRecord = Depends(get_current_user),
    service: BoxerService = Depends(get_boxer_service)
):
    """Create the caller's boxer profile, or complete the one made at registration."""
    boxer = service.create_boxer(user.id, body.model_dump())
    return BoxerEnvelope(boxer=BoxerResponse.from_record(boxer))


@router.get("", response_model=BoxerListResponse)
@limiter.limit(search_limit)
def search_boxers(
    request: Request,
    city: Optional[str] = Query(default=None, max_length=100),
    country: Optional[str] = Query(default=None, max_length=100),
    experience_level: Optional[ExperienceLevel] = Query(default=None),
    min_weight: Optional[float] = Query(default=None, ge=0),
    max_weight: Optional[float] = Query(default=None, ge=0),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    user: UserRecord = Depends(get_current_user),
    service: BoxerService = Depends(get_boxer_service)
):
    """
    Search searchable boxers.

    Verified boxers come first, then the newest profiles.
    """
    filters = BoxerSearchFilters(
        city=city,
        country=country,
        experience_level=experience_level,
        min_weight=min_weight,
        max_weight=max_weight,
    )
    return BoxerListResponse.from_page(service.search_boxers(filters, page=page, limit=limit))


@router.get("/me", response_model=BoxerEnvelope)
def get_my_profile(
    user: UserRecord = Depends(get_current_user),
    service: BoxerService = Depends(get_boxer_service)
):
    return BoxerEnvelope(boxer=BoxerResponse.from_record(service.get_boxer_by_user(user.id)))


@router.get("/me/suggestions", response_model=MatchesResponse)
def get_my_suggestions(
    limit: int = Query(default=10, ge=1, le=50),
    boxer: BoxerRecord = Depends(get_current_boxer),
    matching: MatchingService = Depends(get_matching_service)
):
    """Top suggested opponents for the caller."""
    matches = matching.get_suggested_matches(boxer.id, limit)
    return MatchesResponse(
        matches=[MatchScoreResponse.from_score(m) for m in matches],
        total=len(matches)
    )


@router.get("/{boxer_id}", response_model=BoxerEnvelope)
def get_boxer(
    boxer_id: str,
    user: UserRecord = Depends(get_current_user),
    service: BoxerService = Depends(get_boxer_service)
):
    validate_uuid(boxer_id, "boxer_id")
    return BoxerEnvelope(boxer=BoxerResponse.from_record(service.get_boxer(boxer_id)))


@router.put("/{boxer_id}", response_model=BoxerEnvelope)
def update_boxer(
    boxer_id: str,
    body: BoxerUpdate,
    user: UserRecord = Depends(get_current_user),
    service: BoxerService = Depends(get_boxer_service)
):
    validate_uuid(boxer_id, "boxer_id")
    boxer = service.update_boxer(boxer_id, user.id, body.changes())
    return BoxerEnvelope(boxer=BoxerResponse.from_record(boxer))


@router.delete("/{boxer_id}", response_model=BoxerEnvelope)
def deactivate_boxer(
    boxer_id: str,
    user: UserRecord = Depends(get_current_user),
    service: BoxerService = Depends(get_boxer_service)
):
    """Hide the profile from search and matching. The profile itself is kept."""
    validate_uuid(boxer_id, "boxer_id")
    boxer = service.deactivate_boxer(boxer_id, user.id)
    return BoxerEnvelope(boxer=BoxerResponse.from_record(boxer))


@router.get("/{boxer_id}/matches", response_model=MatchesResponse)
@limiter.limit(search_limit)
def get_compatible_boxers(
    request: Request,
    boxer_id: str,
    limit: int = Query(default=20, ge=1, le=100),
    experience_levels: Optional[List[ExperienceLevel]] = Query(default=None),
    city: Optional[str] = Query(default=None, max_length=100),
    country: Optional[str] = Query(default=None, max_length=100),
    user: UserRecord = Depends(get_current_user),
    service: BoxerService = Depends(get_boxer_service),
    matching: MatchingService = Depends(get_matching_service)
):
    """
    Ranked compatible opponents for one of the caller's own profiles.
    """
    validate_uuid(boxer_id, "boxer_id")
    boxer = service.get_boxer(boxer_id)
    if boxer.user_id != user.id:
        raise ForbiddenException("Not authorized to view matches for this profile")

    options = MatchingOptions(
        limit=limit,
        experience_levels=experience_levels or None,
        city=city,
        country=country,
    )
    result = matching.find_compatible_boxers(boxer.id, options)
    return MatchesResponse(
        matches=[MatchScoreResponse.from_score(m) for m in result.matches],
        total=result.total
    )
