#!/usr/bin/env python3
"""
Availability endpoints - a boxer's open training and sparring windows.

Slots are managed by the boxer or the owner of the boxer's club.
"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from core.availability.service import AvailabilityService
from core.boxers.models import BoxerRecord, UserRecord
from ..dependencies import get_availability_service, get_current_boxer, get_current_user
from ..models.requests import AvailabilityCreate, AvailabilityUpdate
from ..models.responses import (
    AvailabilityEnvelope,
    AvailabilityListResponse,
    AvailabilityResponse,
    DeletedResponse,
)
from ..rate_limit import create_limit, limiter
from ..utils import validate_uuid

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/boxers", tags=["availability"])


def _listing(slots) -> AvailabilityListResponse:
    return AvailabilityListResponse(
        count=len(slots),
        availability=[AvailabilityResponse.from_record(s) for s in slots]
    )


@router.get("/me/availability", response_model=AvailabilityListResponse)
def get_my_availability(
    boxer: BoxerRecord = Depends(get_current_boxer),
    service: AvailabilityService = Depends(get_availability_service)
):
    """Every slot of the caller's profile, including past ones."""
    return _listing(service.get_all_availability(boxer.id))


@router.get("/{boxer_id}/availability", response_model=AvailabilityListResponse)
def get_availability(
    boxer_id: str,
    start_date: Optional[date] = Query(default=None),
    end_date: Optional[date] = Query(default=None),
    user: UserRecord = Depends(get_current_user),
    service: AvailabilityService = Depends(get_availability_service)
):
    """Open slots in the date range; upcoming slots when no range is given."""
    validate_uuid(boxer_id, "boxer_id")
    return _listing(service.get_availability(boxer_id, start_date, end_date))


@router.post("/{boxer_id}/availability", response_model=AvailabilityEnvelope, status_code=201)
@limiter.limit(create_limit)
def create_availability(
    request: Request,
    boxer_id: str,
    body: AvailabilityCreate,
    user: UserRecord = Depends(get_current_user),
    service: AvailabilityService = Depends(get_availability_service)
):
    validate_uuid(boxer_id, "boxer_id")
    slot = service.create_availability(boxer_id, user.id, body.model_dump())
    return AvailabilityEnvelope(availability=AvailabilityResponse.from_record(slot))


@router.put("/{boxer_id}/availability/{slot_id}", response_model=AvailabilityEnvelope)
def update_availability(
    boxer_id: str,
    slot_id: str,
    body: AvailabilityUpdate,
    user: UserRecord = Depends(get_current_user),
    service: AvailabilityService = Depends(get_availability_service)
):
    validate_uuid(boxer_id, "boxer_id")
    validate_uuid(slot_id, "slot_id")
    slot = service.update_availability(slot_id, boxer_id, user.id, body.changes())
    return AvailabilityEnvelope(availability=AvailabilityResponse.from_record(slot))


@router.delete("/{boxer_id}/availability/{slot_id}", response_model=DeletedResponse)
def delete_availability(
    boxer_id: str,
    slot_id: str,
    user: UserRecord = Depends(get_current_user),
    service: AvailabilityService = Depends(get_availability_service)
):
    validate_uuid(boxer_id, "boxer_id")
    validate_uuid(slot_id, "slot_id")
    service.delete_availability(slot_id, boxer_id, user.id)
    return DeletedResponse(message="Availability slot deleted")
