#!/usr/bin/env python3
"""
Club membership endpoints - boxers ask to join, gym owners review.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Request

from core.boxers.models import UserRecord, UserRole
from core.membership.service import MembershipService
from ..dependencies import get_current_user, get_membership_service, require_role
from ..models.requests import MembershipReview
from ..models.responses import (
    BoxerEnvelope,
    BoxerResponse,
    MembershipRequestEnvelope,
    MembershipRequestListResponse,
    MembershipRequestResponse,
)
from ..rate_limit import create_limit, limiter
from ..utils import validate_uuid

logger = logging.getLogger(__name__)

router = APIRouter(tags=["membership"])

owner_only = require_role(UserRole.GYM_OWNER, UserRole.ADMIN)


@router.post("/api/clubs/{club_id}/membership-requests", response_model=MembershipRequestEnvelope, status_code=201)
@limiter.limit(create_limit)
def request_membership(
    request: Request,
    club_id: str,
    user: UserRecord = Depends(get_current_user),
    service: MembershipService = Depends(get_membership_service)
):
    """Ask to join a club. Repeating the call while PENDING returns the same request."""
    validate_uuid(club_id, "club_id")
    created = service.create_membership_request(user.id, club_id)
    return MembershipRequestEnvelope(request=MembershipRequestResponse.from_record(created))


@router.get("/api/gym-owner/membership-requests", response_model=MembershipRequestListResponse)
def list_pending_requests(
    owner: UserRecord = Depends(owner_only),
    service: MembershipService = Depends(get_membership_service)
):
    """PENDING requests across every club the caller owns, newest first."""
    requests = service.get_pending_requests_for_owner(owner.id)
    return MembershipRequestListResponse(
        count=len(requests),
        requests=[MembershipRequestResponse.from_record(r) for r in requests]
    )


@router.post("/api/gym-owner/membership-requests/{request_id}/approve", response_model=BoxerEnvelope)
def approve_request(
    request_id: str,
    owner: UserRecord = Depends(owner_only),
    service: MembershipService = Depends(get_membership_service)
):
    """Approve and assign the requesting boxer to the club."""
    validate_uuid(request_id, "request_id")
    boxer = service.approve_request(request_id, owner.id)
    return BoxerEnvelope(boxer=BoxerResponse.from_record(boxer))


@router.post("/api/gym-owner/membership-requests/{request_id}/reject", response_model=MembershipRequestEnvelope)
def reject_request(
    request_id: str,
    body: Optional[MembershipReview] = Body(default=None),
    owner: UserRecord = Depends(owner_only),
    service: MembershipService = Depends(get_membership_service)
):
    validate_uuid(request_id, "request_id")
    rejected = service.reject_request(request_id, owner.id, notes=body.notes if body else None)
    return MembershipRequestEnvelope(request=MembershipRequestResponse.from_record(rejected))
