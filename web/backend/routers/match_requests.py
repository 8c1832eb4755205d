#!/usr/bin/env python3
"""
Match request endpoints - send, list and respond to match requests.

The caller acts as their own boxer profile; a user without one gets 404.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, Request

from core.boxers.models import BoxerRecord
from core.match_requests.models import MatchRequestStatus, RequestDirection
from core.match_requests.service import MatchRequestService
from ..dependencies import get_current_boxer, get_match_request_service
from ..models.requests import MatchRequestCreate, MatchRequestReply
from ..models.responses import (
    MatchRequestEnvelope,
    MatchRequestListResponse,
    MatchRequestResponse,
    MatchRequestStatsResponse,
    RequestCounts,
)
from ..rate_limit import create_limit, limiter
from ..utils import validate_uuid

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/match-requests", tags=["match-requests"])


def _envelope(record) -> MatchRequestEnvelope:
    return MatchRequestEnvelope(match_request=MatchRequestResponse.from_record(record))


@router.get("/stats", response_model=MatchRequestStatsResponse)
def get_request_stats(
    boxer: BoxerRecord = Depends(get_current_boxer),
    service: MatchRequestService = Depends(get_match_request_service)
):
    """Per-status counts of the caller's incoming and outgoing requests."""
    stats = service.get_request_stats(boxer.id)
    return MatchRequestStatsResponse(
        incoming=RequestCounts.from_stats(stats[RequestDirection.INCOMING.value]),
        outgoing=RequestCounts.from_stats(stats[RequestDirection.OUTGOING.value]),
    )


@router.get("", response_model=MatchRequestListResponse)
def list_match_requests(
    direction: RequestDirection = Query(default=RequestDirection.INCOMING, alias="type", description="incoming or outgoing"),
    status: Optional[MatchRequestStatus] = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    boxer: BoxerRecord = Depends(get_current_boxer),
    service: MatchRequestService = Depends(get_match_request_service)
):
    """Newest first."""
    result = service.get_match_requests_for_boxer(boxer.id, direction, status=status, page=page, limit=limit)
    return MatchRequestListResponse.from_page(result)


@router.post("", response_model=MatchRequestEnvelope, status_code=201)
@limiter.limit(create_limit)
def create_match_request(
    request: Request,
    body: MatchRequestCreate,
    boxer: BoxerRecord = Depends(get_current_boxer),
    service: MatchRequestService = Depends(get_match_request_service)
):
    created = service.create_match_request(
        boxer.id,
        str(body.target_boxer_id),
        message=body.message,
        proposed_date=body.proposed_date,
        proposed_venue=body.proposed_venue,
    )
    return _envelope(created)


@router.get("/{request_id}", response_model=MatchRequestEnvelope)
def get_match_request(
    request_id: str,
    boxer: BoxerRecord = Depends(get_current_boxer),
    service: MatchRequestService = Depends(get_match_request_service)
):
    validate_uuid(request_id, "request_id")
    return _envelope(service.get_match_request(request_id, boxer.id))


@router.put("/{request_id}/accept", response_model=MatchRequestEnvelope)
def accept_match_request(
    request_id: str,
    body: Optional[MatchRequestReply] = Body(default=None),
    boxer: BoxerRecord = Depends(get_current_boxer),
    service: MatchRequestService = Depends(get_match_request_service)
):
    validate_uuid(request_id, "request_id")
    message = body.response_message if body else None
    return _envelope(service.accept_match_request(request_id, boxer.id, message))


@router.put("/{request_id}/decline", response_model=MatchRequestEnvelope)
def decline_match_request(
    request_id: str,
    body: Optional[MatchRequestReply] = Body(default=None),
    boxer: BoxerRecord = Depends(get_current_boxer),
    service: MatchRequestService = Depends(get_match_request_service)
):
    validate_uuid(request_id, "request_id")
    message = body.response_message if body else None
    return _envelope(service.decline_match_request(request_id, boxer.id, message))


@router.delete("/{request_id}", response_model=MatchRequestEnvelope)
def cancel_match_request(
    request_id: str,
    boxer: BoxerRecord = Depends(get_current_boxer),
    service: MatchRequestService = Depends(get_match_request_service)
):
    validate_uuid(request_id, "request_id")
    return _envelope(service.cancel_match_request(request_id, boxer.id))
