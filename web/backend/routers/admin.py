#!/usr/bin/env python3
"""
Admin endpoints - maintenance operations.
"""

import logging

from fastapi import APIRouter, Depends

from core.boxers.models import UserRecord, UserRole
from core.match_requests.service import MatchRequestService
from ..dependencies import get_match_request_service, require_role
from ..models.responses import ExpireRequestsResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.post("/match-requests/expire", response_model=ExpireRequestsResponse)
def expire_match_requests(
    admin: UserRecord = Depends(require_role(UserRole.ADMIN)),
    service: MatchRequestService = Depends(get_match_request_service)
):
    """
    Run the expiry sweep once: every PENDING request past its expiry
    becomes EXPIRED. Safe to call repeatedly.
    """
    count = service.expire_old_requests()
    logger.info(f"Expiry sweep triggered by {admin.id}: {count} expired")
    return ExpireRequestsResponse(expired=count)
