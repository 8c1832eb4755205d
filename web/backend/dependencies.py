#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.

One Session per request; every service built for the request shares it
through a single Repositories bundle.
"""

import logging
from typing import Generator, Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from core.availability.service import AvailabilityService
from core.boxers.models import BoxerRecord, UserRecord, UserRole
from core.boxers.service import BoxerService
from core.cache.match_cache import get_match_cache, init_match_cache
from core.clubs.service import ClubService
from core.exceptions import BoxerNotFoundException
from core.interfaces import MatchCache
from core.match_requests.service import MatchRequestService
from core.matching.service import MatchingService
from core.membership.service import MembershipService
from database.database import get_database_manager
from database.uow import Repositories
from .config import get_config

logger = logging.getLogger(__name__)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a database session.

    Usage:
        @app.get("/endpoint")
        def my_endpoint(db: Session = Depends(get_db)):
            ...

    Yields:
        Session: Database session that will be automatically closed.
    """
    yield from get_database_manager().get_db()


def get_repositories(db: Session = Depends(get_db)) -> Repositories:
    return Repositories.for_session(db)


def get_cache() -> Optional[MatchCache]:
    """Shared Redis match cache, connected on first use."""
    cache = get_match_cache()
    if cache is None:
        cache_config = get_config().cache
        cache = init_match_cache(cache_config.redis_url, cache_config.password, cache_config.ttl_seconds)
    return cache


def get_matching_service(
    repos: Repositories = Depends(get_repositories),
    cache: Optional[MatchCache] = Depends(get_cache)
) -> MatchingService:
    config = get_config()
    return MatchingService(
        repos.boxers,
        cache=cache,
        config=config.matching,
        ttl_seconds=config.cache.ttl_seconds
    )


def get_match_request_service(repos: Repositories = Depends(get_repositories)) -> MatchRequestService:
    config = get_config()
    return MatchRequestService(
        repos.match_requests,
        repos.boxers,
        rules=config.matching.rules,
        policy=config.match_requests
    )


def get_boxer_service(
    repos: Repositories = Depends(get_repositories),
    matching_service: MatchingService = Depends(get_matching_service)
) -> BoxerService:
    return BoxerService(repos.boxers, repos.clubs, matching_service)


def get_membership_service(
    repos: Repositories = Depends(get_repositories),
    matching_service: MatchingService = Depends(get_matching_service)
) -> MembershipService:
    return MembershipService(repos.memberships, repos.clubs, repos.boxers, matching_service)


def get_club_service(repos: Repositories = Depends(get_repositories)) -> ClubService:
    return ClubService(repos.clubs)


def get_availability_service(repos: Repositories = Depends(get_repositories)) -> AvailabilityService:
    return AvailabilityService(repos.availability, repos.boxers, repos.clubs)


def get_current_user(
    x_user_id: Optional[str] = Header(default=None, alias="X-User-Id"),
    repos: Repositories = Depends(get_repositories)
) -> UserRecord:
    """
    Resolve the caller from the X-User-Id header set by the auth gateway.

    Raises:
        HTTPException(401): header missing, unknown user or inactive user.
    """
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Authentication required")

    user = repos.users.get_by_id(x_user_id)
    if user is None or not user.is_active:
        raise HTTPException(status_code=401, detail="Invalid or inactive user")
    return user


def get_current_boxer(
    user: UserRecord = Depends(get_current_user),
    repos: Repositories = Depends(get_repositories)
) -> BoxerRecord:
    boxer = repos.boxers.get_by_user_id(user.id)
    if boxer is None:
        raise BoxerNotFoundException("Boxer profile not found")
    return boxer


def require_role(*roles: UserRole):
    """Dependency factory: 403 unless the caller has one of ``roles``."""
    allowed = {UserRole(r) for r in roles}

    def _check(user: UserRecord = Depends(get_current_user)) -> UserRecord:
        if user.role not in allowed:
            raise HTTPException(status_code=403, detail="Insufficient permissions")
        return user

    return _check
