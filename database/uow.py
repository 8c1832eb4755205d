import contextlib
import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from database.database import get_database_manager
from database.repositories import (
    AvailabilityRepository,
    BoxerRepository,
    ClubRepository,
    MatchRequestRepository,
    MembershipRepository,
    UserRepository,
)

logger = logging.getLogger(__name__)


@dataclass
class Repositories:
    """All repositories bound to one Session, so they commit together."""
    session: Session
    users: UserRepository
    clubs: ClubRepository
    boxers: BoxerRepository
    match_requests: MatchRequestRepository
    memberships: MembershipRepository
    availability: AvailabilityRepository

    @classmethod
    def for_session(cls, session: Session) -> "Repositories":
        return cls(
            session=session,
            users=UserRepository(session),
            clubs=ClubRepository(session),
            boxers=BoxerRepository(session),
            match_requests=MatchRequestRepository(session),
            memberships=MembershipRepository(session),
            availability=AvailabilityRepository(session),
        )


@contextlib.contextmanager
def boxing_uow(manager=None):
    """Per-unit-of-work transaction scope.

    Yields Repositories bound to a fresh Session. Commits on success,
    rolls back on exception, always closes.

    Usage:
        with boxing_uow() as repos:
            service = MatchRequestService(repos.match_requests, repos.boxers)
            service.expire_old_requests()
    """
    manager = manager or get_database_manager()
    session = manager.SessionLocal()
    try:
        yield Repositories.for_session(session)
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
