from typing import List, Optional, Tuple

from sqlalchemy import select, func

from core.boxers.models import ClubRecord, UserRecord, UserRole
from core.clubs.models import ClubSearchFilters
from core.interfaces import ClubStore, UserStore
from database.models import Club, User
from database.repositories.base import BaseRepository, as_uuid, id_str


def club_to_record(club: Club) -> ClubRecord:
    return ClubRecord(
        id=str(club.id),
        name=club.name,
        owner_id=id_str(club.owner_id),
        city=club.city,
        country=club.country,
    )


class UserRepository(BaseRepository, UserStore):

    def get_by_id(self, user_id: str) -> Optional[UserRecord]:
        uid = as_uuid(user_id)
        if uid is None:
            return None
        user = self.db.get(User, uid)
        if user is None:
            return None
        return UserRecord(
            id=str(user.id),
            email=user.email,
            name=user.name,
            role=UserRole(user.role),
            is_active=bool(user.is_active),
        )


class ClubRepository(BaseRepository, ClubStore):

    def get_by_id(self, club_id: str) -> Optional[ClubRecord]:
        uid = as_uuid(club_id)
        if uid is None:
            return None
        club = self.db.get(Club, uid)
        return club_to_record(club) if club else None

    def is_owner(self, user_id: str, club_id: str) -> bool:
        club = self.get_by_id(club_id)
        return club is not None and club.owner_id is not None and club.owner_id == id_str(as_uuid(user_id))

    def owned_club_ids(self, user_id: str) -> List[str]:
        uid = as_uuid(user_id)
        if uid is None:
            return []
        stmt = select(Club.id).where(Club.owner_id == uid)
        return [str(cid) for cid in self.db.execute(stmt).scalars().all()]

    def list_by_owner(self, user_id: str) -> List[ClubRecord]:
        uid = as_uuid(user_id)
        if uid is None:
            return []
        stmt = select(Club).where(Club.owner_id == uid).order_by(Club.name.asc())
        return [club_to_record(c) for c in self.db.execute(stmt).scalars().all()]

    def search(
        self,
        filters: ClubSearchFilters,
        offset: int = 0,
        limit: int = 50
    ) -> Tuple[List[ClubRecord], int]:
        stmt = select(Club)
        for column, value in ((Club.name, filters.name), (Club.city, filters.city), (Club.country, filters.country)):
            if value:
                stmt = stmt.where(func.lower(column).contains(value.lower(), autoescape=True))

        total = self.db.execute(select(func.count()).select_from(stmt.subquery())).scalar_one()

        stmt = stmt.order_by(Club.name.asc(), Club.id.asc()).offset(offset).limit(limit)
        clubs = [club_to_record(c) for c in self.db.execute(stmt).scalars().all()]
        return clubs, total
