import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import select, func, or_

from core.boxers.models import BoxerRecord, BoxerSearchFilters, CandidateQuery, ExperienceLevel, Gender
from core.exceptions import BoxerNotFoundException
from core.interfaces import BoxerStore
from database.models import Boxer, User
from database.repositories.base import BaseRepository, as_uuid, id_str

logger = logging.getLogger(__name__)


def boxer_to_record(boxer: Boxer) -> BoxerRecord:
    return BoxerRecord(
        id=str(boxer.id),
        user_id=str(boxer.user_id),
        name=boxer.name,
        weight_kg=float(boxer.weight_kg) if boxer.weight_kg is not None else None,
        wins=boxer.wins or 0,
        losses=boxer.losses or 0,
        draws=boxer.draws or 0,
        experience_level=ExperienceLevel(boxer.experience_level),
        city=boxer.city,
        country=boxer.country,
        is_searchable=bool(boxer.is_searchable),
        is_active=bool(boxer.user.is_active) if boxer.user is not None else True,
        height_cm=boxer.height_cm,
        gender=Gender(boxer.gender) if boxer.gender else None,
        gym_affiliation=boxer.gym_affiliation,
        club_id=id_str(boxer.club_id),
        bio=boxer.bio,
        is_verified=bool(boxer.is_verified),
    )


def _column_value(key: str, value: Any) -> Any:
    """Convert a record-level value into what the column stores."""
    if value is None:
        return None
    if key == 'experience_level':
        return ExperienceLevel(value).value
    if key == 'gender':
        return Gender(value).value
    if key == 'club_id':
        return as_uuid(value)
    return value


class BoxerRepository(BaseRepository, BoxerStore):

    def _get_row(self, boxer_id: Any) -> Optional[Boxer]:
        uid = as_uuid(boxer_id)
        if uid is None:
            return None
        stmt = select(Boxer).where(Boxer.id == uid)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_by_id(self, boxer_id: str) -> Optional[BoxerRecord]:
        boxer = self._get_row(boxer_id)
        return boxer_to_record(boxer) if boxer else None

    def get_by_user_id(self, user_id: str) -> Optional[BoxerRecord]:
        uid = as_uuid(user_id)
        if uid is None:
            return None
        stmt = select(Boxer).where(Boxer.user_id == uid)
        boxer = self.db.execute(stmt).scalar_one_or_none()
        return boxer_to_record(boxer) if boxer else None

    def _searchable(self):
        return (
            select(Boxer)
            .join(User, Boxer.user_id == User.id)
            .where(Boxer.is_searchable.is_(True), User.is_active.is_(True))
        )

    @staticmethod
    def _location_filters(stmt, city: Optional[str], country: Optional[str]):
        if city:
            stmt = stmt.where(func.lower(Boxer.city).contains(city.lower(), autoescape=True))
        if country:
            stmt = stmt.where(func.lower(Boxer.country).contains(country.lower(), autoescape=True))
        return stmt

    def find_candidates(self, query: CandidateQuery) -> List[BoxerRecord]:
        stmt = self._searchable()

        exclude = [uid for uid in (as_uuid(i) for i in query.exclude_ids) if uid is not None]
        if exclude:
            stmt = stmt.where(Boxer.id.notin_(exclude))

        if query.experience_levels:
            levels = [ExperienceLevel(level).value for level in query.experience_levels]
            stmt = stmt.where(Boxer.experience_level.in_(levels))

        stmt = self._location_filters(stmt, query.city, query.country)

        if query.weight_range is not None:
            low, high = query.weight_range
            # Boxers without a recorded weight stay eligible
            stmt = stmt.where(or_(Boxer.weight_kg.between(low, high), Boxer.weight_kg.is_(None)))

        stmt = stmt.order_by(Boxer.created_at.asc()).limit(query.take)
        return [boxer_to_record(b) for b in self.db.execute(stmt).scalars().all()]

    def create(self, user_id: str, fields: Dict[str, Any]) -> BoxerRecord:
        uid = as_uuid(user_id)
        user = self.db.get(User, uid) if uid is not None else None
        if user is None:
            raise BoxerNotFoundException("User not found")

        values = {k: _column_value(k, v) for k, v in fields.items()}
        values.setdefault('name', user.name)
        boxer = Boxer(user_id=uid, **values)
        self.db.add(boxer)
        self.db.flush()  # Generate ID
        return boxer_to_record(boxer)

    def update(self, boxer_id: str, fields: Dict[str, Any]) -> BoxerRecord:
        boxer = self._get_row(boxer_id)
        if boxer is None:
            raise BoxerNotFoundException("Boxer profile not found")

        for key, value in fields.items():
            setattr(boxer, key, _column_value(key, value))
        self.db.flush()
        return boxer_to_record(boxer)

    def search(
        self,
        filters: BoxerSearchFilters,
        offset: int,
        limit: int
    ) -> Tuple[List[BoxerRecord], int]:
        stmt = self._location_filters(self._searchable(), filters.city, filters.country)

        if filters.experience_level:
            stmt = stmt.where(Boxer.experience_level == ExperienceLevel(filters.experience_level).value)
        if filters.min_weight is not None:
            stmt = stmt.where(Boxer.weight_kg >= filters.min_weight)
        if filters.max_weight is not None:
            stmt = stmt.where(Boxer.weight_kg <= filters.max_weight)

        total = self.db.execute(select(func.count()).select_from(stmt.subquery())).scalar_one()

        stmt = (
            stmt.order_by(Boxer.is_verified.desc(), Boxer.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        boxers = [boxer_to_record(b) for b in self.db.execute(stmt).scalars().all()]
        return boxers, total
