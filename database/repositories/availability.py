from datetime import date, time
from typing import Any, Dict, List, Optional

from sqlalchemy import select, delete

from core.availability.models import AvailabilityRecord
from core.exceptions import AvailabilityNotFoundException
from core.interfaces import AvailabilityStore
from database.models import Availability
from database.repositories.base import BaseRepository, as_uuid, as_utc


def availability_to_record(slot: Availability) -> AvailabilityRecord:
    return AvailabilityRecord(
        id=str(slot.id),
        boxer_id=str(slot.boxer_id),
        date=slot.date,
        start_time=slot.start_time,
        end_time=slot.end_time,
        is_available=bool(slot.is_available),
        notes=slot.notes,
        created_at=as_utc(slot.created_at),
        updated_at=as_utc(slot.updated_at),
    )


class AvailabilityRepository(BaseRepository, AvailabilityStore):

    def _get_row(self, slot_id: str) -> Availability:
        uid = as_uuid(slot_id)
        slot = self.db.get(Availability, uid) if uid is not None else None
        if slot is None:
            raise AvailabilityNotFoundException("Availability slot not found")
        return slot

    def get_by_id(self, slot_id: str) -> Optional[AvailabilityRecord]:
        uid = as_uuid(slot_id)
        if uid is None:
            return None
        slot = self.db.get(Availability, uid)
        return availability_to_record(slot) if slot else None

    def _on_date(self, boxer_id: str, on: date):
        return select(Availability).where(
            Availability.boxer_id == as_uuid(boxer_id),
            Availability.date == on
        )

    def find_overlapping(
        self,
        boxer_id: str,
        on: date,
        start: time,
        end: time,
        exclude_id: Optional[str] = None
    ) -> Optional[AvailabilityRecord]:
        stmt = self._on_date(boxer_id, on).where(
            Availability.start_time < end,
            Availability.end_time > start
        )
        if exclude_id is not None:
            stmt = stmt.where(Availability.id != as_uuid(exclude_id))
        slot = self.db.execute(stmt.limit(1)).scalar_one_or_none()
        return availability_to_record(slot) if slot else None

    def find_covering(self, boxer_id: str, on: date, start: time, end: time) -> Optional[AvailabilityRecord]:
        stmt = self._on_date(boxer_id, on).where(
            Availability.is_available.is_(True),
            Availability.start_time <= start,
            Availability.end_time >= end
        )
        slot = self.db.execute(stmt.limit(1)).scalar_one_or_none()
        return availability_to_record(slot) if slot else None

    def create(self, boxer_id: str, fields: Dict[str, Any]) -> AvailabilityRecord:
        slot = Availability(boxer_id=as_uuid(boxer_id), **fields)
        self.db.add(slot)
        self.db.flush()
        return availability_to_record(slot)

    def update(self, slot_id: str, fields: Dict[str, Any]) -> AvailabilityRecord:
        slot = self._get_row(slot_id)
        for key, value in fields.items():
            setattr(slot, key, value)
        self.db.flush()
        return availability_to_record(slot)

    def delete(self, slot_id: str) -> None:
        self.db.delete(self._get_row(slot_id))
        self.db.flush()

    def list_for_boxer(
        self,
        boxer_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        only_available: bool = True
    ) -> List[AvailabilityRecord]:
        stmt = select(Availability).where(Availability.boxer_id == as_uuid(boxer_id))
        if only_available:
            stmt = stmt.where(Availability.is_available.is_(True))
        if start_date is not None:
            stmt = stmt.where(Availability.date >= start_date)
        if end_date is not None:
            stmt = stmt.where(Availability.date <= end_date)
        stmt = stmt.order_by(Availability.date.asc(), Availability.start_time.asc())
        return [availability_to_record(s) for s in self.db.execute(stmt).scalars().all()]

    def list_all_for_boxer(self, boxer_id: str) -> List[AvailabilityRecord]:
        stmt = (
            select(Availability)
            .where(Availability.boxer_id == as_uuid(boxer_id))
            .order_by(Availability.date.desc(), Availability.start_time.asc())
        )
        return [availability_to_record(s) for s in self.db.execute(stmt).scalars().all()]

    def delete_before(self, boxer_id: str, before: date) -> int:
        stmt = delete(Availability).where(
            Availability.boxer_id == as_uuid(boxer_id),
            Availability.date < before
        )
        result = self.db.execute(stmt)
        self.db.flush()
        return result.rowcount or 0
