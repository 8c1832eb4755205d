#!/usr/bin/env python3
"""
Availability Service - Boxer availability scheduling.

A slot is a (date, start, end) window. Slots of the same boxer may not
overlap; windows that only share an edge (10:00-12:00 and 12:00-14:00)
are allowed.
"""

import logging
from datetime import date, datetime, time, timezone
from typing import Any, Callable, Dict, List, Optional

from core.availability.models import AvailabilityRecord
from core.boxers.models import BoxerRecord
from core.exceptions import (
    AvailabilityNotFoundException,
    BoxerNotFoundException,
    ForbiddenException,
    InvalidTimeRangeException,
    OverlappingAvailabilityException,
)
from core.interfaces import AvailabilityStore, BoxerStore, ClubStore

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset({'date', 'start_time', 'end_time', 'is_available', 'notes'})


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AvailabilityService:
    """
    Create, list, update and delete availability slots.

    Slots may be managed by the boxer or by the owner of the boxer's club.
    """

    def __init__(
        self,
        availability_store: AvailabilityStore,
        boxer_store: BoxerStore,
        club_store: ClubStore,
        clock: Callable[[], datetime] = utc_now
    ):
        self.slots = availability_store
        self.boxers = boxer_store
        self.clubs = club_store
        self.clock = clock

    def _today(self) -> date:
        return self.clock().date()

    def _get_boxer(self, boxer_id: str) -> BoxerRecord:
        boxer = self.boxers.get_by_id(boxer_id)
        if boxer is None:
            raise BoxerNotFoundException("Boxer not found")
        return boxer

    def _check_manager(self, boxer: BoxerRecord, acting_user_id: str, action: str) -> None:
        if boxer.user_id == acting_user_id:
            return
        if boxer.club_id and self.clubs.is_owner(acting_user_id, boxer.club_id):
            return
        raise ForbiddenException(f"Not authorized to {action} this boxer's availability")

    def _get_slot(self, slot_id: str, boxer_id: str, action: str) -> AvailabilityRecord:
        slot = self.slots.get_by_id(slot_id)
        if slot is None:
            raise AvailabilityNotFoundException("Availability slot not found")
        if slot.boxer_id != boxer_id:
            raise ForbiddenException(f"Not authorized to {action} this availability slot")
        return slot

    @staticmethod
    def _check_window(start: time, end: time) -> None:
        if end <= start:
            raise InvalidTimeRangeException("End time must be after start time")

    def _check_overlap(
        self,
        boxer_id: str,
        on: date,
        start: time,
        end: time,
        exclude_id: Optional[str] = None
    ) -> None:
        if self.slots.find_overlapping(boxer_id, on, start, end, exclude_id=exclude_id) is not None:
            raise OverlappingAvailabilityException(
                "Overlapping availability slot already exists for this date"
            )

    def create_availability(
        self,
        boxer_id: str,
        acting_user_id: str,
        data: Dict[str, Any]
    ) -> AvailabilityRecord:
        """
        Add a slot for ``boxer_id``.

        Raises:
            BoxerNotFoundException, ForbiddenException,
            InvalidTimeRangeException, OverlappingAvailabilityException
        """
        boxer = self._get_boxer(boxer_id)
        self._check_manager(boxer, acting_user_id, "manage")

        fields = {k: v for k, v in data.items() if k in EDITABLE_FIELDS}
        fields.setdefault('is_available', True)
        self._check_window(fields['start_time'], fields['end_time'])
        self._check_overlap(boxer.id, fields['date'], fields['start_time'], fields['end_time'])

        slot = self.slots.create(boxer.id, fields)
        self.slots.commit()
        logger.info(f"Availability {slot.id} added for boxer {boxer.id} on {slot.date}")
        return slot

    def get_availability(
        self,
        boxer_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None
    ) -> List[AvailabilityRecord]:
        """
        Open slots (is_available) for a boxer, earliest first.

        Without a date range only slots from today onwards are returned.
        """
        self._get_boxer(boxer_id)
        if start_date is None and end_date is None:
            start_date = self._today()
        return self.slots.list_for_boxer(boxer_id, start_date, end_date, only_available=True)

    def get_all_availability(self, boxer_id: str) -> List[AvailabilityRecord]:
        """Every slot including past and unavailable ones, newest date first."""
        self._get_boxer(boxer_id)
        return self.slots.list_all_for_boxer(boxer_id)

    def get_availability_slot(self, slot_id: str) -> AvailabilityRecord:
        slot = self.slots.get_by_id(slot_id)
        if slot is None:
            raise AvailabilityNotFoundException("Availability slot not found")
        return slot

    def update_availability(
        self,
        slot_id: str,
        boxer_id: str,
        acting_user_id: str,
        changes: Dict[str, Any]
    ) -> AvailabilityRecord:
        """
        Change a slot. The overlap check only runs when the date or times change.

        Raises:
            AvailabilityNotFoundException, BoxerNotFoundException,
            ForbiddenException, InvalidTimeRangeException,
            OverlappingAvailabilityException
        """
        slot = self._get_slot(slot_id, boxer_id, "update")
        self._check_manager(self._get_boxer(boxer_id), acting_user_id, "manage")

        fields = {k: v for k, v in changes.items() if k in EDITABLE_FIELDS}
        if not fields:
            return slot

        on = fields.get('date', slot.date)
        start = fields.get('start_time', slot.start_time)
        end = fields.get('end_time', slot.end_time)
        self._check_window(start, end)
        if {'date', 'start_time', 'end_time'} & fields.keys():
            self._check_overlap(boxer_id, on, start, end, exclude_id=slot.id)

        updated = self.slots.update(slot.id, fields)
        self.slots.commit()
        logger.info(f"Availability {slot.id} updated: {sorted(fields)}")
        return updated

    def delete_availability(self, slot_id: str, boxer_id: str, acting_user_id: str) -> None:
        slot = self._get_slot(slot_id, boxer_id, "delete")
        self._check_manager(self._get_boxer(boxer_id), acting_user_id, "manage")

        self.slots.delete(slot.id)
        self.slots.commit()
        logger.info(f"Availability {slot.id} deleted")

    def delete_past_availability(self, boxer_id: str) -> int:
        """Remove slots dated before today. Returns the number removed."""
        count = self.slots.delete_before(boxer_id, self._today())
        self.slots.commit()
        if count:
            logger.info(f"Removed {count} past availability slots for boxer {boxer_id}")
        return count

    def is_boxer_available(self, boxer_id: str, on: date, start: time, end: time) -> bool:
        """True when one open slot covers the whole window."""
        return self.slots.find_covering(boxer_id, on, start, end) is not None
