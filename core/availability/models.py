"""Availability slot value types."""

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional


@dataclass(frozen=True)
class AvailabilityRecord:
    """A boxer's time window on one date. Slots of one boxer never overlap."""
    id: str
    boxer_id: str
    date: date
    start_time: time
    end_time: time
    is_available: bool = True
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def overlaps(self, on: date, start: time, end: time) -> bool:
        """Half-open overlap: slots that only touch at an edge do not overlap."""
        return self.date == on and self.start_time < end and self.end_time > start

    def covers(self, on: date, start: time, end: time) -> bool:
        return self.date == on and self.start_time <= start and self.end_time >= end
