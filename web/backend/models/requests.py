#!/usr/bin/env python3
"""
Request models for API endpoints.

Limits follow the public API contract (e.g. messages up to 2000
characters, weights 40-200 kg).
"""

import uuid
import datetime as dt
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from core.boxers.models import ExperienceLevel, Gender


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class BoxerCreate(BaseModel):
    """Complete (or create) the caller's boxer profile."""
    model_config = ConfigDict(
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "name": "Jamie Lewis",
                "weight_kg": 71.5,
                "height_cm": 178,
                "city": "Cardiff",
                "country": "Wales",
                "experience_level": "AMATEUR",
                "wins": 6,
                "losses": 2,
                "draws": 0
            }
        }
    )

    name: str = Field(..., min_length=2, max_length=100)
    weight_kg: Optional[float] = Field(None, ge=40, le=200)
    height_cm: Optional[int] = Field(None, ge=120, le=230)
    city: Optional[str] = Field(None, max_length=100)
    country: Optional[str] = Field(None, max_length=100)
    experience_level: ExperienceLevel = ExperienceLevel.BEGINNER
    gender: Optional[Gender] = None
    wins: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)
    draws: int = Field(default=0, ge=0)
    gym_affiliation: Optional[str] = Field(None, max_length=200)
    bio: Optional[str] = Field(None, max_length=2000)


class BoxerUpdate(BaseModel):
    """Partial profile update; explicit nulls clear a field."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(None, min_length=2, max_length=100)
    weight_kg: Optional[float] = Field(None, ge=40, le=200)
    height_cm: Optional[int] = Field(None, ge=120, le=230)
    city: Optional[str] = Field(None, max_length=100)
    country: Optional[str] = Field(None, max_length=100)
    experience_level: Optional[ExperienceLevel] = None
    gender: Optional[Gender] = None
    wins: Optional[int] = Field(None, ge=0)
    losses: Optional[int] = Field(None, ge=0)
    draws: Optional[int] = Field(None, ge=0)
    gym_affiliation: Optional[str] = Field(None, max_length=200)
    bio: Optional[str] = Field(None, max_length=2000)
    is_searchable: Optional[bool] = None
    club_id: Optional[uuid.UUID] = None

    def changes(self) -> dict:
        """Only the fields the client sent."""
        data = self.model_dump(exclude_unset=True)
        if data.get('club_id') is not None:
            data['club_id'] = str(data['club_id'])
        # Counters and the level cannot be nulled
        for key in ('name', 'experience_level', 'wins', 'losses', 'draws', 'is_searchable'):
            if key in data and data[key] is None:
                del data[key]
        return data


class MatchRequestCreate(BaseModel):
    """Request to send a match request."""
    model_config = ConfigDict(
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "target_boxer_id": "550e8400-e29b-41d4-a716-446655440000",
                "message": "Fancy 3 rounds next month?",
                "proposed_date": "2026-11-14T19:00:00Z",
                "proposed_venue": "Splott ABC"
            }
        }
    )

    target_boxer_id: uuid.UUID
    message: Optional[str] = Field(None, max_length=2000)
    proposed_date: Optional[datetime] = None
    proposed_venue: Optional[str] = Field(None, max_length=200)

    @field_validator('proposed_date')
    @classmethod
    def _proposed_date_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _as_utc(value)


class MatchRequestReply(BaseModel):
    """Optional message sent with an accept or decline."""
    model_config = ConfigDict(str_strip_whitespace=True)

    response_message: Optional[str] = Field(None, max_length=2000)


class MembershipReview(BaseModel):
    """Optional notes recorded with a rejection."""
    model_config = ConfigDict(str_strip_whitespace=True)

    notes: Optional[str] = Field(None, max_length=2000)


class AvailabilityCreate(BaseModel):
    """A new availability slot. Times are HH:MM or HH:MM:SS."""
    model_config = ConfigDict(
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "date": "2026-11-14",
                "start_time": "18:00",
                "end_time": "20:00",
                "notes": "Open to sparring"
            }
        }
    )

    date: dt.date
    start_time: dt.time
    end_time: dt.time
    is_available: bool = True
    notes: Optional[str] = Field(None, max_length=500)

    @model_validator(mode='after')
    def _end_after_start(self) -> "AvailabilityCreate":
        if self.end_time <= self.start_time:
            raise ValueError("End time must be after start time")
        return self


class AvailabilityUpdate(BaseModel):
    """Partial slot update. The time window is checked against the stored slot by the service."""
    model_config = ConfigDict(str_strip_whitespace=True)

    date: Optional[dt.date] = None
    start_time: Optional[dt.time] = None
    end_time: Optional[dt.time] = None
    is_available: Optional[bool] = None
    notes: Optional[str] = Field(None, max_length=500)

    def changes(self) -> dict:
        data = self.model_dump(exclude_unset=True)
        for key in ('date', 'start_time', 'end_time', 'is_available'):
            if key in data and data[key] is None:
                del data[key]
        return data
