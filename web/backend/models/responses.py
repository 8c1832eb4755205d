#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from core.availability.models import AvailabilityRecord
from core.boxers.models import BoxerRecord, ClubRecord, PaginatedBoxers
from core.clubs.models import PaginatedClubs
from core.match_requests.models import MatchRequestRecord, MatchRequestStats, PaginatedMatchRequests
from core.matching.models import MatchScore
from core.membership.models import MembershipRequestRecord
from ..utils import safe_datetime_iso


class BoxerResponse(BaseModel):
    """Public boxer profile."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "user_id": "6ba7b810-9dad-11d1-80b4-00c04fd430c8",
                "name": "Jamie Lewis",
                "weight_kg": 71.5,
                "wins": 6,
                "losses": 2,
                "draws": 0,
                "total_fights": 8,
                "experience_level": "AMATEUR",
                "city": "Cardiff",
                "country": "Wales",
                "is_searchable": True,
                "is_verified": False
            }
        }
    )

    id: str
    user_id: str
    name: str
    weight_kg: Optional[float] = None
    height_cm: Optional[int] = None
    gender: Optional[str] = None
    wins: int = 0
    losses: int = 0
    draws: int = 0
    total_fights: int = 0
    experience_level: str
    city: Optional[str] = None
    country: Optional[str] = None
    gym_affiliation: Optional[str] = None
    club_id: Optional[str] = None
    bio: Optional[str] = None
    is_searchable: bool = True
    is_verified: bool = False

    @classmethod
    def from_record(cls, boxer: BoxerRecord) -> "BoxerResponse":
        return cls(**boxer.to_dict())


class BoxerEnvelope(BaseModel):
    success: bool = True
    boxer: BoxerResponse


class BoxerListResponse(BaseModel):
    success: bool = True
    boxers: List[BoxerResponse]
    total: int
    page: int
    limit: int
    total_pages: int

    @classmethod
    def from_page(cls, page: PaginatedBoxers) -> "BoxerListResponse":
        return cls(
            boxers=[BoxerResponse.from_record(b) for b in page.boxers],
            total=page.total,
            page=page.page,
            limit=page.limit,
            total_pages=page.total_pages,
        )


class MatchScoreResponse(BaseModel):
    """A ranked opponent and why it scored as it did."""
    boxer: BoxerResponse
    score: int = Field(ge=0, le=100)
    weight_difference: float
    fights_difference: int
    same_city: bool
    same_country: bool
    compatible_experience: bool

    @classmethod
    def from_score(cls, match: MatchScore) -> "MatchScoreResponse":
        return cls(
            boxer=BoxerResponse.from_record(match.boxer),
            score=match.score,
            weight_difference=match.weight_difference,
            fights_difference=match.fights_difference,
            same_city=match.same_city,
            same_country=match.same_country,
            compatible_experience=match.compatible_experience,
        )


class MatchesResponse(BaseModel):
    success: bool = True
    matches: List[MatchScoreResponse]
    total: int


class MatchRequestResponse(BaseModel):
    """A match request with both boxers when available."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "7c9e6679-7425-40de-944b-e07fc1f90ae7",
                "requester_boxer_id": "550e8400-e29b-41d4-a716-446655440000",
                "target_boxer_id": "6ba7b810-9dad-11d1-80b4-00c04fd430c8",
                "status": "PENDING",
                "message": "Fancy 3 rounds next month?",
                "expires_at": "2026-10-26T12:00:00+00:00",
                "created_at": "2026-10-19T12:00:00+00:00"
            }
        }
    )

    id: str
    requester_boxer_id: str
    target_boxer_id: str
    status: str
    message: Optional[str] = None
    response_message: Optional[str] = None
    proposed_date: Optional[str] = None
    proposed_venue: Optional[str] = None
    expires_at: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    requester: Optional[BoxerResponse] = None
    target: Optional[BoxerResponse] = None

    @classmethod
    def from_record(cls, request: MatchRequestRecord) -> "MatchRequestResponse":
        return cls(
            id=request.id,
            requester_boxer_id=request.requester_boxer_id,
            target_boxer_id=request.target_boxer_id,
            status=request.status.value,
            message=request.message,
            response_message=request.response_message,
            proposed_date=safe_datetime_iso(request.proposed_date),
            proposed_venue=request.proposed_venue,
            expires_at=safe_datetime_iso(request.expires_at),
            created_at=safe_datetime_iso(request.created_at),
            updated_at=safe_datetime_iso(request.updated_at),
            requester=BoxerResponse.from_record(request.requester) if request.requester else None,
            target=BoxerResponse.from_record(request.target) if request.target else None,
        )


class MatchRequestEnvelope(BaseModel):
    success: bool = True
    match_request: MatchRequestResponse


class MatchRequestListResponse(BaseModel):
    success: bool = True
    match_requests: List[MatchRequestResponse]
    total: int
    page: int
    limit: int
    total_pages: int

    @classmethod
    def from_page(cls, page: PaginatedMatchRequests) -> "MatchRequestListResponse":
        return cls(
            match_requests=[MatchRequestResponse.from_record(r) for r in page.items],
            total=page.total,
            page=page.page,
            limit=page.limit,
            total_pages=page.total_pages,
        )


class RequestCounts(BaseModel):
    pending: int = 0
    accepted: int = 0
    declined: int = 0
    cancelled: int = 0
    expired: int = 0
    total: int = 0

    @classmethod
    def from_stats(cls, stats: MatchRequestStats) -> "RequestCounts":
        return cls(**stats.to_dict())


class MatchRequestStatsResponse(BaseModel):
    success: bool = True
    incoming: RequestCounts
    outgoing: RequestCounts


class MembershipRequestResponse(BaseModel):
    id: str
    user_id: str
    club_id: str
    status: str
    requested_at: Optional[str] = None
    reviewed_at: Optional[str] = None
    reviewed_by: Optional[str] = None
    notes: Optional[str] = None
    club_name: Optional[str] = None
    user_name: Optional[str] = None
    user_email: Optional[str] = None

    @classmethod
    def from_record(cls, request: MembershipRequestRecord) -> "MembershipRequestResponse":
        return cls(
            id=request.id,
            user_id=request.user_id,
            club_id=request.club_id,
            status=request.status.value,
            requested_at=safe_datetime_iso(request.requested_at),
            reviewed_at=safe_datetime_iso(request.reviewed_at),
            reviewed_by=request.reviewed_by,
            notes=request.notes,
            club_name=request.club_name,
            user_name=request.user_name,
            user_email=request.user_email,
        )


class MembershipRequestEnvelope(BaseModel):
    success: bool = True
    request: MembershipRequestResponse


class MembershipRequestListResponse(BaseModel):
    success: bool = True
    count: int
    requests: List[MembershipRequestResponse]


class ClubResponse(BaseModel):
    id: str
    name: str
    owner_id: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None

    @classmethod
    def from_record(cls, club: ClubRecord) -> "ClubResponse":
        return cls(id=club.id, name=club.name, owner_id=club.owner_id, city=club.city, country=club.country)


class ClubEnvelope(BaseModel):
    success: bool = True
    club: ClubResponse


class ClubListResponse(BaseModel):
    success: bool = True
    clubs: List[ClubResponse]
    total: int
    page: int
    limit: int
    total_pages: int

    @classmethod
    def from_page(cls, page: PaginatedClubs) -> "ClubListResponse":
        return cls(
            clubs=[ClubResponse.from_record(c) for c in page.clubs],
            total=page.total,
            page=page.page,
            limit=page.limit,
            total_pages=page.total_pages,
        )


class ClubSearchResponse(BaseModel):
    success: bool = True
    clubs: List[ClubResponse]


class AvailabilityResponse(BaseModel):
    """An availability slot. Dates are ISO dates, times HH:MM:SS."""
    id: str
    boxer_id: str
    date: str
    start_time: str
    end_time: str
    is_available: bool = True
    notes: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_record(cls, slot: AvailabilityRecord) -> "AvailabilityResponse":
        return cls(
            id=slot.id,
            boxer_id=slot.boxer_id,
            date=slot.date.isoformat(),
            start_time=slot.start_time.isoformat(timespec='seconds'),
            end_time=slot.end_time.isoformat(timespec='seconds'),
            is_available=slot.is_available,
            notes=slot.notes,
            created_at=safe_datetime_iso(slot.created_at),
            updated_at=safe_datetime_iso(slot.updated_at),
        )


class AvailabilityEnvelope(BaseModel):
    success: bool = True
    availability: AvailabilityResponse


class AvailabilityListResponse(BaseModel):
    success: bool = True
    count: int
    availability: List[AvailabilityResponse]


class DeletedResponse(BaseModel):
    success: bool = True
    message: str


class ExpireRequestsResponse(BaseModel):
    success: bool = True
    expired: int = Field(ge=0)


class HealthResponse(BaseModel):
    status: str
    service: str
