#!/usr/bin/env python3
"""
Boxer Models - Immutable value types for boxer profiles.

Repositories convert ORM rows into these records so the matching and
lifecycle services never touch a live Session.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Dict, Any, Optional


class ExperienceLevel(str, Enum):
    """Experience tiers, declared in ascending order."""
    BEGINNER = "BEGINNER"
    AMATEUR = "AMATEUR"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"
    PROFESSIONAL = "PROFESSIONAL"


class Gender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"


class UserRole(str, Enum):
    BOXER = "BOXER"
    COACH = "COACH"
    GYM_OWNER = "GYM_OWNER"
    ADMIN = "ADMIN"


@dataclass(frozen=True)
class UserRecord:
    """Account that owns a boxer profile or a club."""
    id: str
    email: str
    name: str
    role: UserRole = UserRole.BOXER
    is_active: bool = True


@dataclass(frozen=True)
class ClubRecord:
    id: str
    name: str
    owner_id: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None


@dataclass(frozen=True)
class BoxerRecord:
    """Boxer profile snapshot used for scoring and request handling."""
    id: str
    user_id: str
    name: str
    weight_kg: Optional[float] = None
    wins: int = 0
    losses: int = 0
    draws: int = 0
    experience_level: ExperienceLevel = ExperienceLevel.BEGINNER
    city: Optional[str] = None
    country: Optional[str] = None
    is_searchable: bool = True
    is_active: bool = True

    # Profile extras, not used by the scorer
    height_cm: Optional[int] = None
    gender: Optional[Gender] = None
    gym_affiliation: Optional[str] = None
    club_id: Optional[str] = None
    bio: Optional[str] = None
    is_verified: bool = False

    @property
    def total_fights(self) -> int:
        return self.wins + self.losses + self.draws

    @property
    def has_weight(self) -> bool:
        return self.weight_kg is not None

    def with_changes(self, **changes: Any) -> "BoxerRecord":
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-safe representation (enums as their values)."""
        return {
            'id': self.id,
            'user_id': self.user_id,
            'name': self.name,
            'weight_kg': self.weight_kg,
            'wins': self.wins,
            'losses': self.losses,
            'draws': self.draws,
            'total_fights': self.total_fights,
            'experience_level': self.experience_level.value,
            'city': self.city,
            'country': self.country,
            'is_searchable': self.is_searchable,
            'is_active': self.is_active,
            'height_cm': self.height_cm,
            'gender': self.gender.value if self.gender else None,
            'gym_affiliation': self.gym_affiliation,
            'club_id': self.club_id,
            'bio': self.bio,
            'is_verified': self.is_verified,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BoxerRecord":
        gender = data.get('gender')
        return cls(
            id=data['id'],
            user_id=data['user_id'],
            name=data['name'],
            weight_kg=data.get('weight_kg'),
            wins=data.get('wins', 0),
            losses=data.get('losses', 0),
            draws=data.get('draws', 0),
            experience_level=ExperienceLevel(data.get('experience_level', ExperienceLevel.BEGINNER.value)),
            city=data.get('city'),
            country=data.get('country'),
            is_searchable=data.get('is_searchable', True),
            is_active=data.get('is_active', True),
            height_cm=data.get('height_cm'),
            gender=Gender(gender) if gender else None,
            gym_affiliation=data.get('gym_affiliation'),
            club_id=data.get('club_id'),
            bio=data.get('bio'),
            is_verified=data.get('is_verified', False),
        )


@dataclass
class CandidateQuery:
    """
    Filter for candidate boxers.

    weight_range, when set, matches boxers inside the closed interval
    OR with no weight recorded.
    """
    exclude_ids: List[str] = field(default_factory=list)
    experience_levels: List[ExperienceLevel] = field(default_factory=list)
    city: Optional[str] = None
    country: Optional[str] = None
    weight_range: Optional[tuple] = None
    take: int = 60


@dataclass
class BoxerSearchFilters:
    city: Optional[str] = None
    country: Optional[str] = None
    experience_level: Optional[ExperienceLevel] = None
    min_weight: Optional[float] = None
    max_weight: Optional[float] = None


@dataclass
class PaginatedBoxers:
    boxers: List[BoxerRecord]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return (self.total + self.limit - 1) // self.limit if self.limit else 0
