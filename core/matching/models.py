#!/usr/bin/env python3
"""
Matching Models - Data structures for compatibility scoring results.
"""

import json
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional

from core.boxers.models import BoxerRecord, ExperienceLevel


@dataclass
class MatchScore:
    """Compatibility of one candidate against a source boxer."""
    boxer_id: str
    boxer: BoxerRecord
    score: int
    weight_difference: float = 0.0
    fights_difference: int = 0
    same_city: bool = False
    same_country: bool = False
    compatible_experience: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'boxer_id': self.boxer_id,
            'boxer': self.boxer.to_dict(),
            'score': self.score,
            'weight_difference': self.weight_difference,
            'fights_difference': self.fights_difference,
            'same_city': self.same_city,
            'same_country': self.same_country,
            'compatible_experience': self.compatible_experience,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchScore":
        return cls(
            boxer_id=data['boxer_id'],
            boxer=BoxerRecord.from_dict(data['boxer']),
            score=data['score'],
            weight_difference=data.get('weight_difference', 0.0),
            fights_difference=data.get('fights_difference', 0),
            same_city=data.get('same_city', False),
            same_country=data.get('same_country', False),
            compatible_experience=data.get('compatible_experience', False),
        )


@dataclass
class MatchingOptions:
    """Options for find_compatible_boxers."""
    limit: int = 20
    experience_levels: Optional[List[ExperienceLevel]] = None
    city: Optional[str] = None
    country: Optional[str] = None
    exclude_boxer_ids: List[str] = field(default_factory=list)

    def cache_fragment(self) -> str:
        """Canonical JSON used in cache keys; equal options give equal keys."""
        payload = {
            'limit': self.limit,
            'experience_levels': sorted(ExperienceLevel(level).value for level in self.experience_levels)
            if self.experience_levels else None,
            'city': self.city,
            'country': self.country,
            'exclude_boxer_ids': sorted(self.exclude_boxer_ids),
        }
        return json.dumps(payload, sort_keys=True, separators=(',', ':'))


@dataclass
class CompatibleBoxersResult:
    matches: List[MatchScore] = field(default_factory=list)
    total: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'matches': [m.to_dict() for m in self.matches],
            'total': self.total,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CompatibleBoxersResult":
        matches = [MatchScore.from_dict(m) for m in data.get('matches', [])]
        return cls(matches=matches, total=data.get('total', len(matches)))
