#!/usr/bin/env python3
"""
Compatibility Scoring - Pure scoring of one boxer against another.

Score out of 100 from four independently capped components:
- Weight (0-30): linear falloff inside the weight tolerance, flat 15 if
  either weight is unknown
- Fights (0-30): linear falloff inside the fight-count tolerance
- Experience (0-20): 20 for the same tier, 10 for an adjacent tier
- Location (0-20): 20 for the same city, else 10 for the same country

Tolerances come from an injected MatchingRules; nothing here does I/O.
"""

import math
from typing import Dict, FrozenSet, Optional

from core.boxers.models import BoxerRecord, ExperienceLevel
from core.config_loader import MatchingRules
from core.matching.models import MatchScore

WEIGHT_POINTS = 30.0
WEIGHT_UNKNOWN_POINTS = 15.0
FIGHTS_POINTS = 30.0
EXPERIENCE_SAME_POINTS = 20.0
EXPERIENCE_ADJACENT_POINTS = 10.0
CITY_POINTS = 20.0
COUNTRY_POINTS = 10.0


def _build_compatibility_table() -> Dict[ExperienceLevel, FrozenSet[ExperienceLevel]]:
    levels = list(ExperienceLevel)
    table = {}
    for i, level in enumerate(levels):
        neighbours = levels[max(0, i - 1):i + 2]
        table[level] = frozenset(neighbours)
    return table


# Each tier pairs with itself and its immediate neighbours on the ordered scale
EXPERIENCE_COMPATIBILITY: Dict[ExperienceLevel, FrozenSet[ExperienceLevel]] = _build_compatibility_table()


def compatible_levels(level: ExperienceLevel) -> FrozenSet[ExperienceLevel]:
    """Experience tiers that may be matched against ``level``."""
    return EXPERIENCE_COMPATIBILITY[ExperienceLevel(level)]


def is_experience_compatible(level1: ExperienceLevel, level2: ExperienceLevel) -> bool:
    return ExperienceLevel(level2) in compatible_levels(level1)


def _linear_points(max_points: float, difference: float, tolerance: float) -> float:
    if difference > tolerance:
        return 0.0
    return max_points * (1.0 - difference / tolerance)


def _same_text(a: Optional[str], b: Optional[str]) -> bool:
    if not a or not b:
        return False
    return a.strip().lower() == b.strip().lower()


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def score_match(
    source: BoxerRecord,
    candidate: BoxerRecord,
    rules: Optional[MatchingRules] = None
) -> MatchScore:
    """
    Score ``candidate`` against ``source``.

    Over-tolerance pairs are not rejected here, they only earn 0 for the
    affected component. Hard filtering is left to the caller via
    passes_hard_filters() / check_compatibility().

    Returns:
        MatchScore with the rounded 0-100 score and the raw differences.
    """
    rules = rules or MatchingRules()
    score = 0.0

    # Weight
    weight_difference = 0.0
    if source.has_weight and candidate.has_weight:
        weight_difference = abs(float(source.weight_kg) - float(candidate.weight_kg))
        score += _linear_points(WEIGHT_POINTS, weight_difference, rules.max_weight_difference)
    else:
        score += WEIGHT_UNKNOWN_POINTS

    # Fights
    fights_difference = abs(source.total_fights - candidate.total_fights)
    score += _linear_points(FIGHTS_POINTS, fights_difference, rules.max_fights_difference)

    # Experience
    compatible_experience = is_experience_compatible(source.experience_level, candidate.experience_level)
    if compatible_experience:
        if ExperienceLevel(source.experience_level) == ExperienceLevel(candidate.experience_level):
            score += EXPERIENCE_SAME_POINTS
        else:
            score += EXPERIENCE_ADJACENT_POINTS

    # Location (city takes precedence, not additive)
    same_city = _same_text(source.city, candidate.city)
    same_country = _same_text(source.country, candidate.country)
    if same_city:
        score += CITY_POINTS
    elif same_country:
        score += COUNTRY_POINTS

    return MatchScore(
        boxer_id=candidate.id,
        boxer=candidate,
        score=_round_half_up(score),
        weight_difference=weight_difference,
        fights_difference=fights_difference,
        same_city=same_city,
        same_country=same_country,
        compatible_experience=compatible_experience,
    )


def passes_hard_filters(match: MatchScore, rules: Optional[MatchingRules] = None) -> bool:
    """
    True when the pair is inside both tolerances.

    weight_difference is 0 whenever a weight is unknown, so a missing
    weight never rejects a pair.
    """
    rules = rules or MatchingRules()
    if match.weight_difference > rules.max_weight_difference:
        return False
    if match.fights_difference > rules.max_fights_difference:
        return False
    return True


def check_compatibility(
    requester: BoxerRecord,
    target: BoxerRecord,
    rules: Optional[MatchingRules] = None
) -> Optional[str]:
    """
    Hard compatibility check used before creating a match request.

    Returns:
        None when compatible, otherwise a human readable reason.
    """
    rules = rules or MatchingRules()

    if requester.has_weight and target.has_weight:
        weight_difference = abs(float(requester.weight_kg) - float(target.weight_kg))
        if weight_difference > rules.max_weight_difference:
            return (
                f"Weight difference ({weight_difference:.1f}kg) exceeds maximum allowed "
                f"({rules.max_weight_difference:g}kg)"
            )

    fights_difference = abs(requester.total_fights - target.total_fights)
    if fights_difference > rules.max_fights_difference:
        return (
            f"Fight experience difference ({fights_difference} fights) exceeds maximum allowed "
            f"({rules.max_fights_difference} fights)"
        )

    return None
