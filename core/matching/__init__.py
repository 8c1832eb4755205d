#!/usr/bin/env python3
"""
Matching Module - Compatibility scoring and candidate ranking.

Public API:
- score_match / check_compatibility: Pure pairwise scoring and hard filters
- MatchingService: Candidate retrieval, ranking and result caching
- MatchScore, MatchingOptions, CompatibleBoxersResult: Data structures
"""

from core.matching.models import MatchScore, MatchingOptions, CompatibleBoxersResult
from core.matching.compatibility import (
    score_match, check_compatibility, passes_hard_filters,
    compatible_levels, is_experience_compatible
)
from core.matching.service import MatchingService

__all__ = [
    'MatchingService', 'MatchScore', 'MatchingOptions', 'CompatibleBoxersResult',
    'score_match', 'check_compatibility', 'passes_hard_filters',
    'compatible_levels', 'is_experience_compatible'
]
