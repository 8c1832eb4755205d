#!/usr/bin/env python3
"""
Matching Service - Candidate retrieval and ranking.

For a source boxer:
1. Fetch searchable candidates of active users, narrowed by experience
   tier, optional location filters and the weight window
2. Score every candidate (core.matching.compatibility)
3. Drop pairs outside the hard tolerances
4. Rank by descending score and truncate

Results are cached per (boxer, options). Any profile mutation clears the
whole matches / suggestions key space since the changed boxer may appear
in other boxers' results.
"""

import logging
from typing import List, Optional

from core.boxers.models import CandidateQuery
from core.config_loader import MatchingConfig
from core.exceptions import BoxerNotFoundException
from core.interfaces import BoxerStore, MatchCache
from core.matching.compatibility import compatible_levels, passes_hard_filters, score_match
from core.matching.models import CompatibleBoxersResult, MatchingOptions, MatchScore

logger = logging.getLogger(__name__)

MATCHES_PREFIX = "matches"
SUGGESTIONS_PREFIX = "suggestions"


class MatchingService:
    """
    Ranks compatible opponents for a boxer.

    Designed to be constructed per request: the store is bound to the
    request's session, the cache and config are shared.
    """

    def __init__(
        self,
        boxer_store: BoxerStore,
        cache: Optional[MatchCache] = None,
        config: Optional[MatchingConfig] = None,
        ttl_seconds: int = 300
    ):
        self.boxer_store = boxer_store
        self.cache = cache
        self.config = config or MatchingConfig()
        self.ttl_seconds = ttl_seconds

    @property
    def rules(self):
        return self.config.rules

    def _matches_key(self, boxer_id: str, options: MatchingOptions) -> str:
        return f"{MATCHES_PREFIX}:{boxer_id}:{options.cache_fragment()}"

    def _suggestions_key(self, boxer_id: str, limit: int) -> str:
        return f"{SUGGESTIONS_PREFIX}:{boxer_id}:{limit}"

    def _cache_get(self, key: str):
        if self.cache is None:
            return None
        return self.cache.get(key)

    def _cache_set(self, key: str, value) -> None:
        if self.cache is not None:
            self.cache.set(key, value, self.ttl_seconds)

    def find_compatible_boxers(
        self,
        boxer_id: str,
        options: Optional[MatchingOptions] = None
    ) -> CompatibleBoxersResult:
        """
        Ranked compatible opponents for ``boxer_id``.

        Raises:
            BoxerNotFoundException: if the source boxer does not exist.
        """
        options = options or MatchingOptions(limit=self.config.default_limit)
        cache_key = self._matches_key(boxer_id, options)

        cached = self._cache_get(cache_key)
        if cached is not None:
            return CompatibleBoxersResult.from_dict(cached)

        source = self.boxer_store.get_by_id(boxer_id)
        if source is None:
            raise BoxerNotFoundException("Boxer not found")

        query = CandidateQuery(
            exclude_ids=[source.id] + list(options.exclude_boxer_ids),
            experience_levels=list(options.experience_levels or compatible_levels(source.experience_level)),
            city=options.city,
            country=options.country,
            take=options.limit * self.config.overfetch_factor,
        )
        if source.has_weight:
            tolerance = self.rules.max_weight_difference
            query.weight_range = (source.weight_kg - tolerance, source.weight_kg + tolerance)

        candidates = self.boxer_store.find_candidates(query)

        scored: List[MatchScore] = []
        for candidate in candidates:
            if candidate.id == source.id:
                continue
            match = score_match(source, candidate, self.rules)
            if passes_hard_filters(match, self.rules):
                scored.append(match)

        # sorted() is stable, equal scores keep store order
        scored = sorted(scored, key=lambda m: m.score, reverse=True)[:options.limit]

        logger.debug(
            f"Boxer {boxer_id}: {len(candidates)} candidates, {len(scored)} compatible"
        )

        result = CompatibleBoxersResult(matches=scored, total=len(scored))
        self._cache_set(cache_key, result.to_dict())
        return result

    def get_suggested_matches(self, boxer_id: str, limit: Optional[int] = None) -> List[MatchScore]:
        """Top ranked opponents, cached separately from find_compatible_boxers."""
        limit = limit or self.config.suggestions_limit
        cache_key = self._suggestions_key(boxer_id, limit)

        cached = self._cache_get(cache_key)
        if cached is not None:
            return [MatchScore.from_dict(m) for m in cached]

        result = self.find_compatible_boxers(boxer_id, MatchingOptions(limit=limit))
        self._cache_set(cache_key, [m.to_dict() for m in result.matches])
        return result.matches

    def invalidate_match_cache(self, boxer_id: str) -> None:
        """Clear every cached ranking after a change to ``boxer_id``."""
        if self.cache is None:
            return
        removed = self.cache.delete_by_pattern(f"{MATCHES_PREFIX}:*")
        removed += self.cache.delete_by_pattern(f"{SUGGESTIONS_PREFIX}:*")
        logger.info(f"Invalidated {removed} cached match results after update to boxer {boxer_id}")
