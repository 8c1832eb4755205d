"""Cache Module - Caching services."""
from core.cache.match_cache import (
    MatchCacheService,
    get_match_cache,
    init_match_cache,
    CACHE_TTL_SECONDS
)

__all__ = [
    'MatchCacheService',
    'get_match_cache',
    'init_match_cache',
    'CACHE_TTL_SECONDS'
]
