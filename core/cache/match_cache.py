"""Match Cache Service - Redis caching for ranked match results."""
import json
import logging
from typing import Optional, Any
from urllib.parse import urlparse

from redis import Redis

from core.interfaces import MatchCache

logger = logging.getLogger(__name__)

# 5 minutes
CACHE_TTL_SECONDS = 5 * 60


def _sanitize_url(url: str) -> str:
    """Remove credentials from URL for safe logging."""
    try:
        parsed = urlparse(url)
        if parsed.password:
            sanitized = parsed._replace(
                netloc=f"{parsed.username or ''}:*@{parsed.hostname}:{parsed.port or 6379}"
            )
            return sanitized.geturl()
        return url
    except ValueError:
        return url


class MatchCacheService(MatchCache):
    """
    Redis-backed MatchCache.

    Values are stored as JSON with a TTL. Every operation is best-effort:
    an unreachable Redis turns reads into misses and writes into no-ops,
    so matching keeps working (uncached) when the cache is down.
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        password: Optional[str] = None,
        ttl_seconds: int = CACHE_TTL_SECONDS
    ):
        self.redis_url = redis_url
        self.password = password
        self.ttl_seconds = ttl_seconds
        self._redis: Optional[Redis] = None
        self._available = False

        try:
            self._redis = Redis.from_url(
                redis_url,
                password=password,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5
            )
            self._redis.ping()
            self._available = True
            logger.info(f"Match cache connected to Redis at {_sanitize_url(redis_url)}")
        except Exception as e:
            logger.warning(f"Match cache Redis unavailable: {e}")
            self._redis = None
            self._available = False

    @property
    def is_available(self) -> bool:
        return self._available and self._redis is not None

    def get(self, key: str) -> Optional[Any]:
        if not self.is_available:
            return None

        try:
            data = self._redis.get(key)
            if data is None:
                logger.debug(f"Cache miss for {key[:48]}")
                return None
            logger.debug(f"Cache hit for {key[:48]}")
            return json.loads(data)
        except Exception as e:
            logger.warning(f"Error reading from match cache: {e}")
            return None

    def set(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> bool:
        if not self.is_available:
            return False

        try:
            ttl = ttl_seconds or self.ttl_seconds
            self._redis.setex(key, ttl, json.dumps(value))
            return True
        except Exception as e:
            logger.warning(f"Error writing to match cache: {e}")
            return False

    def delete_by_pattern(self, pattern: str) -> int:
        if not self.is_available:
            return 0

        try:
            cursor = 0
            deleted = 0
            while True:
                cursor, keys = self._redis.scan(cursor=cursor, match=pattern, count=100)
                if keys:
                    self._redis.delete(*keys)
                    deleted += len(keys)
                if cursor == 0:
                    break

            logger.debug(f"Deleted {deleted} keys matching {pattern}")
            return deleted
        except Exception as e:
            logger.warning(f"Error clearing match cache ({pattern}): {e}")
            return 0


# Global instance for application use
_match_cache: Optional[MatchCacheService] = None


def get_match_cache() -> Optional[MatchCacheService]:
    """Get global match cache instance."""
    return _match_cache


def init_match_cache(
    redis_url: str,
    password: Optional[str] = None,
    ttl_seconds: int = CACHE_TTL_SECONDS
) -> MatchCacheService:
    """Initialize global match cache."""
    global _match_cache
    _match_cache = MatchCacheService(redis_url, password, ttl_seconds)
    return _match_cache
