"""
Cache Service Singleton - Rice Inspection Grading API
app/services/cache.py

Provides a singleton Redis cache instance with TTL constants.
Gracefully handles Redis unavailability.
"""
import logging
import redis
from typing import Optional
from app.services.redis_cache import RedisCache
from app.config import settings

logger = logging.getLogger(__name__)

# TTL constants (in seconds)
TTL_INSPECTION = settings.CACHE_TTL_INSPECTION

# Cache keys
CACHE_KEY_INSPECTION_PREFIX = "inspection:"

# Singleton instance
_cache: Optional[RedisCache] = None


def get_inspection_cache_key(inspection_id: str) -> str:
    """Generate cache key for a single inspection."""
    return f"{CACHE_KEY_INSPECTION_PREFIX}{inspection_id}"


def get_cache() -> Optional[RedisCache]:
    """
    Get or create Redis cache instance.

    Returns:
        RedisCache instance if Redis is available, None otherwise.

    Note:
        Returns None if Redis is unavailable, allowing the application
        to continue functioning without caching (graceful degradation).
    """
    global _cache
    if _cache is None:
        try:
            _cache = RedisCache()
            _cache.client.ping()  # Test connection
        except (redis.RedisError, ConnectionError) as e:
            logger.warning("Redis unavailable, caching disabled: %s", e)
            _cache = None
    return _cache


def reset_cache() -> None:
    """
    Reset the cache singleton.

    Useful for testing or when Redis connection needs to be re-established.
    """
    global _cache
    _cache = None
