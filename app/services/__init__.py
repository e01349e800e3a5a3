"""
Services module for the Rice Inspection Grading API.
"""

from app.services.cache import get_cache
from app.services.redis_cache import RedisCache
from app.services.snowflake import get_snowflake_connection


def get_inspection_service():
    """Lazy import to avoid circular dependency."""
    from app.core.dependencies import get_inspection_service as _get
    return _get()


__all__ = [
    "get_cache",
    "get_inspection_service",
    "get_snowflake_connection",
    "RedisCache",
]
