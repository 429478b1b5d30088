"""Process-wide response cache, chosen from configuration at startup."""

import redis

from meteoride.config import settings
from meteoride.response_cache import InMemoryResponseCache, RedisResponseCache, ResponseCache
from utils.logging_utils import get_tagged_logger, mask_url

logger = get_tagged_logger(__name__, tag="cache_manager")


def _init_cache() -> ResponseCache:
    """Initialize the backing response cache based on configuration."""
    logger.debug(f"Initializing response cache: redis_url='{mask_url(settings.redis_url) if settings.redis_url else 'None'}'")
    if settings.redis_url:
        try:
            client = redis.Redis.from_url(settings.redis_url)
            client.ping()
            logger.info("Using RedisResponseCache", extra={"redis_url": mask_url(settings.redis_url)})
            return RedisResponseCache(
                client,
                ttl_seconds=settings.cache_ttl_seconds,
                geohash_precision=settings.geohash_precision,
            )
        except (redis.RedisError, ValueError) as exc:
            logger.warning("Falling back to InMemoryResponseCache (Redis unavailable)", extra={"error": str(exc)})
    return InMemoryResponseCache(
        ttl_seconds=settings.cache_ttl_seconds,
        geohash_precision=settings.geohash_precision,
    )


_cache: ResponseCache = _init_cache()


def get_cache() -> ResponseCache:
    """Return the process-wide response cache."""
    return _cache


def use_in_memory_cache_for_tests(ttl_seconds: int = 600, geohash_precision: int = 6) -> ResponseCache:
    """Override the cache for tests to ensure isolation and determinism."""
    global _cache
    _cache = InMemoryResponseCache(ttl_seconds=ttl_seconds, geohash_precision=geohash_precision)
    return _cache
