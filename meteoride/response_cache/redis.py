"""Redis-backed response cache with a fixed TTL."""

from typing import Optional

from redis.exceptions import RedisError

from meteoride.domain import SafetyAssessment, VehicleType
from meteoride.errors import CacheUnavailableError
from meteoride.response_cache.base import ResponseCache, decode_assessment, encode_assessment
from meteoride.response_cache.keys import derive_key
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="response_cache/redis_response_cache")


class RedisResponseCache(ResponseCache):
    """Stores assessments as JSON strings via SETEX.

    The client is expected to be a `redis.Redis` instance; its connection
    pool makes it safe to share across request threads without extra locking.
    """

    def __init__(self, client, ttl_seconds: int = 600, geohash_precision: int = 6) -> None:
        """Initialize with a Redis client, TTL (seconds) and geohash precision."""
        logger.debug("Initializing RedisResponseCache")
        self.client = client
        self.ttl = ttl_seconds
        self.precision = geohash_precision

    def key_for(self, latitude: float, longitude: float, vehicle: VehicleType) -> str:
        """Return the Redis key for a coordinate and vehicle."""
        return derive_key(latitude, longitude, vehicle, self.precision)

    def get(self, latitude: float, longitude: float, vehicle: VehicleType) -> Optional[SafetyAssessment]:
        """Fetch and decode a cached assessment, or None if missing/unreadable."""
        key = self.key_for(latitude, longitude, vehicle)
        try:
            raw = self.client.get(key)
        except RedisError as exc:
            logger.error("Failed to read cached response from Redis: %s", exc)
            raise CacheUnavailableError(f"Redis read failed for {key}") from exc
        if raw is None:
            return None
        return decode_assessment(raw, key=key)

    def set(self, latitude: float, longitude: float, vehicle: VehicleType, assessment: SafetyAssessment) -> None:
        """Write an assessment under its spatial key with the configured TTL."""
        key = self.key_for(latitude, longitude, vehicle)
        payload = encode_assessment(assessment)
        try:
            self.client.setex(key, self.ttl, payload)
        except RedisError as exc:
            logger.error("Failed to write cached response to Redis: %s", exc)
            raise CacheUnavailableError(f"Redis write failed for {key}") from exc
