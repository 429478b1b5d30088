"""In-memory response cache with TTL, intended for development and tests."""

import threading
import time
from typing import Optional

from meteoride.domain import SafetyAssessment, VehicleType
from meteoride.response_cache.base import ResponseCache, decode_assessment, encode_assessment
from meteoride.response_cache.keys import derive_key
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="response_cache/in_memory_response_cache")


class InMemoryResponseCache(ResponseCache):
    """Thread-safe, TTL-aware in-memory cache (dev/test).

    Entries are kept in their serialized JSON form so this backend behaves
    like Redis for round-trips and corrupted payloads. Expired entries are
    swept on write at most once per TTL window, so the dict holds at most
    about two TTLs' worth of buckets.
    """

    def __init__(self, ttl_seconds: int = 600, geohash_precision: int = 6) -> None:
        """Initialize the cache with a TTL (seconds) and geohash precision."""
        logger.debug("Initializing InMemoryResponseCache")
        self.ttl = ttl_seconds
        self.precision = geohash_precision
        self._entries: dict[str, tuple[str, float]] = {}
        self._lock = threading.Lock()
        self._next_purge = time.monotonic() + ttl_seconds

    def _purge_expired(self, now: float) -> None:
        """Drop every expired entry. Caller must hold the lock."""
        expired = [key for key, (_, expires_at) in self._entries.items() if expires_at <= now]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("Purged expired cache entries", extra={"count": len(expired)})
        self._next_purge = now + self.ttl

    def key_for(self, latitude: float, longitude: float, vehicle: VehicleType) -> str:
        """Return the cache key for a coordinate and vehicle."""
        return derive_key(latitude, longitude, vehicle, self.precision)

    def get(self, latitude: float, longitude: float, vehicle: VehicleType) -> Optional[SafetyAssessment]:
        """Return the cached assessment, or None if missing/expired/unreadable."""
        key = self.key_for(latitude, longitude, vehicle)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            raw, expires_at = entry
            if expires_at <= time.monotonic():
                self._entries.pop(key, None)
                return None
        return decode_assessment(raw, key=key)

    def set(self, latitude: float, longitude: float, vehicle: VehicleType, assessment: SafetyAssessment) -> None:
        """Store an assessment, overwriting any existing entry for the key."""
        key = self.key_for(latitude, longitude, vehicle)
        payload = encode_assessment(assessment)
        with self._lock:
            now = time.monotonic()
            if now >= self._next_purge:
                self._purge_expired(now)
            self._entries[key] = (payload, now + self.ttl)
