"""Shared protocol and serialization for response cache backends."""

from typing import Optional, Protocol

from pydantic import ValidationError

from meteoride.domain import SafetyAssessment, VehicleType
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="response_cache/base")


class ResponseCache(Protocol):
    """Protocol for TTL-bound caches of SafetyAssessment responses."""

    def key_for(self, latitude: float, longitude: float, vehicle: VehicleType) -> str:
        """Return the store key used by both get and set for these inputs."""

    def get(self, latitude: float, longitude: float, vehicle: VehicleType) -> Optional[SafetyAssessment]:
        """Return the cached assessment, or None on a miss, expiry or unreadable entry.

        Raises CacheUnavailableError if the store cannot be reached.
        """

    def set(self, latitude: float, longitude: float, vehicle: VehicleType, assessment: SafetyAssessment) -> None:
        """Store an assessment with the cache TTL, replacing any existing entry.

        Raises CacheUnavailableError if the write fails.
        """


def encode_assessment(assessment: SafetyAssessment) -> str:
    """Serialize an assessment to the JSON document stored in the cache."""
    return assessment.model_dump_json()


def decode_assessment(raw: str | bytes, *, key: str = "") -> Optional[SafetyAssessment]:
    """Deserialize a cached JSON document; unreadable payloads return None."""
    try:
        return SafetyAssessment.model_validate_json(raw)
    except (ValidationError, ValueError) as exc:
        logger.warning("Discarding unreadable cache entry", extra={"key": key, "error": str(exc)})
        return None
