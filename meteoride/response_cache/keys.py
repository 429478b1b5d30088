"""Spatial cache key derivation."""

from __future__ import annotations

from meteoride import geohash
from meteoride.domain import VehicleType
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="response_cache/keys")

KEY_PREFIX = "ride"
KEY_VERSION = "v1"  # bump when SafetyAssessment's JSON shape changes
KEY_DELIMITER = ":"
FALLBACK_BUCKET = "default"


def spatial_bucket(latitude: float, longitude: float, precision: int) -> str:
    """Return the geohash bucket for a coordinate, or FALLBACK_BUCKET if it cannot be encoded."""
    try:
        return geohash.encode(latitude, longitude, precision)
    except (geohash.GeohashError, TypeError) as exc:
        logger.warning(
            "Geohash encoding failed; using fallback bucket",
            extra={"latitude": latitude, "longitude": longitude, "precision": precision, "error": str(exc)},
        )
        return FALLBACK_BUCKET


def derive_key(latitude: float, longitude: float, vehicle: VehicleType, precision: int) -> str:
    """Build the cache key `ride:<bucket>:<vehicle>:v1` for a coordinate and vehicle."""
    bucket = spatial_bucket(latitude, longitude, precision)
    return KEY_DELIMITER.join((KEY_PREFIX, bucket, vehicle.value, KEY_VERSION))
