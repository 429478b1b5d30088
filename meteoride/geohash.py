"""Geohash bucketing for the response cache.

Encoding is delegated to `pygeohash`; this module only decides which inputs
are encodable, so that bad coordinates or precisions raise `GeohashError`
and the key layer can fall back to its shared bucket.
"""

from __future__ import annotations

import math

import pygeohash

MIN_PRECISION = 1
MAX_PRECISION = 12


class GeohashError(ValueError):
    """Raised for coordinates or precisions that cannot be encoded."""


def _validate(latitude: float, longitude: float, precision: int) -> None:
    if isinstance(precision, bool) or not isinstance(precision, int):
        raise GeohashError(f"precision must be an integer, got {precision!r}")
    if not MIN_PRECISION <= precision <= MAX_PRECISION:
        raise GeohashError(f"precision must be between {MIN_PRECISION} and {MAX_PRECISION}, got {precision}")
    if not (math.isfinite(latitude) and -90.0 <= latitude <= 90.0):
        raise GeohashError(f"latitude out of range: {latitude}")
    if not (math.isfinite(longitude) and -180.0 <= longitude <= 180.0):
        raise GeohashError(f"longitude out of range: {longitude}")


def encode(latitude: float, longitude: float, precision: int) -> str:
    """Encode a coordinate into a geohash of `precision` characters."""
    _validate(latitude, longitude, precision)
    return pygeohash.encode(latitude, longitude, precision=precision)
