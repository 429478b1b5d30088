"""Domain vocabulary and strict schemas for ride-safety assessments.

These models are the contract between the weather providers, the scoring
engine, the response cache and the HTTP layer. `SafetyAssessment` is also the
exact JSON document stored in the cache, so changing its shape requires
bumping the cache key version in `response_cache.keys`.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .errors import VehicleParseError


class _FrozenModel(BaseModel):
    """Base model that rejects unknown fields, non-finite floats and mutation."""

    # NaN/inf would serialize to null and no longer validate when read back.
    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)


class VehicleType(str, Enum):
    """Vehicle categories a rider can ask about."""
    BIKE = "bike"
    MOTOR = "motor"

    @classmethod
    def parse(cls, value: Optional[str]) -> "VehicleType":
        """Parse a user-supplied vehicle name, case-insensitively.

        "motorcycle" is accepted as a synonym for MOTOR. Anything else raises
        VehicleParseError; there is no default category.
        """
        if value is None:
            raise VehicleParseError("Vehicle type is required")
        normalized = value.strip().lower()
        if normalized == "motorcycle":
            return cls.MOTOR
        try:
            return cls(normalized)
        except ValueError:
            raise VehicleParseError(f"Unknown vehicle type: {value!r}") from None


class WeatherObservation(_FrozenModel):
    """Normalized current-conditions snapshot from a weather provider."""
    temperature_c: float
    wind_kph: float
    wind_dir: str
    precip_mm: float
    humidity: int
    condition: str
    condition_code: int
    feels_like_c: float
    uv_index: float
    visibility_km: float


class SafetyAssessment(_FrozenModel):
    """Observation plus advisory hints and score; the cached response body."""
    forecast_meta: WeatherObservation
    hints: Tuple[str, ...]
    provider_score: Optional[float] = Field(default=None, ge=0.0, le=100.0)
