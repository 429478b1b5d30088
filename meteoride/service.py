"""Read-through ride-safety lookup: cache, then provider, then score and store."""

from __future__ import annotations

from dataclasses import dataclass

from meteoride.domain import SafetyAssessment, VehicleType, WeatherObservation
from meteoride.errors import CacheUnavailableError, WeatherUnavailableError
from meteoride.response_cache import ResponseCache
from meteoride.scoring import calculate_provider_score, generate_hints
from meteoride.weather import WeatherProvider
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="service")


@dataclass(frozen=True)
class RideSafetyResult:
    """Assessment plus whether it was served from the cache."""
    assessment: SafetyAssessment
    cache_hit: bool


def build_assessment(observation: WeatherObservation, vehicle: VehicleType) -> SafetyAssessment:
    """Score an observation for a vehicle."""
    return SafetyAssessment(
        forecast_meta=observation,
        hints=tuple(generate_hints(observation, vehicle)),
        provider_score=calculate_provider_score(observation, vehicle),
    )


def _lookup(cache: ResponseCache, latitude: float, longitude: float, vehicle: VehicleType) -> SafetyAssessment | None:
    """Read from the cache, treating an unreachable store as a miss."""
    try:
        return cache.get(latitude, longitude, vehicle)
    except CacheUnavailableError as exc:
        logger.warning("Cache read failed; treating as miss", extra={"error": str(exc)})
        return None


def _store(
    cache: ResponseCache,
    latitude: float,
    longitude: float,
    vehicle: VehicleType,
    assessment: SafetyAssessment,
) -> None:
    """Write to the cache; failures are logged and never reach the caller."""
    try:
        cache.set(latitude, longitude, vehicle, assessment)
    except CacheUnavailableError as exc:
        logger.warning("Failed to cache response", extra={"error": str(exc)})


def get_ride_safety(
    latitude: float,
    longitude: float,
    vehicle: VehicleType,
    *,
    cache: ResponseCache,
    provider: WeatherProvider,
) -> RideSafetyResult:
    """Return the ride-safety assessment for a coordinate, using the cache when possible.

    Raises WeatherUnavailableError when the provider fails on a cache miss.
    """
    cached = _lookup(cache, latitude, longitude, vehicle)
    if cached is not None:
        logger.info(f"Cache hit for {latitude},{longitude} vehicle={vehicle.value}")
        return RideSafetyResult(assessment=cached, cache_hit=True)

    try:
        observation = provider.fetch_current(latitude, longitude)
    except WeatherUnavailableError:
        raise
    except Exception as exc:
        raise WeatherUnavailableError(f"Weather provider failed: {type(exc).__name__}") from exc

    assessment = build_assessment(observation, vehicle)
    _store(cache, latitude, longitude, vehicle, assessment)

    logger.info(f"Weather fetched for {latitude},{longitude} vehicle={vehicle.value}")
    return RideSafetyResult(assessment=assessment, cache_hit=False)
