"""HTTP API for ride-safety assessments."""

from functools import lru_cache

from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel

from meteoride import __version__
from meteoride.cache_manager import get_cache
from meteoride.config import settings
from meteoride.domain import SafetyAssessment, VehicleType
from meteoride.errors import VehicleParseError, WeatherUnavailableError
from meteoride.service import get_ride_safety
from meteoride.weather import WeatherProvider, build_weather_provider
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="meteoride/api")

router = APIRouter()
health_router = APIRouter()


class HealthResponse(BaseModel):
    """Liveness payload."""
    status: str
    version: str


@lru_cache(maxsize=1)
def get_weather_provider() -> WeatherProvider:
    """Build the configured weather provider on first use."""
    return build_weather_provider(settings)


def _parse_vehicle(value: str) -> VehicleType:
    """Parse the vehicle query parameter or raise a 400."""
    try:
        return VehicleType.parse(value)
    except VehicleParseError:
        logger.debug(f"Rejected vehicle type {value!r}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid vehicle type. Use 'bike' or 'motor'",
        )


@router.get("/ride-safety", response_model=SafetyAssessment)
def ride_safety(
    lat: float = Query(...),
    lon: float = Query(...),
    vehicle: str = Query(...),
):
    """Return hints and a safety score for riding at a coordinate right now."""
    vehicle_type = _parse_vehicle(vehicle)

    try:
        provider = get_weather_provider()
    except ValueError as exc:
        logger.error("Weather provider is misconfigured: %s", exc)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                            detail="Weather provider is not configured")

    try:
        result = get_ride_safety(lat, lon, vehicle_type, cache=get_cache(), provider=provider)
    except WeatherUnavailableError as exc:
        logger.error("Failed to fetch weather: %s", exc)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Failed to fetch weather data")

    return result.assessment


@health_router.get("/health", response_model=HealthResponse)
def health():
    """Report service liveness and version."""
    return HealthResponse(status="ok", version=__version__)
