"""Helpers for fetching current conditions from the Open-Meteo forecast API."""
from __future__ import annotations

import requests
from pydantic import ValidationError
from retry_requests import retry

from meteoride.domain import WeatherObservation
from meteoride.errors import WeatherUnavailableError
from meteoride.weather.base import degrees_to_compass
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="weather/open_meteo_client")

DEFAULT_RETRIES = 2


def build_session(retries: int = DEFAULT_RETRIES) -> requests.Session:
    """Return a requests session that retries transient failures."""
    return retry(requests.Session(), retries=retries, backoff_factor=0.2)


session = build_session()

OPEN_METEO_WEATHER_URL = "https://api.open-meteo.com/v1/forecast"

CURRENT_VARS = [
    "temperature_2m",
    "relative_humidity_2m",
    "apparent_temperature",
    "precipitation",
    "weather_code",
    "wind_speed_10m",
    "wind_direction_10m",
    "uv_index",
    "visibility",
]

EXPECTED_UNITS = {
    "temperature_2m": "°C",
    "apparent_temperature": "°C",
    "precipitation": "mm",
    "wind_speed_10m": "km/h",
    "visibility": "m",
}

# WMO weather interpretation codes.
WMO_DESCRIPTIONS = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    56: "Light freezing drizzle",
    57: "Dense freezing drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    66: "Light freezing rain",
    67: "Heavy freezing rain",
    71: "Slight snow fall",
    73: "Moderate snow fall",
    75: "Heavy snow fall",
    77: "Snow grains",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}


def _warn_on_unexpected_units(units: dict) -> None:
    """Log a warning if Open-Meteo returns units we did not request."""
    if not units:
        return
    for field, expected in EXPECTED_UNITS.items():
        actual = units.get(field)
        if actual and actual != expected:
            logger.warning(
                "Unexpected Open-Meteo unit",
                extra={"field": field, "unit": actual, "expected": expected},
            )


def _to_observation(data: dict) -> WeatherObservation:
    """Map the `current` block of an Open-Meteo response onto a WeatherObservation."""
    current = data["current"]
    _warn_on_unexpected_units(data.get("current_units") or {})

    code = int(current.get("weather_code") or 0)
    visibility_m = current.get("visibility")
    temperature = current["temperature_2m"]
    apparent = current.get("apparent_temperature")
    return WeatherObservation(
        temperature_c=temperature,
        wind_kph=current.get("wind_speed_10m") or 0.0,
        wind_dir=degrees_to_compass(current.get("wind_direction_10m")),
        precip_mm=current.get("precipitation") or 0.0,
        humidity=round(current.get("relative_humidity_2m") or 0),
        condition=WMO_DESCRIPTIONS.get(code, "Unknown"),
        condition_code=code,
        feels_like_c=apparent if apparent is not None else temperature,
        uv_index=current.get("uv_index") or 0.0,
        # Open-Meteo reports visibility in metres.
        visibility_km=visibility_m / 1000.0 if visibility_m is not None else 10.0,
    )


def fetch_current_observation(
    latitude: float,
    longitude: float,
    *,
    timeout: float = 10.0,
    http_session: requests.Session | None = None,
) -> WeatherObservation:
    """Fetch the latest available observation for the given coordinates.

    Uses the module-level `session` unless `http_session` is given.
    """
    client = http_session if http_session is not None else session
    params = {
        "latitude": latitude,
        "longitude": longitude,
        "current": ",".join(CURRENT_VARS),
        "timezone": "auto",
        "temperature_unit": "celsius",
        "wind_speed_unit": "kmh",
        "precipitation_unit": "mm",
    }

    try:
        resp = client.get(OPEN_METEO_WEATHER_URL, params=params, timeout=timeout)
        resp.raise_for_status()
        data = resp.json()
    except requests.exceptions.RequestException as exc:
        logger.error("Open-Meteo request failed: %s", type(exc).__name__)
        raise WeatherUnavailableError(f"Open-Meteo request failed: {type(exc).__name__}") from exc
    except ValueError as exc:
        raise WeatherUnavailableError("Open-Meteo returned non-JSON response") from exc

    try:
        return _to_observation(data)
    except (KeyError, TypeError, ValidationError) as exc:
        logger.error("Unexpected Open-Meteo payload: %s", exc)
        raise WeatherUnavailableError("Open-Meteo returned an unexpected payload") from exc
