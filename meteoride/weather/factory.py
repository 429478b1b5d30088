"""Factory helpers for choosing a weather provider at startup."""

from __future__ import annotations

from functools import partial

from meteoride import config
from meteoride.weather.base import CallableWeatherProvider, WeatherProvider
from meteoride.weather.open_meteo_client import build_session, fetch_current_observation
from meteoride.weather.weatherapi_client import WeatherApiClient
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="weather/factory")


DEFAULT_PROVIDER_NAME = "weatherapi"


def build_weather_provider(settings: config.Settings | None = None) -> WeatherProvider:
    """Instantiate the configured weather provider."""
    settings = settings or config.settings
    provider = (settings.weather_provider or DEFAULT_PROVIDER_NAME).lower()

    if provider == "weatherapi":
        if not settings.weather_api_key:
            raise ValueError("weather_api_key must be set for the WeatherAPI provider")
        logger.info("Using WeatherAPI provider", extra={"base_url": settings.weather_base_url})
        return WeatherApiClient(
            settings.weather_api_key,
            settings.weather_base_url,
            timeout=settings.weather_timeout_seconds,
            retries=settings.weather_retries,
        )

    if provider == "open_meteo":
        logger.info("Using Open-Meteo provider")
        return CallableWeatherProvider(
            current=partial(
                fetch_current_observation,
                timeout=settings.weather_timeout_seconds,
                http_session=build_session(settings.weather_retries),
            ),
        )

    raise ValueError(f"Unknown weather provider '{provider}'")
