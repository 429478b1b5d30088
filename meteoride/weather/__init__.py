"""Weather providers that produce WeatherObservation snapshots."""

from .base import CallableWeatherProvider, WeatherProvider, degrees_to_compass
from .factory import build_weather_provider
from .open_meteo_client import fetch_current_observation
from .weatherapi_client import WeatherApiClient

__all__ = [
    "build_weather_provider",
    "CallableWeatherProvider",
    "WeatherProvider",
    "WeatherApiClient",
    "degrees_to_compass",
    "fetch_current_observation",
]
