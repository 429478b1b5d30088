"""Interfaces and helpers for weather providers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol

from meteoride.domain import WeatherObservation


class WeatherProvider(Protocol):
    """Interface for anything that can report current weather at a coordinate."""

    def fetch_current(self, latitude: float, longitude: float) -> WeatherObservation:
        """Return the current observation, or raise WeatherUnavailableError."""
        ...


@dataclass
class CallableWeatherProvider(WeatherProvider):
    """Wrap a plain function so it can be used as a provider."""

    current: Callable[[float, float], WeatherObservation]

    def fetch_current(self, latitude: float, longitude: float) -> WeatherObservation:
        """Delegate to the configured current-weather callable."""
        return self.current(latitude, longitude)


COMPASS_POINTS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)


def degrees_to_compass(degrees: float | None) -> str:
    """Convert a bearing in degrees to a 16-point compass label."""
    if degrees is None:
        return ""
    index = int((float(degrees) % 360) / 22.5 + 0.5) % len(COMPASS_POINTS)
    return COMPASS_POINTS[index]
