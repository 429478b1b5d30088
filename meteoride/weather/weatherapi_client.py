"""Client for the WeatherAPI.com current-conditions endpoint."""
from __future__ import annotations

import requests
from pydantic import ValidationError
from retry_requests import retry

from meteoride.domain import WeatherObservation
from meteoride.errors import WeatherUnavailableError
from meteoride.weather.base import WeatherProvider
from utils.logging_utils import get_tagged_logger, mask_url

logger = get_tagged_logger(__name__, tag="weather/weatherapi_client")

DEFAULT_BASE_URL = "https://api.weatherapi.com/v1"


def _to_observation(payload: dict) -> WeatherObservation:
    """Map a WeatherAPI `current.json` body onto a WeatherObservation."""
    current = payload["current"]
    condition = current["condition"]
    return WeatherObservation(
        temperature_c=current["temp_c"],
        wind_kph=current["wind_kph"],
        wind_dir=current["wind_dir"],
        precip_mm=current["precip_mm"],
        humidity=current["humidity"],
        condition=condition["text"],
        condition_code=condition["code"],
        feels_like_c=current["feelslike_c"],
        uv_index=current["uv"],
        visibility_km=current["vis_km"],
    )


class WeatherApiClient(WeatherProvider):
    """Fetches current conditions from WeatherAPI.com."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float = 10.0,
        retries: int = 2,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize with an API key, base URL and HTTP retry policy."""
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or retry(requests.Session(), retries=retries, backoff_factor=0.2)

    def fetch_current(self, latitude: float, longitude: float) -> WeatherObservation:
        """Fetch the current observation for a coordinate."""
        url = f"{self.base_url}/current.json"
        params = {"key": self.api_key, "q": f"{latitude},{longitude}"}
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
            resp.raise_for_status()
            payload = resp.json()
        # requests puts the full request URL, api key included, into its
        # exception text, so only the status or exception type is reported.
        except requests.exceptions.HTTPError as exc:
            status_code = exc.response.status_code if exc.response is not None else None
            logger.error("WeatherAPI returned HTTP %s", status_code, extra={"url": mask_url(url)})
            raise WeatherUnavailableError(f"WeatherAPI returned HTTP {status_code}") from exc
        except requests.exceptions.RequestException as exc:
            logger.error("WeatherAPI request failed: %s", type(exc).__name__, extra={"url": mask_url(url)})
            raise WeatherUnavailableError(f"WeatherAPI request failed: {type(exc).__name__}") from exc
        except ValueError as exc:
            raise WeatherUnavailableError("WeatherAPI returned non-JSON response") from exc

        try:
            observation = _to_observation(payload)
        except (KeyError, TypeError, ValidationError) as exc:
            logger.error("Unexpected WeatherAPI payload: %s", exc)
            raise WeatherUnavailableError("WeatherAPI returned an unexpected payload") from exc

        logger.debug(
            "WeatherAPI observation received",
            extra={"latitude": latitude, "longitude": longitude, "condition": observation.condition},
        )
        return observation
