import unittest

import requests

from meteoride.errors import WeatherUnavailableError
from meteoride.weather.weatherapi_client import WeatherApiClient


class DummyResp:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} error")

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class DummySession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        if self.error:
            raise self.error
        return self.response


def _make_payload():
    return {
        "location": {"name": "Madrid"},
        "current": {
            "temp_c": 18.0,
            "wind_kph": 22.3,
            "wind_dir": "SSW",
            "precip_mm": 0.1,
            "humidity": 63,
            "condition": {"text": "Light rain shower", "code": 1240},
            "feelslike_c": 17.4,
            "uv": 4.0,
            "vis_km": 9.0,
        },
    }


class TestWeatherApiClient(unittest.TestCase):
    def test_fetch_current_maps_fields(self):
        session = DummySession(DummyResp(_make_payload()))
        client = WeatherApiClient("test_key", "https://api.weatherapi.com/v1/", timeout=3.0, session=session)

        obs = client.fetch_current(40.4168, -3.7038)

        self.assertEqual(obs.temperature_c, 18.0)
        self.assertEqual(obs.wind_kph, 22.3)
        self.assertEqual(obs.wind_dir, "SSW")
        self.assertEqual(obs.precip_mm, 0.1)
        self.assertEqual(obs.humidity, 63)
        self.assertEqual(obs.condition, "Light rain shower")
        self.assertEqual(obs.condition_code, 1240)
        self.assertEqual(obs.feels_like_c, 17.4)
        self.assertEqual(obs.uv_index, 4.0)
        self.assertEqual(obs.visibility_km, 9.0)

        call = session.calls[0]
        self.assertEqual(call["url"], "https://api.weatherapi.com/v1/current.json")
        self.assertEqual(call["params"], {"key": "test_key", "q": "40.4168,-3.7038"})
        self.assertEqual(call["timeout"], 3.0)

    def test_http_error_is_weather_unavailable(self):
        session = DummySession(DummyResp({}, status_code=503))
        client = WeatherApiClient("k", session=session)
        with self.assertRaises(WeatherUnavailableError):
            client.fetch_current(1.0, 2.0)

    def test_rejected_key_is_not_logged_or_raised(self):
        resp = requests.Response()
        resp.status_code = 401
        resp.reason = "Unauthorized"
        resp.url = "https://api.weatherapi.com/v1/current.json?key=SUPERSECRET&q=1.0%2C2.0"
        client = WeatherApiClient("SUPERSECRET", session=DummySession(resp))

        with self.assertLogs("meteoride.weather.weatherapi_client", level="ERROR") as logs:
            with self.assertRaises(WeatherUnavailableError) as ctx:
                client.fetch_current(1.0, 2.0)

        self.assertIn("401", str(ctx.exception))
        self.assertNotIn("SUPERSECRET", str(ctx.exception))
        for record in logs.records:
            self.assertNotIn("SUPERSECRET", record.getMessage())
            self.assertNotIn("SUPERSECRET", getattr(record, "url", ""))

    def test_connection_error_message_drops_url(self):
        error = requests.exceptions.ConnectionError(
            "HTTPSConnectionPool(host='api.weatherapi.com', port=443): Max retries exceeded with url: "
            "/v1/current.json?key=SUPERSECRET&q=1.0%2C2.0"
        )
        client = WeatherApiClient("SUPERSECRET", session=DummySession(error=error))
        with self.assertRaises(WeatherUnavailableError) as ctx:
            client.fetch_current(1.0, 2.0)
        self.assertEqual(str(ctx.exception), "WeatherAPI request failed: ConnectionError")

    def test_transport_error_is_weather_unavailable(self):
        session = DummySession(error=requests.exceptions.ConnectionError("dns"))
        client = WeatherApiClient("k", session=session)
        with self.assertRaises(WeatherUnavailableError):
            client.fetch_current(1.0, 2.0)

    def test_non_json_is_weather_unavailable(self):
        session = DummySession(DummyResp(ValueError("no json")))
        client = WeatherApiClient("k", session=session)
        with self.assertRaises(WeatherUnavailableError):
            client.fetch_current(1.0, 2.0)

    def test_missing_fields_are_weather_unavailable(self):
        payload = _make_payload()
        del payload["current"]["vis_km"]
        client = WeatherApiClient("k", session=DummySession(DummyResp(payload)))
        with self.assertRaises(WeatherUnavailableError):
            client.fetch_current(1.0, 2.0)

    def test_non_finite_reading_is_weather_unavailable(self):
        payload = _make_payload()
        payload["current"]["temp_c"] = float("nan")
        client = WeatherApiClient("k", session=DummySession(DummyResp(payload)))
        with self.assertRaises(WeatherUnavailableError):
            client.fetch_current(1.0, 2.0)

    def test_default_session_is_created(self):
        client = WeatherApiClient("k")
        self.assertIsInstance(client.session, requests.Session)
        self.assertEqual(client.base_url, "https://api.weatherapi.com/v1")


if __name__ == "__main__":
    unittest.main()
