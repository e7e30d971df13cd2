"""OpenWeatherMap API adapter - HTTP client for weather lookups."""

import logging

import requests

from daybook.config import Config, load_config
from daybook.core.weather import CurrentWeather, ForecastEntry

logger = logging.getLogger(__name__)

API_BASE = "https://api.openweathermap.org/data/2.5"


class WeatherError(Exception):
    """Raised when a weather lookup fails."""

    pass


class CityNotFoundError(WeatherError):
    """Raised when the API does not know the requested place."""

    pass


class OpenWeatherAdapter:
    """
    OpenWeatherMap API adapter.

    Implements WeatherService protocol. No business logic - just I/O.
    """

    def __init__(self, config: Config | None = None, session: requests.Session | None = None):
        self.config = config or load_config()
        self._session = session or requests.Session()

    def _api_request(self, endpoint: str, params: dict) -> dict:
        """Make an API request with the key and units applied."""
        if not self.config.openweather_api_key:
            raise WeatherError("No OpenWeatherMap API key. Set OPENWEATHER_API_KEY or add it to daybook.conf")

        query = {**params, "appid": self.config.openweather_api_key, "units": self.config.weather_units}
        try:
            resp = self._session.get(
                f"{API_BASE}{endpoint}",
                params=query,
                timeout=self.config.weather_timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Weather request to {endpoint} failed: {e}")
            raise WeatherError(f"Weather request failed: {e}") from e

        if resp.status_code == 404:
            raise CityNotFoundError("City not found")
        if not resp.ok:
            logger.error(f"Weather API returned {resp.status_code}: {resp.text}")
            raise WeatherError(f"Weather API error {resp.status_code}")

        try:
            return resp.json()
        except ValueError as e:
            raise WeatherError("Weather API returned invalid JSON") from e

    def current(
        self,
        city: str | None = None,
        lat: float | None = None,
        lon: float | None = None,
    ) -> CurrentWeather:
        """Fetch current conditions by city name or by coordinates."""
        if city:
            params = {"q": city}
        elif lat is not None and lon is not None:
            params = {"lat": lat, "lon": lon}
        else:
            raise ValueError("Either city or lat/lon is required")
        return CurrentWeather.from_api(self._api_request("/weather", params))

    def forecast(self, city: str) -> list[ForecastEntry]:
        """Fetch the 3-hourly forecast steps for a city."""
        data = self._api_request("/forecast", {"q": city})
        try:
            return [ForecastEntry.from_api(item) for item in data.get("list", [])]
        except (KeyError, TypeError, ValueError) as e:
            raise WeatherError(f"Unexpected forecast format: {e}") from e
