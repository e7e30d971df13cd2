"""Weather service interface."""

from typing import Protocol

from daybook.core.weather import CurrentWeather, ForecastEntry


class WeatherService(Protocol):
    """Interface for fetching weather from any backend."""

    def current(
        self,
        city: str | None = None,
        lat: float | None = None,
        lon: float | None = None,
    ) -> CurrentWeather:
        """Fetch current conditions by city name or by coordinates."""
        ...

    def forecast(self, city: str) -> list[ForecastEntry]:
        """Fetch the timestamped forecast steps for a city."""
        ...
