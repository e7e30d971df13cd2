"""Adapters - I/O implementations of ports."""

from .file_store import FileKeyValueStore
from .system_clock import SystemClock, TimestampIdGenerator
from .openweather_api import OpenWeatherAdapter, WeatherError, CityNotFoundError

__all__ = [
    "FileKeyValueStore",
    "SystemClock",
    "TimestampIdGenerator",
    "OpenWeatherAdapter",
    "WeatherError",
    "CityNotFoundError",
]
