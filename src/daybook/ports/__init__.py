"""Ports - interfaces/protocols for external dependencies."""

from .key_value_store import KeyValueStore
from .clock import Clock, IdGenerator
from .weather_service import WeatherService

__all__ = [
    "KeyValueStore",
    "Clock",
    "IdGenerator",
    "WeatherService",
]
