"""Configuration management for daybook."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DAYBOOK_HOME = Path(os.environ.get("DAYBOOK_HOME", Path.home() / "daybook"))
CONFIG_FILE = DAYBOOK_HOME / "config" / "daybook.conf"
DATA_DIR = DAYBOOK_HOME / "data"


@dataclass
class Config:
    """daybook configuration."""

    data_dir: str = ""
    openweather_api_key: str = ""
    weather_units: str = "metric"
    weather_timeout: float = 10.0


def _unquote(value: str) -> str:
    """Strip quotes or an unquoted inline comment from a config value."""
    # Handle quoted values with inline comments: "value" # comment
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            return value[1:end_quote] if end_quote != -1 else value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from daybook.conf, then apply environment overrides."""
    config = Config()
    config_file = config_file or CONFIG_FILE

    if config_file.exists():
        for line in config_file.read_text().splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            if "=" not in line:
                continue

            key, _, value = line.partition("=")
            key = key.strip().lower()
            value = _unquote(value.strip())

            match key:
                case "data_dir":
                    config.data_dir = value
                case "openweather_api_key":
                    config.openweather_api_key = value
                case "weather_units":
                    config.weather_units = value
                case "weather_timeout":
                    try:
                        config.weather_timeout = float(value)
                    except ValueError:
                        logger.warning(f"Invalid WEATHER_TIMEOUT value: {value}")
                case _:
                    logger.debug(f"Ignoring unknown config key: {key}")

    env_key = os.environ.get("OPENWEATHER_API_KEY")
    if env_key:
        config.openweather_api_key = env_key

    return config
