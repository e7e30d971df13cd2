"""Pure weather logic: response parsing, daily forecast buckets, city suggestions."""

from dataclasses import dataclass
from datetime import date, datetime

POPULAR_CITIES = [
    "New York,US",
    "London,UK",
    "Paris,FR",
    "Tokyo,JP",
    "Sydney,AU",
    "Delhi,IN",
    "Mumbai,IN",
    "Los Angeles,US",
    "Beijing,CN",
    "Moscow,RU",
    "Berlin,DE",
    "Dubai,AE",
]


@dataclass
class CurrentWeather:
    """Current conditions for one place."""

    name: str
    description: str
    temp: float
    temp_min: float
    temp_max: float
    humidity: int
    wind_speed: float
    icon: str = ""

    @property
    def is_day(self) -> bool:
        """Icon codes end in 'd' for day and 'n' for night."""
        return "d" in self.icon

    @classmethod
    def from_api(cls, data: dict) -> "CurrentWeather":
        """Create CurrentWeather from an OpenWeatherMap /weather response."""
        main = data.get("main", {})
        conditions = (data.get("weather") or [{}])[0]
        return cls(
            name=data.get("name", ""),
            description=conditions.get("description", ""),
            temp=main.get("temp", 0.0),
            temp_min=main.get("temp_min", 0.0),
            temp_max=main.get("temp_max", 0.0),
            humidity=main.get("humidity", 0),
            wind_speed=data.get("wind", {}).get("speed", 0.0),
            icon=conditions.get("icon", ""),
        )


@dataclass
class ForecastEntry:
    """One timestamped forecast step."""

    at: datetime
    temp: float

    @classmethod
    def from_api(cls, data: dict) -> "ForecastEntry":
        # dt_txt looks like "2025-01-15 12:00:00"
        return cls(
            at=datetime.fromisoformat(data["dt_txt"]),
            temp=float(data["main"]["temp"]),
        )


@dataclass
class ForecastDay:
    """Average temperature for one calendar day."""

    day: date
    avg_temp: float


def daily_averages(entries: list[ForecastEntry], days: int = 5) -> list[ForecastDay]:
    """
    Group forecast entries by calendar date and average each day's temperature.

    Keeps the first `days` distinct dates in response order.
    Pure function - no I/O.
    """
    buckets: dict[date, list[float]] = {}
    for entry in entries:
        buckets.setdefault(entry.at.date(), []).append(entry.temp)

    return [
        ForecastDay(day=d, avg_temp=round(sum(temps) / len(temps), 1))
        for d, temps in list(buckets.items())[:days]
    ]


def suggest_cities(query: str = "", cities: list[str] | None = None) -> list[str]:
    """Case-insensitive substring match over known cities."""
    cities = POPULAR_CITIES if cities is None else cities
    query = query.lower()
    return [c for c in cities if query in c.lower()]


def format_forecast_chart(days: list[ForecastDay], width: int = 30) -> list[str]:
    """
    Render daily averages as horizontal text bars.

    Bars are scaled between the coldest and warmest day.
    """
    if not days:
        return []

    lo = min(d.avg_temp for d in days)
    hi = max(d.avg_temp for d in days)
    span = hi - lo

    lines = []
    for d in days:
        filled = width if span == 0 else 1 + round((d.avg_temp - lo) / span * (width - 1))
        lines.append(f"{d.day.strftime('%a %b %d')}  {'█' * filled:<{width}}  {d.avg_temp:.1f}°")
    return lines
