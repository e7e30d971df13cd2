"""Shared workflow layer between the CLI and the functional core.

TodoList owns the Store and persists it after every mutation.
WeatherLookup runs a lookup and records favorites.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from .adapters.file_store import FileKeyValueStore
from .adapters.openweather_api import OpenWeatherAdapter
from .adapters.system_clock import SystemClock, TimestampIdGenerator
from .config import DATA_DIR, Config
from .core import store as ops
from .core.store import EditRequest, Store
from .core.tasks import Task, TaskCounts, TaskFilter, count_tasks, project_counts, visible_tasks
from .core.transfer import export_csv, export_filename, export_json, parse_import
from .core.weather import CurrentWeather, ForecastDay, daily_averages
from .ports import Clock, IdGenerator, KeyValueStore, WeatherService

logger = logging.getLogger(__name__)

STORE_KEY = "todo.advanced.v1"
THEME_KEY = "todo.theme.dark"
FAVORITES_KEY = "favorites"


def get_kv_store(config: Config) -> FileKeyValueStore:
    """Resolve data directory from config."""
    if config.data_dir:
        return FileKeyValueStore(Path(config.data_dir).expanduser())
    return FileKeyValueStore(DATA_DIR)


def get_weather_service(config: Config) -> OpenWeatherAdapter:
    return OpenWeatherAdapter(config)


# ============== To-do ==============


def load_store(kv: KeyValueStore) -> Store:
    """
    Load the persisted Store.

    Falls back to the default Store when nothing is stored or the stored
    document is unreadable. The unreadable document is left on disk until
    the next save overwrites it.
    """
    try:
        raw = kv.get(STORE_KEY)
        if raw is None:
            return Store()
        return Store.from_dict(json.loads(raw))
    except (UnicodeDecodeError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        logger.warning(f"Stored to-do document is unreadable, starting empty: {e}")
        return Store()


def save_store(kv: KeyValueStore, store: Store) -> None:
    kv.set(STORE_KEY, json.dumps(store.to_dict()))


class TodoList:
    """
    The to-do list with persistence.

    Every operation that changes the store saves the whole document.
    """

    def __init__(
        self,
        kv: KeyValueStore,
        clock: Clock | None = None,
        id_generator: IdGenerator | None = None,
    ):
        self.kv = kv
        self.clock = clock or SystemClock()
        self.id_generator = id_generator or TimestampIdGenerator()
        self.store = load_store(kv)

    def _save(self) -> None:
        save_store(self.kv, self.store)

    @property
    def tasks(self) -> list[Task]:
        return self.store.tasks

    @property
    def projects(self) -> list[str]:
        return self.store.projects

    # --- queries ---

    def visible(self, filters: TaskFilter | None = None) -> list[Task]:
        return visible_tasks(self.store.tasks, filters, as_of=self.clock.today())

    def counts(self) -> TaskCounts:
        return count_tasks(self.store.tasks, as_of=self.clock.today())

    def project_counts(self) -> list[tuple[str, int]]:
        return project_counts(self.store.tasks, self.store.projects)

    def find(self, task_id: str) -> Task | None:
        return self.store.find(task_id)

    # --- mutations ---

    def add_task(
        self,
        text: str,
        project: str | None = None,
        priority: str | None = None,
        due_date: date | None = None,
    ) -> Task | None:
        task = ops.add_task(
            self.store,
            text,
            task_id=self.id_generator.new_id(),
            created_at=self.clock.now(),
            project=project,
            priority=priority,
            due_date=due_date,
        )
        if task:
            self._save()
        return task

    def toggle_complete(self, task_id: str) -> bool:
        changed = ops.toggle_complete(self.store, task_id)
        if changed:
            self._save()
        return changed

    def edit_task(self, request: EditRequest) -> bool:
        found = ops.edit_task(self.store, request)
        if found:
            self._save()
        return found

    def delete_task(self, task_id: str) -> bool:
        changed = ops.delete_task(self.store, task_id)
        if changed:
            self._save()
        return changed

    def reorder_task(self, moved_id: str, before_id: str) -> bool:
        changed = ops.reorder_task(self.store, moved_id, before_id)
        if changed:
            self._save()
        return changed

    def add_project(self, name: str) -> bool:
        changed = ops.add_project(self.store, name)
        if changed:
            self._save()
        return changed

    def clear_completed(self) -> int:
        removed = ops.clear_completed(self.store)
        self._save()
        return removed

    def sort_by_due_date(self) -> None:
        ops.sort_store_by_due_date(self.store)
        self._save()

    def sort_by_priority(self) -> None:
        ops.sort_store_by_priority(self.store)
        self._save()

    # --- export / import ---

    def export_json(self) -> str:
        return export_json(self.store)

    def export_csv(self) -> str:
        return export_csv(self.store)

    def export_filename(self, fmt: str) -> str:
        return export_filename(self.clock.today(), fmt)

    def import_json(self, text: str | bytes) -> int:
        """Merge an exported document. Raises InvalidImportError, leaving the store untouched."""
        tasks, projects = parse_import(text)
        ops.merge_import(self.store, tasks, projects)
        self._save()
        logger.info(f"Imported {len(tasks)} tasks")
        return len(tasks)


# ============== Preferences ==============


def load_theme(kv: KeyValueStore) -> bool:
    """True when dark mode is on."""
    try:
        return kv.get(THEME_KEY) == "1"
    except UnicodeDecodeError:
        return False


def save_theme(kv: KeyValueStore, dark: bool) -> None:
    kv.set(THEME_KEY, "1" if dark else "0")


def load_favorites(kv: KeyValueStore) -> list[str]:
    try:
        raw = kv.get(FAVORITES_KEY)
        if not raw:
            return []
        data = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError):
        logger.warning("Stored favorites are unreadable, ignoring them")
        return []
    if not isinstance(data, list):
        return []
    return [str(c) for c in data]


def add_favorite(kv: KeyValueStore, city: str) -> list[str]:
    """Append a city to favorites if it is not already there."""
    favorites = load_favorites(kv)
    if city and city not in favorites:
        favorites.append(city)
        kv.set(FAVORITES_KEY, json.dumps(favorites))
    return favorites


# ============== Weather ==============


@dataclass
class WeatherReport:
    """Current conditions plus daily forecast averages."""

    city: str
    current: CurrentWeather
    days: list[ForecastDay] = field(default_factory=list)


class WeatherLookup:
    """Weather lookups that remember successful cities as favorites."""

    def __init__(self, service: WeatherService, kv: KeyValueStore):
        self.service = service
        self.kv = kv

    def lookup(self, city: str) -> WeatherReport | None:
        """
        Fetch current conditions and forecast for a city.

        Returns None for a blank city. Raises WeatherError (or
        CityNotFoundError) when the API call fails.
        """
        city = (city or "").strip()
        if not city:
            return None

        current = self.service.current(city=city)
        entries = self.service.forecast(city)
        report = WeatherReport(city=city, current=current, days=daily_averages(entries))
        add_favorite(self.kv, city)
        return report

    def lookup_by_location(self, lat: float, lon: float) -> WeatherReport | None:
        """Resolve coordinates to a city name, then look that city up."""
        here = self.service.current(lat=lat, lon=lon)
        if not here.name:
            logger.warning("Location lookup returned no city name. Search manually.")
            return None
        return self.lookup(here.name)
