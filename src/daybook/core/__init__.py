"""Functional core - pure business logic with no I/O."""

from .tasks import Task, TaskFilter, TaskCounts, visible_tasks, count_tasks, project_counts
from .store import Store, EditRequest
from .transfer import InvalidImportError, export_json, export_csv, parse_import
from .weather import CurrentWeather, ForecastEntry, ForecastDay, daily_averages, suggest_cities

__all__ = [
    # Tasks
    "Task",
    "TaskFilter",
    "TaskCounts",
    "visible_tasks",
    "count_tasks",
    "project_counts",
    # Store
    "Store",
    "EditRequest",
    # Transfer
    "InvalidImportError",
    "export_json",
    "export_csv",
    "parse_import",
    # Weather
    "CurrentWeather",
    "ForecastEntry",
    "ForecastDay",
    "daily_averages",
    "suggest_cities",
]
