"""daybook CLI - to-do list and weather lookup."""

import json
import logging
import sys
from datetime import date
from pathlib import Path

import click

from .adapters.openweather_api import WeatherError
from .config import load_config
from .core.store import EditRequest
from .core.tasks import PRIORITIES, STATUSES, ALL, Task, TaskFilter
from .core.transfer import InvalidImportError
from .core.weather import format_forecast_chart, suggest_cities
from .workflows import (
    TodoList,
    WeatherLookup,
    WeatherReport,
    get_kv_store,
    get_weather_service,
    load_favorites,
    load_theme,
    save_theme,
)

PRIORITY_MARKERS = {"high": "!!!", "medium": "!! ", "low": "!  "}


def _todo_list() -> TodoList:
    return TodoList(get_kv_store(load_config()))


def _parse_due(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"Invalid date '{value}'. Use YYYY-MM-DD.")


def _format_task(task: Task, today: date) -> str:
    check = "x" if task.completed else " "
    due = f" (due {task.due_date})" if task.due_date else ""
    overdue = " OVERDUE" if task.is_overdue(today) else ""
    return f"[{check}] {PRIORITY_MARKERS.get(task.priority, '   ')} {task.text}{due}{overdue}  #{task.project}  {task.id}"


def _not_found(task_id: str) -> None:
    click.echo(f"Task {task_id} not found.", err=True)
    sys.exit(1)


@click.group()
@click.version_option()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """daybook - to-do list and weather CLI."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


# ============== To-do ==============


@main.command()
@click.argument("text")
@click.option("--project", "-p", default=None, help="Project name (default: Inbox)")
@click.option("--priority", type=click.Choice(PRIORITIES), default="medium", show_default=True)
@click.option("--due", default=None, help="Due date (YYYY-MM-DD)")
def add(text: str, project: str | None, priority: str, due: str | None):
    """Add a task to the top of the list."""
    todo = _todo_list()
    task = todo.add_task(text, project=project, priority=priority, due_date=_parse_due(due))
    if not task:
        click.echo("Task text is empty, nothing added.", err=True)
        sys.exit(1)
    click.echo(f"Added {task.id}: {task.text}")


@main.command("list")
@click.option("--search", "-s", default="", help="Case-insensitive text search")
@click.option("--status", type=click.Choice(STATUSES), default=ALL, show_default=True)
@click.option("--priority", type=click.Choice((ALL, *PRIORITIES)), default=ALL, show_default=True)
@click.option("--project", default=ALL, help="Project name, or 'all'")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_tasks(search: str, status: str, priority: str, project: str, as_json: bool):
    """List tasks matching the filters, in list order."""
    todo = _todo_list()
    filters = TaskFilter(text_query=search, status=status, priority=priority, project=project)
    tasks = todo.visible(filters)

    if as_json:
        click.echo(json.dumps([t.to_dict() for t in tasks], indent=2))
        return

    if not tasks:
        click.echo("No tasks found.")
    else:
        today = todo.clock.today()
        for task in tasks:
            click.echo(_format_task(task, today))

    c = todo.counts()
    click.echo(f"\n{c.total} total, {c.completed} completed, {c.pending} pending, {c.overdue} overdue")


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def stats(as_json: bool):
    """Show task counts over the whole list."""
    todo = _todo_list()
    c = todo.counts()
    if as_json:
        click.echo(
            json.dumps(
                {
                    "total": c.total,
                    "completed": c.completed,
                    "pending": c.pending,
                    "overdue": c.overdue,
                    "projects": dict(todo.project_counts()),
                },
                indent=2,
            )
        )
        return

    click.echo(f"Total:     {c.total}")
    click.echo(f"Completed: {c.completed}")
    click.echo(f"Pending:   {c.pending}")
    click.echo(f"Overdue:   {c.overdue}")


@main.command()
@click.argument("task_id")
def done(task_id: str):
    """Toggle a task between done and not done."""
    todo = _todo_list()
    if not todo.toggle_complete(task_id):
        _not_found(task_id)
    task = todo.find(task_id)
    click.echo(f"{'Completed' if task.completed else 'Reopened'}: {task.text}")


@main.command()
@click.argument("task_id")
@click.option("--text", default=None, help="New task text")
@click.option("--due", default=None, help="New due date (YYYY-MM-DD), or '' to clear")
@click.option("--priority", type=click.Choice(PRIORITIES), default=None)
def edit(task_id: str, text: str | None, due: str | None, priority: str | None):
    """Edit a task's text, due date or priority."""
    if due:
        _parse_due(due)
    todo = _todo_list()
    request = EditRequest(id=task_id, new_text=text, new_due_date=due, new_priority=priority)
    if not todo.edit_task(request):
        _not_found(task_id)
    click.echo(f"Updated {task_id}.")


@main.command("rm")
@click.argument("task_id")
@click.option("--yes", "-y", is_flag=True, help="Don't ask for confirmation")
def remove(task_id: str, yes: bool):
    """Delete a task."""
    todo = _todo_list()
    if not todo.find(task_id):
        _not_found(task_id)
    if not yes and not click.confirm("Delete task?"):
        return
    todo.delete_task(task_id)
    click.echo(f"Deleted {task_id}.")


@main.command()
@click.argument("task_id")
@click.argument("before_id")
def move(task_id: str, before_id: str):
    """Move TASK_ID into the position held by BEFORE_ID."""
    todo = _todo_list()
    if not todo.reorder_task(task_id, before_id):
        click.echo("Nothing moved (unknown or identical ids).", err=True)
        sys.exit(1)
    click.echo(f"Moved {task_id}.")


@main.command()
@click.option("--yes", "-y", is_flag=True, help="Don't ask for confirmation")
def clear(yes: bool):
    """Remove all completed tasks."""
    if not yes and not click.confirm("Clear completed tasks?"):
        return
    removed = _todo_list().clear_completed()
    click.echo(f"Removed {removed} completed task(s).")


@main.command()
@click.argument("key", type=click.Choice(["due", "priority"]))
def sort(key: str):
    """Reorder the whole list by due date or priority."""
    todo = _todo_list()
    if key == "due":
        todo.sort_by_due_date()
    else:
        todo.sort_by_priority()
    click.echo(f"Sorted by {key}.")


@main.group()
def project():
    """Manage projects."""
    pass


@project.command("add")
@click.argument("name")
def project_add(name: str):
    """Add a project."""
    if _todo_list().add_project(name):
        click.echo(f"Added project: {name}")
    else:
        click.echo(f"Project '{name}' already exists or is empty.")


@project.command("list")
def project_list():
    """List projects with their task counts."""
    for name, count in _todo_list().project_counts():
        click.echo(f"{name} ({count})")


@main.command("export")
@click.argument("fmt", type=click.Choice(["json", "csv"]), default="json")
@click.option("--out", "-o", default=None, help="Output file (default: todo-YYYY-MM-DD.<fmt>)")
def export_cmd(fmt: str, out: str | None):
    """Export the list to JSON or CSV."""
    todo = _todo_list()
    if fmt == "csv":
        if not todo.tasks:
            click.echo("No tasks.", err=True)
            sys.exit(1)
        data = todo.export_csv()
    else:
        data = todo.export_json()

    path = Path(out or todo.export_filename(fmt)).expanduser().resolve()
    path.write_text(data, encoding="utf-8")
    click.echo(f"Exported to: {path}")


@main.command("import")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def import_cmd(file: Path):
    """Merge tasks and projects from an exported JSON file."""
    todo = _todo_list()
    try:
        count = todo.import_json(file.read_bytes())
    except InvalidImportError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo(f"Imported {count} task(s).")


@main.command()
@click.argument("mode", type=click.Choice(["dark", "light"]), required=False)
def theme(mode: str | None):
    """Show or set the display theme."""
    kv = get_kv_store(load_config())
    if mode:
        save_theme(kv, mode == "dark")
    click.echo(f"Theme: {'dark' if load_theme(kv) else 'light'}")


# ============== Weather ==============


def _show_report(report: WeatherReport) -> None:
    cur = report.current
    click.echo(f"{cur.name} ({'day' if cur.is_day else 'night'})")
    click.echo(cur.description.upper())
    click.echo(f"Temp: {cur.temp}°C (min: {cur.temp_min}°C / max: {cur.temp_max}°C)")
    click.echo(f"Humidity: {cur.humidity}%")
    click.echo(f"Wind: {cur.wind_speed} m/s")
    if report.days:
        click.echo("\nAvg Temp (°C)")
        for line in format_forecast_chart(report.days):
            click.echo(f"  {line}")


def _weather_error(city: str) -> None:
    click.echo(f'Could not find "{city or "Unknown"}".', err=True)
    click.echo('Check spelling or add country code (e.g., "Paris,FR").', err=True)
    sys.exit(1)


@main.command()
@click.argument("city")
def weather(city: str):
    """Show current weather and a 5-day forecast for CITY."""
    config = load_config()
    lookup = WeatherLookup(get_weather_service(config), get_kv_store(config))
    try:
        report = lookup.lookup(city)
    except WeatherError:
        _weather_error(city)
    if report is None:
        click.echo("No city given.", err=True)
        sys.exit(1)
    _show_report(report)


@main.command("weather-here")
@click.option("--lat", type=float, required=True, help="Latitude")
@click.option("--lon", type=float, required=True, help="Longitude")
def weather_here(lat: float, lon: float):
    """Show weather for the city at the given coordinates."""
    config = load_config()
    lookup = WeatherLookup(get_weather_service(config), get_kv_store(config))
    try:
        report = lookup.lookup_by_location(lat, lon)
    except WeatherError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    if report is None:
        click.echo("Location returned no city. Please search manually.", err=True)
        sys.exit(1)
    _show_report(report)


@main.command()
def favorites():
    """List cities you have looked up."""
    cities = load_favorites(get_kv_store(load_config()))
    if not cities:
        click.echo("No favorites yet.")
        return
    for city in cities:
        click.echo(f"• {city}")


@main.command()
@click.argument("query", default="")
def cities(query: str):
    """Suggest city names matching QUERY."""
    for city in suggest_cities(query):
        click.echo(city)


if __name__ == "__main__":
    main()
