"""JSON/CSV export and JSON import of the to-do document."""

import csv
import io
import json
from datetime import date

from .store import Store
from .tasks import Task, format_timestamp

CSV_COLUMNS = ["id", "text", "project", "priority", "dueDate", "completed", "createdAt"]


class InvalidImportError(Exception):
    """Raised when an import file cannot be parsed or has the wrong shape."""

    pass


def export_json(store: Store) -> str:
    """Pretty-printed JSON of the whole document."""
    return json.dumps(store.to_dict(), indent=2)


def export_csv(store: Store) -> str:
    """One row per task, every field quoted."""
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)
    for t in store.tasks:
        writer.writerow(
            [
                t.id,
                t.text,
                t.project,
                t.priority,
                t.due_date.isoformat() if t.due_date else "",
                "true" if t.completed else "false",
                format_timestamp(t.created_at),
            ]
        )
    return buf.getvalue()


def export_filename(today: date, fmt: str) -> str:
    """Default file name for an export, e.g. todo-2025-01-15.json."""
    return f"todo-{today.isoformat()}.{fmt}"


def parse_import(text: str | bytes) -> tuple[list[Task], list[str]]:
    """
    Parse an import document into (tasks, projects).

    The document must be a JSON object with a "tasks" array. A missing
    "projects" field counts as empty. Bytes are decoded as UTF-8, UTF-16 or
    UTF-32 depending on how they start.
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidImportError(f"Error parsing file: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("tasks"), list):
        raise InvalidImportError("Invalid file: expected an object with a 'tasks' array")

    projects = data.get("projects") or []
    if not isinstance(projects, list):
        raise InvalidImportError("Invalid file: 'projects' must be an array")

    try:
        tasks = [Task.from_dict(entry) for entry in data["tasks"]]
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidImportError(f"Invalid task entry: {e}") from e

    return tasks, [str(p) for p in projects]
