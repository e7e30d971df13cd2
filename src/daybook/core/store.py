"""The to-do document and the operations that mutate it.

Operations change the Store in place and report whether anything changed.
Persisting the result is the caller's job (see workflows.TodoList).
"""

from dataclasses import dataclass, field
from datetime import date, datetime

from .tasks import (
    DEFAULT_PRIORITY,
    DEFAULT_PROJECT,
    PRIORITIES,
    Task,
    sort_by_due_date,
    sort_by_priority,
)


@dataclass
class Store:
    """All tasks and projects. Task order is display order."""

    tasks: list[Task] = field(default_factory=list)
    projects: list[str] = field(default_factory=lambda: [DEFAULT_PROJECT])

    def index_of(self, task_id: str) -> int:
        """Position of a task, or -1 if missing."""
        return next((i for i, t in enumerate(self.tasks) if t.id == task_id), -1)

    def find(self, task_id: str) -> Task | None:
        i = self.index_of(task_id)
        return self.tasks[i] if i >= 0 else None

    def to_dict(self) -> dict:
        return {
            "tasks": [t.to_dict() for t in self.tasks],
            "projects": list(self.projects),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Store":
        """Rebuild a Store from its serialized form.

        Raises TypeError, KeyError or ValueError when the shape is wrong.
        """
        if not isinstance(data, dict) or not isinstance(data.get("tasks"), list):
            raise TypeError("Store document must be an object with a 'tasks' list")
        projects = data.get("projects") or []
        if not isinstance(projects, list):
            raise TypeError("'projects' must be a list")
        return cls(
            tasks=[Task.from_dict(t) for t in data["tasks"]],
            projects=_unique([str(p) for p in projects]),
        )


@dataclass(frozen=True)
class EditRequest:
    """
    Fields to change on one task. None means "leave as is".

    new_due_date may be a date, an ISO date string, or "" to clear the due date.
    """

    id: str
    new_text: str | None = None
    new_due_date: date | str | None = None
    new_priority: str | None = None


def _unique(items: list[str]) -> list[str]:
    """Drop duplicates, keeping first occurrence order."""
    return list(dict.fromkeys(items))


def add_task(
    store: Store,
    text: str,
    *,
    task_id: str,
    created_at: datetime,
    project: str | None = None,
    priority: str | None = None,
    due_date: date | None = None,
) -> Task | None:
    """Prepend a new task. Returns None if text is blank."""
    text = (text or "").strip()
    if not text:
        return None

    task = Task(
        id=task_id,
        text=text,
        created_at=created_at,
        project=project or DEFAULT_PROJECT,
        priority=priority if priority in PRIORITIES else DEFAULT_PRIORITY,
        due_date=due_date,
    )
    store.tasks.insert(0, task)
    return task


def toggle_complete(store: Store, task_id: str) -> bool:
    task = store.find(task_id)
    if not task:
        return False
    task.completed = not task.completed
    return True


def edit_task(store: Store, request: EditRequest) -> bool:
    """
    Apply an edit. Returns False only if the task does not exist.

    An unparseable due-date string raises ValueError before any field changes.
    """
    task = store.find(request.id)
    if not task:
        return False

    due = request.new_due_date
    if isinstance(due, str):
        due = date.fromisoformat(due.strip()) if due.strip() else ""

    if request.new_text is not None and request.new_text.strip():
        task.text = request.new_text.strip()

    if due == "":
        task.due_date = None
    elif due is not None:
        task.due_date = due

    if request.new_priority in PRIORITIES:
        task.priority = request.new_priority

    return True


def delete_task(store: Store, task_id: str) -> bool:
    i = store.index_of(task_id)
    if i < 0:
        return False
    del store.tasks[i]
    return True


def reorder_task(store: Store, moved_id: str, before_id: str) -> bool:
    """Move a task into the slot currently held by another task."""
    if moved_id == before_id:
        return False
    src = store.index_of(moved_id)
    dst = store.index_of(before_id)
    if src < 0 or dst < 0:
        return False
    moved = store.tasks.pop(src)
    store.tasks.insert(dst, moved)
    return True


def add_project(store: Store, name: str) -> bool:
    """Append a project name as typed. Blank names and duplicates are ignored."""
    if not name or not name.strip() or name in store.projects:
        return False
    store.projects.append(name)
    return True


def clear_completed(store: Store) -> int:
    """Remove completed tasks. Returns how many were removed."""
    before = len(store.tasks)
    store.tasks = [t for t in store.tasks if not t.completed]
    return before - len(store.tasks)


def sort_store_by_due_date(store: Store) -> None:
    store.tasks = sort_by_due_date(store.tasks)


def sort_store_by_priority(store: Store) -> None:
    store.tasks = sort_by_priority(store.tasks)


def merge_import(store: Store, tasks: list[Task], projects: list[str]) -> None:
    """
    Merge imported data into the store.

    Imported tasks go in front of existing ones. Projects become the ordered
    union of imported then existing names. Duplicate task ids are kept.
    """
    store.tasks = [*tasks, *store.tasks]
    store.projects = _unique([*projects, *store.projects])
