"""Pure task domain logic - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date, datetime, timezone

DEFAULT_PROJECT = "Inbox"
DEFAULT_PRIORITY = "medium"

PRIORITIES = ("low", "medium", "high")
PRIORITY_RANK = {"high": 0, "medium": 1, "low": 2}

STATUSES = ("all", "completed", "pending", "overdue")
ALL = "all"


def format_timestamp(value: datetime) -> str:
    """Format a timestamp as ISO-8601 UTC with milliseconds, e.g. 2025-01-15T09:30:00.000Z."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def parse_timestamp(text: str) -> datetime:
    """Parse an ISO-8601 timestamp; a trailing Z means UTC."""
    return datetime.fromisoformat(text.replace("Z", "+00:00"))


@dataclass
class Task:
    """A to-do item."""

    id: str
    text: str
    created_at: datetime
    project: str = DEFAULT_PROJECT
    priority: str = DEFAULT_PRIORITY
    due_date: date | None = None
    completed: bool = False

    def is_overdue(self, as_of: date | None = None) -> bool:
        """Due strictly before today and still open."""
        if not self.due_date or self.completed:
            return False
        as_of = as_of or date.today()
        return self.due_date < as_of

    def to_dict(self) -> dict:
        """Serialize using the stored document's field names."""
        return {
            "id": self.id,
            "text": self.text,
            "project": self.project,
            "priority": self.priority,
            "dueDate": self.due_date.isoformat() if self.due_date else None,
            "completed": self.completed,
            "createdAt": format_timestamp(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        """Create Task from a stored or imported document entry.

        Raises KeyError, TypeError or ValueError on malformed entries.
        """
        if not isinstance(data, dict):
            raise TypeError(f"Task entry must be an object, got {type(data).__name__}")
        due = None
        if data.get("dueDate"):
            due = date.fromisoformat(str(data["dueDate"]).split("T")[0])
        created = data.get("createdAt")
        priority = data.get("priority") or DEFAULT_PRIORITY
        return cls(
            id=str(data["id"]),
            text=str(data["text"]),
            created_at=parse_timestamp(str(created)) if created else datetime.fromtimestamp(0, timezone.utc),
            project=data.get("project") or DEFAULT_PROJECT,
            priority=priority if priority in PRIORITIES else DEFAULT_PRIORITY,
            due_date=due,
            completed=bool(data.get("completed", False)),
        )


@dataclass(frozen=True)
class TaskFilter:
    """Criteria narrowing the visible task list. "all" or empty means no constraint."""

    text_query: str = ""
    status: str = ALL
    priority: str = ALL
    project: str = ALL


@dataclass(frozen=True)
class TaskCounts:
    """Aggregate counts over the whole task collection."""

    total: int
    completed: int
    pending: int
    overdue: int


def matches(task: Task, filters: TaskFilter, as_of: date | None = None) -> bool:
    """Check a single task against every active filter."""
    as_of = as_of or date.today()

    if filters.project != ALL and task.project != filters.project:
        return False
    if filters.priority != ALL and task.priority != filters.priority:
        return False

    query = filters.text_query.strip().lower()
    if query and query not in task.text.lower():
        return False

    match filters.status:
        case "completed":
            return task.completed
        case "pending":
            return not task.completed
        case "overdue":
            return task.is_overdue(as_of)
    return True


def visible_tasks(
    tasks: list[Task],
    filters: TaskFilter | None = None,
    as_of: date | None = None,
) -> list[Task]:
    """
    Filter tasks down to the visible subset.

    Order is preserved. Pure function - no I/O.
    """
    filters = filters or TaskFilter()
    as_of = as_of or date.today()
    return [t for t in tasks if matches(t, filters, as_of)]


def count_tasks(tasks: list[Task], as_of: date | None = None) -> TaskCounts:
    """Count totals over the unfiltered collection."""
    as_of = as_of or date.today()
    completed = sum(1 for t in tasks if t.completed)
    return TaskCounts(
        total=len(tasks),
        completed=completed,
        pending=len(tasks) - completed,
        overdue=sum(1 for t in tasks if t.is_overdue(as_of)),
    )


def project_counts(tasks: list[Task], projects: list[str]) -> list[tuple[str, int]]:
    """Number of tasks per listed project, in project order."""
    return [(p, sum(1 for t in tasks if t.project == p)) for p in projects]


def sort_by_due_date(tasks: list[Task]) -> list[Task]:
    """
    Sort by due date ascending; tasks without a due date go last.

    Stable, so ties and undated tasks keep their relative order.
    """
    return sorted(tasks, key=lambda t: (t.due_date is None, t.due_date or date.min))


def sort_by_priority(tasks: list[Task]) -> list[Task]:
    """Sort high -> medium -> low. Stable within a priority."""
    return sorted(tasks, key=lambda t: PRIORITY_RANK.get(t.priority, len(PRIORITY_RANK)))
