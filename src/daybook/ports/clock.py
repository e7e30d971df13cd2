"""Time and id generation interfaces."""

from datetime import date, datetime
from typing import Protocol


class Clock(Protocol):
    """Source of the current time."""

    def now(self) -> datetime:
        """Current timestamp (UTC)."""
        ...

    def today(self) -> date:
        """Current local calendar date."""
        ...


class IdGenerator(Protocol):
    """Source of unique task ids."""

    def new_id(self) -> str:
        ...
