"""Persistent key-value storage interface."""

from typing import Protocol


class KeyValueStore(Protocol):
    """Interface for string values stored under fixed keys."""

    def get(self, key: str) -> str | None:
        """Read the value for a key. Returns None if not set."""
        ...

    def set(self, key: str, value: str) -> None:
        """Write/overwrite the value for a key."""
        ...
