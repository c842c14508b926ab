"""Scoped string key-value store abstractions."""

from dataclasses import dataclass
from typing import Protocol


class KeyValueStore(Protocol):
    """Persistence interface for serialized values."""

    def get_item(self, key: str) -> str | None:
        """Return the stored value for a key, if present."""

    def set_item(self, key: str, value: str) -> None:
        """Store a value under a key, replacing any previous value."""

    def remove_item(self, key: str) -> None:
        """Remove a key; missing keys are ignored."""


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store used when no database is configured."""

    _items: dict[str, str]

    def __init__(self) -> None:
        self._items = {}

    def get_item(self, key: str) -> str | None:
        """Return the stored value for a key."""
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        """Store a value under a key."""
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        """Remove a key if present."""
        self._items.pop(key, None)
