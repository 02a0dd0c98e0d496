"""
Base Repository

Persistence gateway contract: durable key-value ``load`` / ``save`` of
JSON-shaped values. The notebook depends on this interface only, so the
storage backend (SQLite file, memory, remote store) is swappable.
"""

from abc import ABC, abstractmethod
from typing import Any

JSONValue = Any


class BaseRepository(ABC):
    """
    Abstract key-value gateway.

    Implementations must return a value equal to the one last saved
    under the same key, or None when the key has never been written.
    Backend failures are raised as PersistenceError.
    """

    @abstractmethod
    def load(self, key: str) -> JSONValue | None:
        """Return the value stored under ``key``, or None if absent."""

    @abstractmethod
    def save(self, key: str, value: JSONValue) -> None:
        """Durably store ``value`` under ``key``, replacing any previous value."""
