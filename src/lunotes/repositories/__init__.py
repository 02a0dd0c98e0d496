"""Repositories package."""

from lunotes.repositories.base import BaseRepository
from lunotes.repositories.kv import KeyValueRepository
from lunotes.repositories.memory import InMemoryRepository

__all__ = [
    "BaseRepository",
    "InMemoryRepository",
    "KeyValueRepository",
]
