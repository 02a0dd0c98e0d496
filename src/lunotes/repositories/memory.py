"""
In-Memory Repository

Process-local gateway used for tests and ephemeral sessions.
Values are deep-copied through JSON on the way in and out, so callers
observe the same isolation a durable backend would give them.
"""

import json

from lunotes.repositories.base import BaseRepository, JSONValue


class InMemoryRepository(BaseRepository):
    def __init__(self, initial: dict[str, JSONValue] | None = None) -> None:
        self._data: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.save(key, value)

    def load(self, key: str) -> JSONValue | None:
        raw = self._data.get(key)
        return None if raw is None else json.loads(raw)

    def save(self, key: str, value: JSONValue) -> None:
        self._data[key] = json.dumps(value)

    def keys(self) -> list[str]:
        return list(self._data)
