"""
Time and Identifier Helpers

Timestamps are UTC-aware. Identifiers are millisecond-epoch strings so
they sort by creation order and match ids written by earlier releases.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import UTC, datetime

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(UTC)


class IdGenerator:
    """
    Issues unique, creation-ordered ids.

    Two ids requested within the same millisecond (or after the clock
    steps backwards) are bumped so every id is strictly greater than the
    previous one.

    Args:
        clock: Source of the current time.
    """

    def __init__(self, clock: Clock = utcnow) -> None:
        self._clock = clock
        self._last = 0

    def observe(self, ids: Iterable[str]) -> None:
        """Never issue an id at or below any numeric id already in use."""
        for value in ids:
            if value.isascii() and value.isdigit():
                self._last = max(self._last, int(value))

    def __call__(self) -> str:
        candidate = int(self._clock().timestamp() * 1000)
        if candidate <= self._last:
            candidate = self._last + 1
        self._last = candidate
        return str(candidate)
