"""
Pytest Configuration and Fixtures

Shared fixtures for the note store tests. Everything runs offline:
persistence goes through an in-memory gateway or a SQLite file under
``tmp_path``, and time comes from a controllable clock.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from lunotes.repositories import InMemoryRepository
from lunotes.services.notebook import Notebook
from lunotes.services.notes import NoteStore
from lunotes.services.summarizer import ContentSummarizer

START = datetime(2026, 3, 2, 9, 30, tzinfo=UTC)


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime = START) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def summarizer() -> ContentSummarizer:
    return ContentSummarizer()


@pytest.fixture
def note_store(clock: FakeClock, summarizer: ContentSummarizer) -> NoteStore:
    """Empty NoteStore driven by the fake clock."""
    return NoteStore(summarizer=summarizer, clock=clock)


@pytest.fixture
def repository() -> InMemoryRepository:
    return InMemoryRepository()


@pytest.fixture
def notebook(repository: InMemoryRepository, clock: FakeClock) -> Notebook:
    """Fresh notebook on an empty gateway (default categories installed)."""
    return Notebook(repository, clock=clock)
