"""
Persistence Gateway Tests

Verifies the SQLite key-value repository: upsert semantics, missing
keys, corrupt rows, and a full notebook save/load round trip.

Uses a throwaway SQLite file under tmp_path, no external services.
"""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, sessionmaker

from lunotes.core.config import settings
from lunotes.core.database import init_db
from lunotes.core.exceptions import PersistenceError
from lunotes.repositories import InMemoryRepository, KeyValueRepository
from lunotes.services.notebook import Notebook
from tests.conftest import FakeClock

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def session_factory(tmp_path: Path) -> Generator[sessionmaker[Session], None, None]:
    """Session factory bound to a fresh SQLite file with the schema created."""
    engine = create_engine(f"sqlite:///{tmp_path / 'notes.db'}")
    init_db(engine)
    yield sessionmaker(engine, expire_on_commit=False)
    engine.dispose()


@pytest.fixture
def kv_repo(session_factory: sessionmaker[Session]) -> KeyValueRepository:
    return KeyValueRepository(session_factory)


# ---------------------------------------------------------------------------
# Key-value semantics
# ---------------------------------------------------------------------------


class TestKeyValueRepository:
    """Tests for load/save against SQLite."""

    def test_missing_key_loads_none(self, kv_repo: KeyValueRepository) -> None:
        assert kv_repo.load("nothing-here") is None

    def test_save_then_load(self, kv_repo: KeyValueRepository) -> None:
        value = [{"id": "1", "tags": ["b", "a"]}, {"id": "2", "tags": []}]

        kv_repo.save("notes", value)

        assert kv_repo.load("notes") == value

    def test_save_overwrites(self, kv_repo: KeyValueRepository) -> None:
        kv_repo.save("notes", [1, 2, 3])
        kv_repo.save("notes", [4])

        assert kv_repo.load("notes") == [4]

    def test_keys_are_independent(self, kv_repo: KeyValueRepository) -> None:
        kv_repo.save("a", ["x"])
        kv_repo.save("b", ["y"])

        assert kv_repo.load("a") == ["x"]
        assert kv_repo.load("b") == ["y"]

    def test_corrupt_row_raises_persistence_error(
        self,
        kv_repo: KeyValueRepository,
        session_factory: sessionmaker[Session],
    ) -> None:
        with session_factory() as session:
            session.execute(
                text(
                    "INSERT INTO kv_store (key, value, created_at, updated_at) "
                    "VALUES ('broken', '{not json', '2026-01-01 00:00:00', "
                    "'2026-01-01 00:00:00')"
                )
            )
            session.commit()

        with pytest.raises(PersistenceError):
            kv_repo.load("broken")

    def test_missing_table_raises_persistence_error(self, tmp_path: Path) -> None:
        engine = create_engine(f"sqlite:///{tmp_path / 'empty.db'}")
        repo = KeyValueRepository(sessionmaker(engine))

        with pytest.raises(PersistenceError):
            repo.save("notes", [])
        engine.dispose()


class TestInMemoryRepository:
    """The in-memory gateway isolates stored values from callers."""

    def test_values_are_copied(self) -> None:
        repo = InMemoryRepository()
        value = {"tags": ["a"]}
        repo.save("k", value)
        value["tags"].append("b")

        loaded = repo.load("k")
        loaded["tags"].append("c")

        assert repo.load("k") == {"tags": ["a"]}
        assert repo.keys() == ["k"]


# ---------------------------------------------------------------------------
# Notebook round trip
# ---------------------------------------------------------------------------


class TestNotebookOnSQLite:
    """End-to-end save/load through the SQLite gateway."""

    def test_round_trip(self, kv_repo: KeyValueRepository, clock: FakeClock) -> None:
        notebook = Notebook(kv_repo, clock=clock)
        note = notebook.create_note("personal")
        notebook.update_content(note.id, "<h2>Trip</h2><p>Pack boots</p>")
        notebook.add_tag(note.id, "Hiking Gear")
        notebook.add_tag(note.id, "alps")
        clock.advance(days=1)
        notebook.create_note()

        reopened = Notebook(kv_repo, clock=clock)

        assert reopened.list_notes() == notebook.list_notes()
        assert reopened.list_categories() == notebook.list_categories()
        assert reopened.get_note(note.id).tags == ["hiking-gear", "alps"]

    def test_corrupt_notes_fall_back_to_empty(
        self,
        kv_repo: KeyValueRepository,
        session_factory: sessionmaker[Session],
        clock: FakeClock,
    ) -> None:
        with session_factory() as session:
            session.execute(
                text(
                    "INSERT INTO kv_store (key, value, created_at, updated_at) "
                    "VALUES (:key, '[{', '2026-01-01 00:00:00', '2026-01-01 00:00:00')"
                ),
                {"key": settings.NOTES_KEY},
            )
            session.commit()

        notebook = Notebook(kv_repo, clock=clock)

        assert notebook.list_notes() == []
        assert len(notebook.list_categories()) == 5
