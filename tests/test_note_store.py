"""
Note Store Unit Tests

Verifies note creation, content updates, tagging, category assignment,
deletion with selection hand-off, and timestamp monotonicity.

No external services required, runs entirely offline.
"""

from __future__ import annotations

import pytest

from lunotes.schemas.notes import Note
from lunotes.services.notes import NoteStore, normalize_tag
from tests.conftest import START, FakeClock

# ---------------------------------------------------------------------------
# Creation
# ---------------------------------------------------------------------------


class TestCreateNote:
    """Tests for create_note."""

    def test_new_note_in_selected_category(self, note_store: NoteStore) -> None:
        note = note_store.create_note("work")

        assert note.category == "work"
        assert note.tags == []
        assert note.title == ""
        assert note.content == ""
        assert note_store.selected is note

    def test_all_sentinel_files_under_general(self, note_store: NoteStore) -> None:
        assert note_store.create_note("all").category == "general"

    def test_timestamps_start_equal(self, note_store: NoteStore) -> None:
        note = note_store.create_note()

        assert note.created_at == note.updated_at == START

    def test_newest_first(self, note_store: NoteStore) -> None:
        first = note_store.create_note()
        second = note_store.create_note()

        assert [n.id for n in note_store.notes] == [second.id, first.id]

    def test_ids_unique_and_ordered_under_frozen_clock(
        self, note_store: NoteStore
    ) -> None:
        ids = [note_store.create_note().id for _ in range(5)]

        assert len(set(ids)) == 5
        assert [int(i) for i in ids] == sorted(int(i) for i in ids)

    def test_ids_do_not_collide_with_loaded_notes(self, clock: FakeClock) -> None:
        future_id = str(int(START.timestamp() * 1000) + 10)
        loaded = Note(id=future_id, created_at=START, updated_at=START)
        store = NoteStore([loaded], clock=clock)

        assert int(store.create_note().id) > int(future_id)


# ---------------------------------------------------------------------------
# Content updates
# ---------------------------------------------------------------------------


class TestUpdateContent:
    """Tests for update_content."""

    def test_derives_title_and_stamps(
        self, note_store: NoteStore, clock: FakeClock
    ) -> None:
        note = note_store.create_note()
        later = clock.advance(minutes=5)

        updated = note_store.update_content(
            note.id, "<h1>Groceries</h1><p>Milk, eggs</p>"
        )

        assert updated is note
        assert note.title == "Groceries"
        assert note.content == "<h1>Groceries</h1><p>Milk, eggs</p>"
        assert note.updated_at == later
        assert note.created_at == START

    def test_unknown_id_is_noop(self, note_store: NoteStore) -> None:
        note = note_store.create_note()

        assert note_store.update_content("missing", "<p>x</p>") is None
        assert note.content == ""

    def test_selected_projection_follows_update(self, note_store: NoteStore) -> None:
        note = note_store.create_note()
        note_store.update_content(note.id, "<p>Fresh</p>")

        assert note_store.selected is not None
        assert note_store.selected.title == "Fresh"

    def test_updated_at_strictly_increases_under_frozen_clock(
        self, note_store: NoteStore
    ) -> None:
        note = note_store.create_note()
        stamps = [note.updated_at]
        for text in ("a", "b", "c"):
            note_store.update_content(note.id, f"<p>{text}</p>")
            stamps.append(note.updated_at)

        assert stamps == sorted(stamps)
        assert len(set(stamps)) == len(stamps)
        assert note.updated_at >= note.created_at


# ---------------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------------


class TestTags:
    """Tests for tag add/remove and the tag index."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (" Foo  Bar ", "foo-bar"),
            ("Work", "work"),
            ("a\tb\nc", "a-b-c"),
            ("   ", ""),
        ],
    )
    def test_normalize_tag(self, raw: str, expected: str) -> None:
        assert normalize_tag(raw) == expected

    def test_add_normalizes(self, note_store: NoteStore) -> None:
        note = note_store.create_note()
        note_store.add_tag(note.id, " Foo  Bar ")

        assert note.tags == ["foo-bar"]

    def test_add_preserves_insertion_order(self, note_store: NoteStore) -> None:
        note = note_store.create_note()
        for tag in ("zeta", "alpha", "mid"):
            note_store.add_tag(note.id, tag)

        assert note.tags == ["zeta", "alpha", "mid"]

    def test_duplicate_and_blank_are_noops(self, note_store: NoteStore) -> None:
        note = note_store.create_note()
        note_store.add_tag(note.id, "foo")
        stamp = note.updated_at

        note_store.add_tag(note.id, "  FOO ")
        note_store.add_tag(note.id, "   ")

        assert note.tags == ["foo"]
        assert note.updated_at == stamp

    def test_remove_is_idempotent(self, note_store: NoteStore) -> None:
        note = note_store.create_note()
        note_store.add_tag(note.id, "a")
        note_store.add_tag(note.id, "b")

        note_store.remove_tag(note.id, "a")
        once = list(note.tags)
        note_store.remove_tag(note.id, "a")

        assert note.tags == once == ["b"]

    def test_remove_absent_tag_still_stamps(self, note_store: NoteStore) -> None:
        note = note_store.create_note()
        stamp = note.updated_at

        note_store.remove_tag(note.id, "never-there")

        assert note.updated_at > stamp

    def test_all_tags_sorted_and_deduplicated(self, note_store: NoteStore) -> None:
        a = note_store.create_note()
        b = note_store.create_note()
        note_store.add_tag(a.id, "pear")
        note_store.add_tag(a.id, "apple")
        note_store.add_tag(b.id, "apple")
        note_store.add_tag(b.id, "fig")

        assert note_store.all_tags() == ["apple", "fig", "pear"]

    def test_unknown_note_returns_none(self, note_store: NoteStore) -> None:
        assert note_store.add_tag("missing", "x") is None
        assert note_store.remove_tag("missing", "x") is None


# ---------------------------------------------------------------------------
# Category assignment
# ---------------------------------------------------------------------------


class TestAssignCategory:
    """Tests for assign_category and reassign_category."""

    def test_assign_sets_and_stamps(self, note_store: NoteStore) -> None:
        note = note_store.create_note("work")
        stamp = note.updated_at

        note_store.assign_category(note.id, "ideas")

        assert note.category == "ideas"
        assert note.updated_at > stamp

    def test_reassign_moves_only_matching_notes(self, note_store: NoteStore) -> None:
        keep = note_store.create_note("personal")
        move = note_store.create_note("trip")
        keep_stamp = keep.updated_at

        moved = note_store.reassign_category("trip", "general")

        assert moved == [move]
        assert move.category == "general"
        assert keep.category == "personal"
        assert keep.updated_at == keep_stamp

    def test_count_by_category(self, note_store: NoteStore) -> None:
        note_store.create_note("work")
        note_store.create_note("work")
        note_store.create_note("ideas")

        assert note_store.count_by_category() == {"work": 2, "ideas": 1}


# ---------------------------------------------------------------------------
# Deletion and selection
# ---------------------------------------------------------------------------


class TestDeleteNote:
    """Tests for delete_note and selection hand-off."""

    def test_deleting_only_selected_note_clears_selection(
        self, note_store: NoteStore
    ) -> None:
        note = note_store.create_note()

        assert note_store.delete_note(note.id) is True
        assert note_store.selected is None
        assert note_store.notes == []

    def test_selection_moves_to_new_head(self, note_store: NoteStore) -> None:
        oldest = note_store.create_note()
        middle = note_store.create_note()
        newest = note_store.create_note()
        note_store.select(middle.id)

        note_store.delete_note(middle.id)

        assert note_store.selected is newest
        assert [n.id for n in note_store.notes] == [newest.id, oldest.id]

    def test_deleting_other_note_keeps_selection(self, note_store: NoteStore) -> None:
        other = note_store.create_note()
        selected = note_store.create_note()

        note_store.delete_note(other.id)

        assert note_store.selected is selected

    def test_unknown_id(self, note_store: NoteStore) -> None:
        assert note_store.delete_note("missing") is False

    def test_select_and_clear(self, note_store: NoteStore) -> None:
        first = note_store.create_note()
        note_store.create_note()

        assert note_store.select(first.id) is first
        assert note_store.select("missing") is None
        assert note_store.selected is first

        note_store.clear_selection()
        assert note_store.selected is None
