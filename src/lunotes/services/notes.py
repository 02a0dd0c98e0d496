"""
Note Store

Owns the ordered note collection and the current selection. Every
mutation refreshes derived fields and stamps ``updated_at`` on the note
it touches; requests against unknown ids are silent no-ops that return
None.

Ordering: newest-created first (creation prepends).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import timedelta

from lunotes.core.clock import Clock, IdGenerator, utcnow
from lunotes.schemas.categories import ALL_CATEGORIES, FALLBACK_CATEGORY_ID
from lunotes.schemas.notes import Note, normalize_tag
from lunotes.services.summarizer import ContentSummarizer

logger = logging.getLogger(__name__)

# Smallest step used to keep updated_at strictly increasing
_TICK = timedelta(microseconds=1)


class NoteStore:
    """
    In-memory note collection with selection tracking.

    The selected note is held by id and resolved against the collection,
    so the selected projection is always the stored object itself and
    cannot drift from it.

    Args:
        notes: Initial collection in display order.
        summarizer: Derives titles when content changes.
        clock: Source of timestamps.
        id_generator: Source of note ids; seeded with the loaded ids.
    """

    def __init__(
        self,
        notes: Iterable[Note] = (),
        *,
        summarizer: ContentSummarizer | None = None,
        clock: Clock = utcnow,
        id_generator: IdGenerator | None = None,
    ) -> None:
        self._notes: list[Note] = list(notes)
        self._summarizer = summarizer or ContentSummarizer()
        self._clock = clock
        self._new_id = id_generator or IdGenerator(clock)
        self._new_id.observe(note.id for note in self._notes)
        self._selected_id: str | None = None

    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------

    @property
    def notes(self) -> list[Note]:
        """Snapshot of the collection in display order."""
        return list(self._notes)

    @property
    def selected(self) -> Note | None:
        if self._selected_id is None:
            return None
        return self.get(self._selected_id)

    def get(self, note_id: str) -> Note | None:
        return next((n for n in self._notes if n.id == note_id), None)

    def all_tags(self) -> list[str]:
        """Every tag used by any note, deduplicated and sorted."""
        return sorted({tag for note in self._notes for tag in note.tags})

    def count_by_category(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for note in self._notes:
            counts[note.category] = counts.get(note.category, 0) + 1
        return counts

    # ------------------------------------------------------------------
    # Write operations
    # ------------------------------------------------------------------

    def create_note(self, selected_category: str = ALL_CATEGORIES) -> Note:
        """
        Create an empty note at the head of the list and select it.

        Args:
            selected_category: Current category filter. The ``"all"``
                sentinel files the note under the fallback category.
        """
        now = self._clock()
        category = (
            FALLBACK_CATEGORY_ID
            if selected_category == ALL_CATEGORIES
            else selected_category
        )
        note = Note(
            id=self._new_id(),
            title="",
            content="",
            created_at=now,
            updated_at=now,
            category=category,
            tags=[],
        )
        self._notes.insert(0, note)
        self._selected_id = note.id
        logger.info("Created note %s in '%s'", note.id, category)
        return note

    def update_content(self, note_id: str, content: str) -> Note | None:
        note = self.get(note_id)
        if note is None:
            logger.debug("update_content: unknown note %s", note_id)
            return None
        summary = self._summarizer.summarize(content)
        note.content = content
        note.title = summary.title
        self._touch(note)
        return note

    def delete_note(self, note_id: str) -> bool:
        """
        Remove a note.

        If it was selected, selection moves to the new head of the list,
        or to nothing when the list is now empty.
        """
        note = self.get(note_id)
        if note is None:
            logger.debug("delete_note: unknown note %s", note_id)
            return False
        self._notes.remove(note)
        if self._selected_id == note_id:
            self._selected_id = self._notes[0].id if self._notes else None
        logger.info("Deleted note %s", note_id)
        return True

    def select(self, note_id: str) -> Note | None:
        note = self.get(note_id)
        if note is not None:
            self._selected_id = note.id
        return note

    def clear_selection(self) -> None:
        self._selected_id = None

    def assign_category(self, note_id: str, category_id: str) -> Note | None:
        note = self.get(note_id)
        if note is None:
            logger.debug("assign_category: unknown note %s", note_id)
            return None
        note.category = category_id
        self._touch(note)
        return note

    def add_tag(self, note_id: str, raw_tag: str) -> Note | None:
        """
        Attach a normalized tag.

        Blank or already-present tags leave the note (and its
        ``updated_at``) untouched.
        """
        note = self.get(note_id)
        if note is None:
            logger.debug("add_tag: unknown note %s", note_id)
            return None
        tag = normalize_tag(raw_tag)
        if not tag or tag in note.tags:
            return note
        note.tags = [*note.tags, tag]
        self._touch(note)
        return note

    def remove_tag(self, note_id: str, tag: str) -> Note | None:
        """Drop an exact tag match; ``updated_at`` moves even if it was absent."""
        note = self.get(note_id)
        if note is None:
            logger.debug("remove_tag: unknown note %s", note_id)
            return None
        note.tags = [t for t in note.tags if t != tag]
        self._touch(note)
        return note

    def reassign_category(self, old_id: str, new_id: str) -> list[Note]:
        """Move every note filed under ``old_id`` to ``new_id``."""
        moved = [note for note in self._notes if note.category == old_id]
        for note in moved:
            note.category = new_id
            self._touch(note)
        if moved:
            logger.info(
                "Moved %d notes from '%s' to '%s'", len(moved), old_id, new_id
            )
        return moved

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _touch(self, note: Note) -> None:
        now = self._clock()
        if now <= note.updated_at:
            now = note.updated_at + _TICK
        note.updated_at = now
