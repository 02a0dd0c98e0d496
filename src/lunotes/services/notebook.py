"""
Notebook Service

The single store object the presentation layer talks to. Composes the
note and category stores with filter state, loads both collections
through a persistence gateway, and writes the affected collection back
after every mutation.

Design:
    - One re-entrant lock serializes every public operation.
    - Saves are fire-and-forget: a failing gateway is logged and the
      in-memory state stays authoritative until the next successful save.
    - Derived views (query results, cards) are recomputed on each call.
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from pydantic import ValidationError

from lunotes.core.clock import Clock, IdGenerator, utcnow
from lunotes.core.config import settings
from lunotes.core.exceptions import PersistenceError
from lunotes.repositories.base import BaseRepository
from lunotes.schemas.categories import (
    ALL_CATEGORIES,
    FALLBACK_CATEGORY_ID,
    Category,
    CategoryInput,
    CategoryStats,
)
from lunotes.schemas.notes import Note, NoteCard, NoteFilters
from lunotes.services.cards import build_card
from lunotes.services.categories import CategoryStore, default_categories
from lunotes.services.notes import NoteStore, normalize_tag
from lunotes.services.query import query_notes
from lunotes.services.summarizer import ContentSummarizer

logger = logging.getLogger(__name__)


class Notebook:
    """
    Notes, categories, selection, and filters behind one lock.

    Construction loads both collections. A missing or unreadable
    categories record installs the built-in categories and saves them
    at once.

    Usage::

        notebook = Notebook(KeyValueRepository(get_session_factory()))
        note = notebook.create_note("work")
        notebook.update_content(note.id, "<h1>Plan</h1><p>Ship it</p>")
        notebook.query_notes(NoteFilters(search_query="ship"))

    Args:
        repository: Persistence gateway.
        notes_key: Storage key of the notes record.
        categories_key: Storage key of the categories record.
        summarizer: Markup summarizer shared by the stores and cards.
        clock: Source of timestamps and ids.
        protect_defaults: Reject deletion of built-in categories.
    """

    def __init__(
        self,
        repository: BaseRepository,
        *,
        notes_key: str = settings.NOTES_KEY,
        categories_key: str = settings.CATEGORIES_KEY,
        summarizer: ContentSummarizer | None = None,
        clock: Clock = utcnow,
        protect_defaults: bool = True,
    ) -> None:
        self._repository = repository
        self._notes_key = notes_key
        self._categories_key = categories_key
        self._summarizer = summarizer or ContentSummarizer()
        self._clock = clock
        self._lock = threading.RLock()
        self._filters = NoteFilters()

        id_generator = IdGenerator(clock)
        self._notes = NoteStore(
            self._load_notes(),
            summarizer=self._summarizer,
            clock=clock,
            id_generator=id_generator,
        )

        categories = self._load_categories()
        seeded = categories is None
        self._categories = CategoryStore(
            default_categories() if seeded else categories,
            self._notes,
            id_generator=id_generator,
            protect_defaults=protect_defaults,
        )
        if seeded:
            logger.info("Installed default categories")
            self._save_categories()

        orphaned = sorted(
            {n.category for n in self._notes.notes if self._categories.lookup(n.category) is None}
        )
        if orphaned:
            for category_id in orphaned:
                self._notes.reassign_category(category_id, FALLBACK_CATEGORY_ID)
            logger.warning("Refiled notes from unknown categories %s", orphaned)
            self._save_notes()

    # ------------------------------------------------------------------
    # Notes
    # ------------------------------------------------------------------

    def create_note(self, selected_category: str | None = None) -> Note:
        """
        Create an empty note and select it.

        Args:
            selected_category: Category filter in effect; defaults to the
                notebook's own filter. Unknown ids fall back to
                ``general``.
        """
        with self._lock:
            category = (
                self._filters.selected_category
                if selected_category is None
                else selected_category
            )
            if category != ALL_CATEGORIES and self._categories.lookup(category) is None:
                category = FALLBACK_CATEGORY_ID
            note = self._notes.create_note(category)
            self._save_notes()
            return note

    def update_content(self, note_id: str, content: str) -> Note | None:
        with self._lock:
            note = self._notes.update_content(note_id, content)
            if note is not None:
                self._save_notes()
            return note

    def delete_note(self, note_id: str) -> bool:
        with self._lock:
            deleted = self._notes.delete_note(note_id)
            if deleted:
                self._save_notes()
            return deleted

    def select_note(self, note_id: str) -> Note | None:
        with self._lock:
            return self._notes.select(note_id)

    def clear_selection(self) -> None:
        with self._lock:
            self._notes.clear_selection()

    @property
    def selected_note(self) -> Note | None:
        with self._lock:
            return self._notes.selected

    def assign_category(self, note_id: str, category_id: str) -> Note | None:
        """Refile a note; unknown category ids are ignored."""
        with self._lock:
            if self._categories.lookup(category_id) is None:
                logger.debug("assign_category: unknown category %s", category_id)
                return None
            note = self._notes.assign_category(note_id, category_id)
            if note is not None:
                self._save_notes()
            return note

    def add_tag(self, note_id: str, raw_tag: str) -> Note | None:
        with self._lock:
            before = self._notes.get(note_id)
            stamp = before.updated_at if before is not None else None
            note = self._notes.add_tag(note_id, raw_tag)
            if note is not None and note.updated_at != stamp:
                self._save_notes()
            return note

    def remove_tag(self, note_id: str, tag: str) -> Note | None:
        with self._lock:
            note = self._notes.remove_tag(note_id, tag)
            if note is not None:
                self._save_notes()
            return note

    def all_tags(self) -> list[str]:
        with self._lock:
            return self._notes.all_tags()

    def get_note(self, note_id: str) -> Note | None:
        with self._lock:
            return self._notes.get(note_id)

    def list_notes(self) -> list[Note]:
        with self._lock:
            return self._notes.notes

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    def create_or_update_category(
        self,
        data: CategoryInput,
        editing_id: str | None = None,
    ) -> Category | None:
        with self._lock:
            category = self._categories.create_or_update(data, editing_id)
            if category is not None:
                self._save_categories()
            return category

    def delete_category(self, category_id: str) -> bool:
        """
        Delete a category, refiling its notes under ``general``.

        Resets the category filter to ``"all"`` if it pointed at the
        deleted category.

        Raises:
            ProtectedCategoryError: For built-in categories.
        """
        with self._lock:
            if not self._categories.delete_category(category_id):
                return False
            if self._filters.selected_category == category_id:
                self._filters.selected_category = ALL_CATEGORIES
            self._save_notes()
            self._save_categories()
            return True

    def get_category(self, category_id: str) -> Category | None:
        with self._lock:
            return self._categories.lookup(category_id)

    def list_categories(self) -> list[Category]:
        with self._lock:
            return self._categories.categories

    def category_stats(self) -> list[CategoryStats]:
        with self._lock:
            return self._categories.stats()

    def is_protected(self, category_id: str) -> bool:
        return self._categories.is_protected(category_id)

    # ------------------------------------------------------------------
    # Filters and derived views
    # ------------------------------------------------------------------

    @property
    def filters(self) -> NoteFilters:
        """Copy of the current filter state."""
        with self._lock:
            return self._filters.model_copy(deep=True)

    def set_search_query(self, query: str) -> None:
        with self._lock:
            self._filters.search_query = query

    def set_selected_category(self, category_id: str) -> bool:
        with self._lock:
            if category_id != ALL_CATEGORIES and self._categories.lookup(category_id) is None:
                return False
            self._filters.selected_category = category_id
            return True

    def toggle_tag(self, tag: str) -> list[str]:
        """Add ``tag`` to the tag filter, or remove it if already there."""
        with self._lock:
            tag = normalize_tag(tag)
            selected = self._filters.selected_tags
            if tag in selected:
                self._filters.selected_tags = [t for t in selected if t != tag]
            elif tag:
                self._filters.selected_tags = [*selected, tag]
            return list(self._filters.selected_tags)

    def clear_tag_filter(self) -> None:
        with self._lock:
            self._filters.selected_tags = []

    def query_notes(self, filters: NoteFilters | None = None) -> list[Note]:
        """Notes matching ``filters`` (default: the notebook's own)."""
        with self._lock:
            return query_notes(self._notes.notes, filters or self._filters)

    def visible_notes(self) -> list[Note]:
        return self.query_notes()

    def note_cards(self, filters: NoteFilters | None = None) -> list[NoteCard]:
        with self._lock:
            now = self._clock()
            return [
                build_card(
                    note,
                    self._categories.lookup(note.category),
                    self._summarizer,
                    now,
                )
                for note in query_notes(self._notes.notes, filters or self._filters)
            ]

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _load_notes(self) -> list[Note]:
        raw = self._load(self._notes_key)
        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.warning("Ignoring notes record of type %s", type(raw).__name__)
            return []

        notes: list[Note] = []
        for item in raw:
            try:
                notes.append(Note.model_validate(item))
            except ValidationError as e:
                logger.warning("Skipping malformed note record: %s", e.errors()[:1])
        return notes

    def _load_categories(self) -> list[Category] | None:
        """Loaded categories, or None when the defaults should be installed."""
        raw = self._load(self._categories_key)
        if not isinstance(raw, list) or not raw:
            if raw is not None:
                logger.warning("Ignoring unusable categories record")
            return None

        categories: list[Category] = []
        for item in raw:
            try:
                categories.append(Category.model_validate(item))
            except ValidationError as e:
                logger.warning("Skipping malformed category record: %s", e.errors()[:1])
        return categories or None

    def _load(self, key: str) -> Any:
        try:
            return self._repository.load(key)
        except PersistenceError as e:
            logger.warning("Starting without '%s': %s", key, e)
            return None

    def _save_notes(self) -> None:
        self._save(
            self._notes_key,
            [n.model_dump(mode="json", by_alias=True) for n in self._notes.notes],
        )

    def _save_categories(self) -> None:
        self._save(
            self._categories_key,
            [c.model_dump(mode="json", by_alias=True) for c in self._categories.categories],
        )

    def _save(self, key: str, value: Any) -> None:
        try:
            self._repository.save(key, value)
        except PersistenceError as e:
            logger.warning("Save of '%s' failed, keeping in-memory state: %s", key, e)
