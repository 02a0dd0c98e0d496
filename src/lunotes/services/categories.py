"""
Category Store

Owns the ordered category collection. Guarantees the fallback category
exists, reassigns orphaned notes on delete, and refuses to delete the
five built-in categories unless constructed with
``protect_defaults=False``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Final

from lunotes.core.clock import IdGenerator
from lunotes.core.exceptions import ProtectedCategoryError
from lunotes.schemas.categories import (
    FALLBACK_CATEGORY_ID,
    Category,
    CategoryInput,
    CategoryStats,
)
from lunotes.services.notes import NoteStore

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES: Final[tuple[Category, ...]] = (
    Category(id="general", name="General", color="#6B7280", icon="FileText"),
    Category(id="work", name="Work", color="#3B82F6", icon="Briefcase"),
    Category(id="personal", name="Personal", color="#10B981", icon="User"),
    Category(id="ideas", name="Ideas", color="#F59E0B", icon="Lightbulb"),
    Category(id="todo", name="To-Do", color="#EF4444", icon="CheckSquare"),
)

PROTECTED_CATEGORY_IDS: Final[frozenset[str]] = frozenset(
    c.id for c in DEFAULT_CATEGORIES
)


def default_categories() -> list[Category]:
    """Fresh copies of the built-in categories, in display order."""
    return [c.model_copy() for c in DEFAULT_CATEGORIES]


def is_protected(category_id: str) -> bool:
    return category_id in PROTECTED_CATEGORY_IDS


class CategoryStore:
    """
    In-memory category collection.

    Usage::

        store = CategoryStore(default_categories(), note_store)
        work2 = store.create_or_update(CategoryInput(name="Side project"))
        store.delete_category(work2.id)  # notes move to "general"

    Args:
        categories: Initial collection; the fallback category is
            re-inserted at the head if missing.
        note_store: Notes to reassign when a category is deleted.
        id_generator: Source of new category ids.
        protect_defaults: Reject deletion of the built-in categories.
    """

    def __init__(
        self,
        categories: Iterable[Category],
        note_store: NoteStore,
        *,
        id_generator: IdGenerator | None = None,
        protect_defaults: bool = True,
    ) -> None:
        self._categories: list[Category] = list(categories)
        self._note_store = note_store
        self._new_id = id_generator or IdGenerator()
        self._new_id.observe(c.id for c in self._categories)
        self._protect_defaults = protect_defaults

        if self.lookup(FALLBACK_CATEGORY_ID) is None:
            logger.warning("Fallback category missing, restoring '%s'", FALLBACK_CATEGORY_ID)
            self._categories.insert(0, DEFAULT_CATEGORIES[0].model_copy())

    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------

    @property
    def categories(self) -> list[Category]:
        return list(self._categories)

    def lookup(self, category_id: str) -> Category | None:
        return next((c for c in self._categories if c.id == category_id), None)

    def is_protected(self, category_id: str) -> bool:
        return self._protect_defaults and is_protected(category_id)

    def stats(self) -> list[CategoryStats]:
        """Each category with its note count, in display order."""
        counts = self._note_store.count_by_category()
        return [
            CategoryStats(
                category=c,
                note_count=counts.get(c.id, 0),
                is_protected=self.is_protected(c.id),
            )
            for c in self._categories
        ]

    # ------------------------------------------------------------------
    # Write operations
    # ------------------------------------------------------------------

    def create_or_update(
        self,
        data: CategoryInput,
        editing_id: str | None = None,
    ) -> Category | None:
        """
        Create a category, or merge ``data`` into an existing one.

        Args:
            data: Editor payload; the name is trimmed before storing.
            editing_id: Id of the category being edited, None to create.

        Returns:
            The created or updated category, or None when the name is
            blank or ``editing_id`` is unknown.
        """
        name = data.name.strip()
        if not name:
            logger.debug("Ignoring category with blank name")
            return None

        if editing_id is not None:
            category = self.lookup(editing_id)
            if category is None:
                logger.debug("create_or_update: unknown category %s", editing_id)
                return None
            category.name = name
            category.color = data.color
            category.icon = data.icon
            logger.info("Updated category %s", editing_id)
            return category

        category = Category(id=self._new_id(), name=name, color=data.color, icon=data.icon)
        self._categories.append(category)
        logger.info("Created category %s ('%s')", category.id, name)
        return category

    def delete_category(self, category_id: str) -> bool:
        """
        Delete a category, moving its notes to the fallback category.

        Returns:
            True if the category existed and was removed.

        Raises:
            ProtectedCategoryError: For a built-in category while
                protection is enabled.
        """
        if self.is_protected(category_id):
            raise ProtectedCategoryError(category_id)
        category = self.lookup(category_id)
        if category is None:
            logger.debug("delete_category: unknown category %s", category_id)
            return False
        if category_id == FALLBACK_CATEGORY_ID:
            # The fallback category must always exist
            raise ProtectedCategoryError(category_id)

        self._note_store.reassign_category(category_id, FALLBACK_CATEGORY_ID)
        self._categories.remove(category)
        logger.info("Deleted category %s", category_id)
        return True
