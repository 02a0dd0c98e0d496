"""
Query Engine

Pure filtering of the note collection against ``NoteFilters``. Holds no
state; callers recompute the visible list after every change.
"""

from __future__ import annotations

from collections.abc import Iterable

from lunotes.schemas.categories import ALL_CATEGORIES
from lunotes.schemas.notes import Note, NoteFilters


def matches_search(note: Note, query: str) -> bool:
    """Case-insensitive substring match on title, content, or any tag."""
    if query == "":
        return True
    needle = query.lower()
    return (
        needle in note.title.lower()
        or needle in note.content.lower()
        or any(needle in tag.lower() for tag in note.tags)
    )


def matches_category(note: Note, category_id: str) -> bool:
    return category_id == ALL_CATEGORIES or note.category == category_id


def matches_tags(note: Note, tags: Iterable[str]) -> bool:
    """True when the note carries every one of ``tags`` (AND semantics)."""
    return all(tag in note.tags for tag in tags)


def query_notes(notes: Iterable[Note], filters: NoteFilters) -> list[Note]:
    """
    Notes satisfying the search, category, and tag predicates.

    Args:
        notes: Collection in display order.
        filters: Current filter state.

    Returns:
        Matching notes, in the order they were given.
    """
    return [
        note
        for note in notes
        if matches_search(note, filters.search_query)
        and matches_category(note, filters.selected_category)
        and matches_tags(note, filters.selected_tags)
    ]
