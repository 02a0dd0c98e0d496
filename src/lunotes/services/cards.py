"""
Note Cards

List-row projections of notes: summary, category chip, the first two
tags with an overflow count, and a relative "last edited" label.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Final

from lunotes.schemas.categories import Category
from lunotes.schemas.notes import Note, NoteCard
from lunotes.services.summarizer import ContentSummarizer

VISIBLE_TAGS: Final[int] = 2

_SECONDS_PER_DAY: Final[int] = 60 * 60 * 24


def format_relative_date(moment: datetime, now: datetime) -> str:
    """
    Human label for ``moment`` seen from ``now``.

    Day difference is the ceiling of the absolute distance in days:
    "Today" (up to 1), "Yesterday" (2), "N days ago" (up to 7),
    otherwise the ISO calendar date.
    """
    days = math.ceil(abs((now - moment).total_seconds()) / _SECONDS_PER_DAY)
    if days <= 1:
        return "Today"
    if days == 2:
        return "Yesterday"
    if days <= 7:
        return f"{days} days ago"
    return moment.date().isoformat()


def build_card(
    note: Note,
    category: Category | None,
    summarizer: ContentSummarizer,
    now: datetime,
) -> NoteCard:
    summary = summarizer.summarize(note.content)
    return NoteCard(
        id=note.id,
        # Stored title, so an empty new note shows as blank until edited
        title=note.title,
        excerpt=summary.excerpt,
        word_count=summary.word_count,
        category=category,
        tags=note.tags[:VISIBLE_TAGS],
        extra_tag_count=max(len(note.tags) - VISIBLE_TAGS, 0),
        updated_label=format_relative_date(note.updated_at, now),
    )
