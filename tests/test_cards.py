"""
Note Card Unit Tests

Verifies the list-row projection and relative date labels.

No external services required, runs entirely offline.
"""

from __future__ import annotations

from datetime import timedelta

import pytest

from lunotes.schemas.categories import Category
from lunotes.schemas.notes import Note
from lunotes.services.cards import build_card, format_relative_date
from lunotes.services.summarizer import ContentSummarizer
from tests.conftest import START


class TestRelativeDate:
    """Tests for format_relative_date."""

    @pytest.mark.parametrize(
        ("delta", "expected"),
        [
            (timedelta(0), "Today"),
            (timedelta(hours=5), "Today"),
            (timedelta(hours=24), "Today"),
            (timedelta(hours=30), "Yesterday"),
            (timedelta(days=2), "Yesterday"),
            (timedelta(days=2, minutes=1), "3 days ago"),
            (timedelta(days=7), "7 days ago"),
        ],
    )
    def test_labels(self, delta: timedelta, expected: str) -> None:
        assert format_relative_date(START - delta, START) == expected

    def test_older_dates_use_calendar_date(self) -> None:
        assert format_relative_date(START - timedelta(days=30), START) == "2026-01-31"


class TestBuildCard:
    """Tests for build_card."""

    def test_tag_overflow_and_category(self, summarizer: ContentSummarizer) -> None:
        note = Note(
            id="1",
            title="Trip",
            content="<h1>Trip</h1><p>Pack boots and rope</p>",
            created_at=START,
            updated_at=START,
            category="travel",
            tags=["alps", "gear", "summer", "budget"],
        )
        category = Category(id="travel", name="Travel", icon="Plane")

        card = build_card(note, category, summarizer, START)

        assert card.excerpt == "Pack boots and rope"
        assert card.word_count == 5
        assert card.tags == ["alps", "gear"]
        assert card.extra_tag_count == 2
        assert card.category == category
        assert card.updated_label == "Today"

    def test_empty_note_keeps_blank_title(self, summarizer: ContentSummarizer) -> None:
        note = Note(id="2", created_at=START, updated_at=START, category="gone")

        card = build_card(note, None, summarizer, START)

        assert card.title == ""
        assert card.excerpt == ""
        assert card.word_count == 0
        assert card.category is None
