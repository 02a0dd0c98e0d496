"""
Content Summarizer

Derives title, list excerpt, and word count from a note's markup.

Rules:
    - Title: first h1-h3 text, else first paragraph text, else "New Note";
      hard-truncated to 50 characters.
    - Excerpt: plain text with the first heading dropped when that heading
      *is* the title; 120 characters plus "..." when longer.
    - Word count: whitespace-separated tokens of the plain text.
"""

from __future__ import annotations

from typing import Final

from lunotes.schemas.notes import NoteSummary
from lunotes.services.markup import MarkupScanner, SoupMarkupScanner

DEFAULT_TITLE: Final[str] = "New Note"
MAX_TITLE_LENGTH: Final[int] = 50
MAX_EXCERPT_LENGTH: Final[int] = 120
ELLIPSIS: Final[str] = "..."


class ContentSummarizer:
    """
    Computes ``NoteSummary`` values from markup.

    Stateless apart from the injected scanner; never mutates its input
    and never raises on malformed markup.

    Usage::

        summarizer = ContentSummarizer()
        summary = summarizer.summarize("<h1>Groceries</h1><p>Milk</p>")
        summary.title  # "Groceries"

    Args:
        scanner: Markup capability, defaults to BeautifulSoup.
    """

    def __init__(self, scanner: MarkupScanner | None = None) -> None:
        self._scanner = scanner or SoupMarkupScanner()

    def summarize(self, markup: str) -> NoteSummary:
        scan = self._scanner.scan(markup)

        if scan.first_heading:
            title = scan.first_heading
        elif scan.first_paragraph:
            title = scan.first_paragraph
        else:
            title = DEFAULT_TITLE
        title = title[:MAX_TITLE_LENGTH]

        if scan.first_heading is not None and scan.first_heading == title:
            text = scan.text_without_heading
        else:
            text = scan.plain_text

        return NoteSummary(
            title=title,
            excerpt=make_excerpt(text),
            word_count=count_words(scan.plain_text),
        )


def make_excerpt(text: str, limit: int = MAX_EXCERPT_LENGTH) -> str:
    """Trim ``text`` and cut it to ``limit`` characters, marking the cut."""
    text = text.strip()
    if len(text) > limit:
        return text[:limit] + ELLIPSIS
    return text


def count_words(text: str) -> int:
    return len(text.split())
