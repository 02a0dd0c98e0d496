"""
Markup Scanning Service

Structural scan of a note's HTML body: first heading, first paragraph,
and a plain-text rendering. The summarizer depends on the
``MarkupScanner`` protocol only, so tests can inject a fake and another
parser can be swapped in without touching title or excerpt rules.

The default implementation uses BeautifulSoup with the stdlib
``html.parser`` backend, which tolerates unclosed and stray tags.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Protocol

from bs4 import BeautifulSoup


HEADING_TAGS: Final[tuple[str, ...]] = ("h1", "h2", "h3")

# Elements whose boundaries separate words in the rendered text
BLOCK_TAGS: Final[tuple[str, ...]] = (
    "address",
    "article",
    "blockquote",
    "div",
    "dd",
    "dl",
    "dt",
    "footer",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "header",
    "hr",
    "li",
    "ol",
    "p",
    "pre",
    "section",
    "table",
    "td",
    "th",
    "tr",
    "ul",
)


@dataclass(frozen=True)
class MarkupScan:
    """
    Result of scanning one markup string.

    Attributes:
        first_heading: Trimmed text of the first h1-h3 in document order,
            or None when there is no such element.
        first_paragraph: Trimmed text of the first ``<p>``, or None.
        plain_text: Whitespace-collapsed text of the whole document.
        text_without_heading: Same rendering with the first heading removed.
    """

    first_heading: str | None
    first_paragraph: str | None
    plain_text: str
    text_without_heading: str


class MarkupScanner(Protocol):
    """Capability consumed by the content summarizer."""

    def scan(self, markup: str) -> MarkupScan: ...


def _render(soup: BeautifulSoup) -> str:
    return " ".join(soup.get_text().split())


class SoupMarkupScanner:
    """BeautifulSoup-backed ``MarkupScanner``."""

    def __init__(self, features: str = "html.parser") -> None:
        self._features = features

    def scan(self, markup: str) -> MarkupScan:
        if not markup:
            return MarkupScan(None, None, "", "")

        soup = BeautifulSoup(markup, self._features)

        heading = soup.find(list(HEADING_TAGS))
        paragraph = soup.find("p")
        heading_text = heading.get_text().strip() if heading is not None else None
        paragraph_text = paragraph.get_text().strip() if paragraph is not None else None

        # Keep adjacent blocks from fusing into one word ("<p>a</p><p>b</p>")
        for br in soup.find_all("br"):
            br.replace_with(" ")
        for block in soup.find_all(list(BLOCK_TAGS)):
            block.insert_before(" ")
            block.insert_after(" ")

        plain_text = _render(soup)
        if heading is not None:
            heading.decompose()
            text_without_heading = _render(soup)
        else:
            text_without_heading = plain_text

        return MarkupScan(
            first_heading=heading_text,
            first_paragraph=paragraph_text,
            plain_text=plain_text,
            text_without_heading=text_without_heading,
        )
