"""
Note Schemas

Pydantic models for notes, their derived summaries, and filter state.
Persisted and HTTP field names are camelCase (``createdAt``); Python
attribute names stay snake_case.
"""

import re
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from lunotes.schemas.categories import ALL_CATEGORIES, FALLBACK_CATEGORY_ID, Category

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_tag(raw: str) -> str:
    """Trim, lowercase, and join inner whitespace runs with single hyphens."""
    return _WHITESPACE_RUN.sub("-", raw.strip().lower())


class CamelModel(BaseModel):
    """Base schema that reads and writes camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,  # Older records may carry numeric ids
    )


class Note(CamelModel):
    """
    Single rich-text document with metadata.

    ``category`` and ``tags`` carry defaults so records written before
    those fields existed still load.

    Attributes:
        id: Millisecond-epoch string, assigned at creation.
        title: Derived from content, at most 50 characters.
        content: HTML markup, opaque outside the summarizer.
        created_at: Set once at creation.
        updated_at: Refreshed on every mutation.
        category: Category id, ``general`` when missing.
        tags: Normalized labels in insertion order.
    """

    id: str
    title: str = ""
    content: str = ""
    created_at: datetime
    updated_at: datetime
    category: str = FALLBACK_CATEGORY_ID
    tags: list[str] = Field(default_factory=list)

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        """Naive timestamps from older records are read as UTC."""
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    @field_validator("category", mode="before")
    @classmethod
    def _default_category(cls, value: object) -> object:
        return value or FALLBACK_CATEGORY_ID

    @field_validator("tags", mode="before")
    @classmethod
    def _default_tags(cls, value: object) -> object:
        return value or []

    @field_validator("tags")
    @classmethod
    def _normalize_tags(cls, value: list[str]) -> list[str]:
        """Stored tags are normalized; blanks and repeats are dropped."""
        tags = (normalize_tag(t) for t in value)
        return list(dict.fromkeys(t for t in tags if t))


class NoteSummary(CamelModel):
    """Derived fields computed from a note's markup."""

    title: str
    excerpt: str
    word_count: int = Field(ge=0)


class NoteFilters(CamelModel):
    """
    Filter state driving the visible note list.

    Attributes:
        search_query: Case-insensitive substring, empty matches all.
        selected_category: Category id or ``"all"``.
        selected_tags: Tags a note must all carry (AND semantics).
    """

    search_query: str = ""
    selected_category: str = ALL_CATEGORIES
    selected_tags: list[str] = Field(default_factory=list)


class NoteCard(CamelModel):
    """List-row projection of a note: preview, category chip, first tags."""

    id: str
    title: str
    excerpt: str
    word_count: int
    category: Category | None = None
    tags: list[str] = Field(default_factory=list)
    extra_tag_count: int = 0
    updated_label: str


# ---------------------------------------------------------------------------
# Request bodies
# ---------------------------------------------------------------------------


class NoteCreateRequest(CamelModel):
    """Body for POST /notes."""

    selected_category: str = ALL_CATEGORIES


class ContentUpdate(CamelModel):
    """Body for PUT /notes/{id}/content."""

    content: str


class CategoryAssignment(CamelModel):
    """Body for PUT /notes/{id}/category."""

    category_id: str = Field(..., min_length=1)


class TagRequest(CamelModel):
    """Body for POST /notes/{id}/tags."""

    tag: str
