"""
Category Schemas

Pydantic models for categories and the category editor input.
"""

from typing import Final

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from lunotes.services.icons import DEFAULT_COLOR, DEFAULT_ICON, resolve_icon

# Reassignment target for orphaned notes; always present
FALLBACK_CATEGORY_ID: Final[str] = "general"

# Filter value meaning "no category restriction"
ALL_CATEGORIES: Final[str] = "all"


class Category(BaseModel):
    """
    Named, colored grouping bucket for notes.

    Attributes:
        id: Opaque unique identifier.
        name: Display name (non-empty).
        color: CSS color string, stored verbatim.
        icon: Glyph name; unknown names resolve to ``DEFAULT_ICON``.
    """

    id: str
    name: str = Field(min_length=1)
    color: str = DEFAULT_COLOR
    icon: str = DEFAULT_ICON

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("icon", mode="before")
    @classmethod
    def _resolve_icon(cls, value: object) -> str:
        return resolve_icon(value if isinstance(value, str) else None)


class CategoryInput(BaseModel):
    """
    Editor payload for creating or updating a category.

    The name is not length-validated here: a blank name is a silent
    no-op in the store rather than a validation error.
    """

    name: str = ""
    color: str = DEFAULT_COLOR
    icon: str = DEFAULT_ICON

    @field_validator("icon", mode="before")
    @classmethod
    def _resolve_icon(cls, value: object) -> str:
        return resolve_icon(value if isinstance(value, str) else None)


class CategoryStats(BaseModel):
    """Category together with the number of notes filed under it."""

    category: Category
    note_count: int = Field(ge=0)
    is_protected: bool = False

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
