"""
Icon and Color Registry

Symbolic glyph names a category may carry, plus the color swatches the
category editor offers. Glyphs are rendered by the presentation layer;
this module only decides which names are valid.
"""

from __future__ import annotations

from typing import Final

DEFAULT_ICON: Final[str] = "FileText"
DEFAULT_COLOR: Final[str] = "#3B82F6"

ICON_OPTIONS: Final[tuple[str, ...]] = (
    "FileText",
    "Briefcase",
    "User",
    "Lightbulb",
    "CheckSquare",
    "BookOpen",
    "Target",
    "Laptop",
    "Home",
    "Palette",
    "Heart",
    "Star",
    "Coffee",
    "Music",
    "Camera",
    "Gamepad2",
    "Plane",
    "Car",
    "ShoppingBag",
    "Utensils",
)

COLOR_PALETTE: Final[tuple[str, ...]] = (
    "#3B82F6",
    "#10B981",
    "#F59E0B",
    "#EF4444",
    "#8B5CF6",
    "#06B6D4",
    "#84CC16",
    "#F97316",
)

_KNOWN_ICONS: Final[frozenset[str]] = frozenset(ICON_OPTIONS)


def resolve_icon(name: str | None) -> str:
    """Return ``name`` if it is a registered glyph, else ``DEFAULT_ICON``."""
    if name in _KNOWN_ICONS:
        return name  # type: ignore[return-value]
    return DEFAULT_ICON
