"""
SQLAlchemy Base Models

Provides the declarative base and reusable mixins for all ORM models.
"""

from datetime import datetime

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from lunotes.core.clock import utcnow


class Base(DeclarativeBase):
    """Declarative base class for all SQLAlchemy ORM models."""

    pass


class TimestampMixin:
    """
    Mixin that adds created_at and updated_at timestamp fields.

    Behavior:
        - created_at: Set Python-side on INSERT
        - updated_at: Set on INSERT and refreshed on every UPDATE

    Note:
        SQLite has no timezone-aware server clock, so both values are
        produced in Python as UTC.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,  # Automatically set on any UPDATE
        nullable=False,
    )
