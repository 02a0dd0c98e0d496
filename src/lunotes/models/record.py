"""
Key-Value Record Model

One row per persisted collection. The ``value`` column holds the
JSON-shaped collection exactly as the stores serialize it, so the
storage layer never needs to know what a note or category looks like.
"""

from typing import Any

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from lunotes.models.base import Base, TimestampMixin


class KeyValueRecord(Base, TimestampMixin):
    """
    Durable key-value entry.

    Attributes:
        key: Storage key (e.g. ``lunotes-data``), primary key.
        value: JSON document stored under the key.
    """

    __tablename__ = "kv_store"

    key: Mapped[str] = mapped_column(String(200), primary_key=True)
    value: Mapped[Any] = mapped_column(JSON, nullable=False)

    def __repr__(self) -> str:
        return f"<KeyValueRecord(key='{self.key}')>"
