"""Models package - re-exports all models for convenient imports."""

from lunotes.models.base import Base, TimestampMixin
from lunotes.models.record import KeyValueRecord

__all__ = [
    "Base",
    "TimestampMixin",
    "KeyValueRecord",
]
