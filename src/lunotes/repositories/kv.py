"""
Key-Value Repository

SQLAlchemy-backed persistence gateway. Each key maps to one row of the
``kv_store`` table whose ``value`` column holds the JSON document.
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from lunotes.core.exceptions import PersistenceError
from lunotes.models import KeyValueRecord
from lunotes.repositories.base import BaseRepository, JSONValue

logger = logging.getLogger(__name__)


class KeyValueRepository(BaseRepository):
    """
    Repository for JSON documents keyed by name.

    Opens a short-lived session per call; there is no long-running
    transaction to keep consistent across operations.

    Usage::

        repo = KeyValueRepository(get_session_factory())
        repo.save("lunotes-data", [...])
        repo.load("lunotes-data")

    Args:
        session_factory: Configured ``sessionmaker`` bound to an engine
            whose schema has been created (see ``core.database.init_db``).

    Raises:
        PersistenceError: From ``load`` and ``save`` when the database
            fails or holds a value that is not valid JSON.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def load(self, key: str) -> JSONValue | None:
        try:
            with self._session_factory() as session:
                record = session.execute(
                    select(KeyValueRecord).where(KeyValueRecord.key == key)
                ).scalar_one_or_none()
                if record is None:
                    logger.debug("No record stored under '%s'", key)
                    return None
                return record.value
        except (SQLAlchemyError, ValueError) as e:
            # ValueError: JSON column holds text that does not decode
            raise PersistenceError(f"Could not load '{key}': {e}") from e

    def save(self, key: str, value: JSONValue) -> None:
        try:
            with self._session_factory() as session:
                record = session.get(KeyValueRecord, key)
                if record is None:
                    session.add(KeyValueRecord(key=key, value=value))
                else:
                    # Reassign so the JSON column is flagged dirty
                    record.value = value
                session.commit()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not save '{key}': {e}") from e
        logger.debug("Saved record '%s'", key)
