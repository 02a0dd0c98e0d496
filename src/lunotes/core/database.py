"""
Database Layer

SQLite setup for the local persistence gateway.

Design:
    - Lazy initialization: engine created on first use, not at import.
    - get_session_factory: returns a reusable session maker.
    - init_db: creates the key-value table if it does not exist yet.
"""

from __future__ import annotations

import logging

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from lunotes.core.config import settings
from lunotes.models.base import Base

logger = logging.getLogger(__name__)

# Module-level singletons (lazy)
_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def get_engine() -> Engine:
    """Get or create the SQLAlchemy engine (singleton)."""
    global _engine  # noqa: PLW0603
    if _engine is None:
        settings.DATA_DIR.mkdir(parents=True, exist_ok=True)
        _engine = create_engine(
            settings.DATABASE_URL,
            echo=False,
            # Handlers run in FastAPI's worker threads
            connect_args={"check_same_thread": False},
        )
        logger.info("Database engine created: %s", settings.DATABASE_PATH)
    return _engine


def get_session_factory() -> sessionmaker[Session]:
    """Get or create the session factory (singleton)."""
    global _session_factory  # noqa: PLW0603
    if _session_factory is None:
        _session_factory = sessionmaker(get_engine(), expire_on_commit=False)
    return _session_factory


def init_db(engine: Engine | None = None) -> None:
    """Create all tables registered on the declarative base."""
    Base.metadata.create_all(engine or get_engine())


def dispose_engine() -> None:
    """Dispose the engine at application shutdown."""
    global _engine, _session_factory  # noqa: PLW0603
    if _engine is not None:
        _engine.dispose()
        _engine = None
        _session_factory = None
        logger.info("Database engine disposed")


# Re-export Base for callers that build their own engine
__all__ = ["Base", "get_engine", "get_session_factory", "init_db", "dispose_engine"]
