"""
Lunotes Backend Application

FastAPI application serving the local note store to the presentation
layer. Binds to localhost; there is no remote sync.

Start locally:
    uvicorn lunotes.main:app --host 127.0.0.1 --port 8000
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from lunotes.api.v1.categories import router as categories_router
from lunotes.api.v1.notes import router as notes_router
from lunotes.api.v1.tags import router as tags_router
from lunotes.core.config import settings
from lunotes.core.database import dispose_engine, get_engine, get_session_factory, init_db
from lunotes.core.logging import setup_logging
from lunotes.repositories import KeyValueRepository
from lunotes.services.notebook import Notebook

# Initialize logging before any log statements
setup_logging()
logger = logging.getLogger(__name__)


def open_notebook() -> Notebook:
    """Create the schema if needed and load the notebook from SQLite."""
    init_db(get_engine())
    return Notebook(KeyValueRepository(get_session_factory()))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
        - Opens the SQLite store and loads notes and categories
          (installing the default categories on first run)

    Shutdown:
        - Disposes the database engine
    """
    logger.info("Starting %s...", settings.PROJECT_NAME)
    logger.info("Data file: %s", settings.DATABASE_PATH)

    app.state.notebook = open_notebook()

    yield  # Application runs here

    dispose_engine()
    logger.info("Shutting down %s...", settings.PROJECT_NAME)


app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

app.include_router(notes_router, prefix="/api/v1/notes", tags=["Notes"])
app.include_router(categories_router, prefix="/api/v1/categories", tags=["Categories"])
app.include_router(tags_router, prefix="/api/v1/tags", tags=["Tags"])


@app.get("/health")
async def health_check():
    """Liveness probe for the desktop shell."""
    return {"status": "ok", "service": "lunotes"}
