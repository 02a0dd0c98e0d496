"""
API Dependencies

FastAPI dependency providers shared by the v1 routers.
"""

from fastapi import Request

from lunotes.services.notebook import Notebook


def get_notebook(request: Request) -> Notebook:
    """
    FastAPI dependency that returns the application's notebook.

    The notebook is created once in the lifespan handler and kept on
    ``app.state``; tests override this dependency with their own.
    """
    return request.app.state.notebook
