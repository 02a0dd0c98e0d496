"""Tags API Router."""

from fastapi import APIRouter, Depends

from lunotes.api.deps import get_notebook
from lunotes.services.notebook import Notebook

router = APIRouter()


@router.get("/", response_model=list[str])
def read_tags(notebook: Notebook = Depends(get_notebook)):
    """Every tag in use, sorted."""
    return notebook.all_tags()
