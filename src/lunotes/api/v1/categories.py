"""
Categories API Router

Endpoints for the category editor and the sidebar category list.
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status

from lunotes.api.deps import get_notebook
from lunotes.core.exceptions import ProtectedCategoryError
from lunotes.schemas.categories import Category, CategoryInput, CategoryStats
from lunotes.services.icons import COLOR_PALETTE, DEFAULT_COLOR, DEFAULT_ICON, ICON_OPTIONS
from lunotes.services.notebook import Notebook

router = APIRouter()


def _blank_name() -> HTTPException:
    return HTTPException(
        status_code=422,
        detail="Category name must not be blank",
    )


@router.get("/", response_model=list[CategoryStats])
def read_categories(notebook: Notebook = Depends(get_notebook)):
    """Categories in display order with their note counts."""
    return notebook.category_stats()


@router.get("/options")
def read_category_options():
    """Icons and colors offered by the category editor."""
    return {
        "icons": list(ICON_OPTIONS),
        "colors": list(COLOR_PALETTE),
        "defaultIcon": DEFAULT_ICON,
        "defaultColor": DEFAULT_COLOR,
    }


@router.post("/", response_model=Category, status_code=status.HTTP_201_CREATED)
def create_category(body: CategoryInput, notebook: Notebook = Depends(get_notebook)):
    category = notebook.create_or_update_category(body)
    if category is None:
        raise _blank_name()
    return category


@router.put("/{category_id}", response_model=Category)
def update_category(
    category_id: str,
    body: CategoryInput,
    notebook: Notebook = Depends(get_notebook),
):
    if notebook.get_category(category_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Category not found"
        )
    category = notebook.create_or_update_category(body, editing_id=category_id)
    if category is None:
        raise _blank_name()
    return category


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(category_id: str, notebook: Notebook = Depends(get_notebook)):
    """
    Delete a category and refile its notes under "general".

    Raises:
        HTTPException 409: For built-in categories.
        HTTPException 404: For unknown ids.
    """
    try:
        deleted = notebook.delete_category(category_id)
    except ProtectedCategoryError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Category not found"
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
