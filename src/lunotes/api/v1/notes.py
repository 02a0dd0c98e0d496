"""
Notes API Router

REST endpoints for note CRUD, tagging, selection, and filtered listing.
Handlers are synchronous; FastAPI runs them in its worker thread pool
and the notebook serializes access.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from lunotes.api.deps import get_notebook
from lunotes.schemas.categories import ALL_CATEGORIES
from lunotes.schemas.notes import (
    CategoryAssignment,
    ContentUpdate,
    Note,
    NoteCard,
    NoteCreateRequest,
    NoteFilters,
    TagRequest,
)
from lunotes.services.notebook import Notebook

router = APIRouter()


def _filters(
    q: str = "",
    category: str = ALL_CATEGORIES,
    tags: list[str] | None = Query(default=None),
) -> NoteFilters:
    return NoteFilters(
        search_query=q, selected_category=category, selected_tags=tags or []
    )


def _require_note(notebook: Notebook, note_id: str) -> Note:
    note = notebook.get_note(note_id)
    if note is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Note not found"
        )
    return note


@router.get("/", response_model=list[Note])
def read_notes(
    filters: NoteFilters = Depends(_filters),
    notebook: Notebook = Depends(get_notebook),
):
    """List notes matching search text, category, and all given tags."""
    return notebook.query_notes(filters)


@router.get("/cards", response_model=list[NoteCard])
def read_note_cards(
    filters: NoteFilters = Depends(_filters),
    notebook: Notebook = Depends(get_notebook),
):
    """Preview rows (title, excerpt, word count, category chip) for the list."""
    return notebook.note_cards(filters)


@router.get("/selected", response_model=Note | None)
def read_selected_note(notebook: Notebook = Depends(get_notebook)):
    """Currently selected note, or null."""
    return notebook.selected_note


@router.post("/", response_model=Note, status_code=status.HTTP_201_CREATED)
def create_note(
    body: NoteCreateRequest | None = None,
    notebook: Notebook = Depends(get_notebook),
):
    """Create an empty note in the given category and select it."""
    selected_category = body.selected_category if body is not None else None
    return notebook.create_note(selected_category)


@router.get("/{note_id}", response_model=Note)
def read_note(note_id: str, notebook: Notebook = Depends(get_notebook)):
    """Retrieve a single note by ID."""
    return _require_note(notebook, note_id)


@router.put("/{note_id}/content", response_model=Note)
def update_content(
    note_id: str,
    body: ContentUpdate,
    notebook: Notebook = Depends(get_notebook),
):
    """Replace the markup body; the title is re-derived from it."""
    _require_note(notebook, note_id)
    return notebook.update_content(note_id, body.content)


@router.put("/{note_id}/category", response_model=Note)
def assign_category(
    note_id: str,
    body: CategoryAssignment,
    notebook: Notebook = Depends(get_notebook),
):
    _require_note(notebook, note_id)
    note = notebook.assign_category(note_id, body.category_id)
    if note is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Category not found"
        )
    return note


@router.post("/{note_id}/tags", response_model=Note)
def add_tag(
    note_id: str,
    body: TagRequest,
    notebook: Notebook = Depends(get_notebook),
):
    """Attach a tag (normalized; blanks and duplicates are ignored)."""
    _require_note(notebook, note_id)
    return notebook.add_tag(note_id, body.tag)


@router.delete("/{note_id}/tags/{tag:path}", response_model=Note)
def remove_tag(note_id: str, tag: str, notebook: Notebook = Depends(get_notebook)):
    _require_note(notebook, note_id)
    return notebook.remove_tag(note_id, tag)


@router.post("/{note_id}/select", response_model=Note)
def select_note(note_id: str, notebook: Notebook = Depends(get_notebook)):
    _require_note(notebook, note_id)
    return notebook.select_note(note_id)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_note(note_id: str, notebook: Notebook = Depends(get_notebook)):
    """Delete a note; selection moves to the next note in the list."""
    if not notebook.delete_note(note_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Note not found"
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
