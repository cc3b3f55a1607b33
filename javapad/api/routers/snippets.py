from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from javapad.api.deps import get_history
from javapad.services.snippets import Snippet, SnippetHistory

router = APIRouter()


@router.get("", response_model=List[Snippet])
async def list_snippets(
    q: Optional[str] = Query(default=None, description="Case-insensitive search term"),
    history: SnippetHistory = Depends(get_history),
):
    """List the caller's snippets, newest first, optionally filtered by q."""
    if q is not None:
        return await history.search(q)
    return await history.list()


@router.get("/{snippet_id}", response_model=Snippet)
async def get_snippet(snippet_id: str, history: SnippetHistory = Depends(get_history)):
    snippet = await history.get(snippet_id)
    if snippet is None:
        raise HTTPException(status_code=404, detail="Snippet not found")
    return snippet


@router.delete("/{snippet_id}")
async def delete_snippet(snippet_id: str, history: SnippetHistory = Depends(get_history)):
    return {"deleted": await history.delete(snippet_id)}


@router.delete("")
async def clear_snippets(history: SnippetHistory = Depends(get_history)):
    """Remove all of the caller's snippets."""
    return {"cleared": await history.clear()}
