"""Identity-gated access to the snippet store.

Callers that are not authenticated get empty results instead of errors, so
the editor can call these unconditionally.
"""

from __future__ import annotations

from javapad.services.identity import Identity

from .base import Snippet, SnippetStore


class SnippetHistory:
    """Snippet operations on behalf of one caller."""

    def __init__(self, store: SnippetStore, identity: Identity) -> None:
        self.store = store
        self.identity = identity

    @property
    def owner(self) -> str | None:
        if not self.identity.is_authenticated:
            return None
        return self.identity.principal

    async def submit(self, code: str) -> str | None:
        """Record a submission; returns the new id, or None for anonymous callers."""
        if self.owner is None:
            return None
        return await self.store.submit(self.owner, code)

    async def set_output(self, snippet_id: str, output: str) -> bool:
        if self.owner is None:
            return False
        return await self.store.set_output(self.owner, snippet_id, output)

    async def list(self) -> list[Snippet]:
        if self.owner is None:
            return []
        return await self.store.list(self.owner)

    async def get(self, snippet_id: str) -> Snippet | None:
        if self.owner is None:
            return None
        return await self.store.get(self.owner, snippet_id)

    async def delete(self, snippet_id: str) -> bool:
        if self.owner is None:
            return False
        return await self.store.delete(self.owner, snippet_id)

    async def search(self, term: str) -> list[Snippet]:
        if self.owner is None:
            return []
        return await self.store.search(self.owner, term)

    async def clear(self) -> int:
        if self.owner is None:
            return 0
        return await self.store.clear(self.owner)
