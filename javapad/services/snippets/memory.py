"""Process-local snippet store. Contents are lost on restart."""

from __future__ import annotations

import time
from typing import Callable

from .base import Snippet, SnippetStore, new_snippet_id, newest_first


class InMemorySnippetStore(SnippetStore):
    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._by_owner: dict[str, list[Snippet]] = {}

    async def submit(self, owner: str, code: str) -> str:
        snippet = Snippet(
            id=new_snippet_id(),
            owner=owner,
            code=code,
            submitted_at=self._clock(),
        )
        self._by_owner.setdefault(owner, []).append(snippet)
        return snippet.id

    async def set_output(self, owner: str, snippet_id: str, output: str) -> bool:
        snippets = self._by_owner.get(owner, [])
        for index, snippet in enumerate(snippets):
            if snippet.id == snippet_id:
                snippets[index] = snippet.model_copy(update={"output": output})
                return True
        return False

    async def list(self, owner: str) -> list[Snippet]:
        return newest_first(self._by_owner.get(owner, []))

    async def get(self, owner: str, snippet_id: str) -> Snippet | None:
        for snippet in self._by_owner.get(owner, []):
            if snippet.id == snippet_id:
                return snippet
        return None

    async def delete(self, owner: str, snippet_id: str) -> bool:
        snippets = self._by_owner.get(owner, [])
        for index, snippet in enumerate(snippets):
            if snippet.id == snippet_id:
                del snippets[index]
                return True
        return False

    async def clear(self, owner: str) -> int:
        return len(self._by_owner.pop(owner, []))
