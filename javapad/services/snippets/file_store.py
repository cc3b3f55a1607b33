"""File storage for snippet history.

All snippets live in a single JSON document:
    {"snippets": [{"id": ..., "owner": ..., "code": ..., ...}, ...]}

Entries are kept in insertion order. JSON encoding and decoding run in the
default thread pool so a large history does not block the event loop. Writes
go to a sibling ``.json.tmp`` file that then replaces the document, so a
failed write leaves the previous document intact.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
import time
from typing import Any, Callable

import aiofiles
from pydantic import ValidationError

from .base import Snippet, SnippetStore, new_snippet_id, newest_first

JSON_INDENT: int = 2


class SnippetStorageError(Exception):
    """Base exception for snippet storage errors."""


class JsonFileSnippetStore(SnippetStore):
    """Snippet store persisted to one JSON file.

    Attributes:
        path: Location of the JSON document.
    """

    def __init__(self, path: str | Path, clock: Callable[[], float] = time.time) -> None:
        """Initialize the store.

        Args:
            path: JSON file to use; parent directories are created.

        Raises:
            SnippetStorageError: If the parent directory cannot be created.
        """
        self.path = Path(path)
        self._tmp_path = self.path.with_suffix(".json.tmp")
        self._clock = clock
        # read-modify-write cycles must not interleave
        self._lock = asyncio.Lock()

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise SnippetStorageError(f"Failed to create snippet storage directory: {e}") from e

    async def _load(self) -> list[Snippet]:
        if not self.path.exists():
            return []
        try:
            async with aiofiles.open(self.path, encoding="utf-8") as f:
                content = await f.read()
            loop = asyncio.get_running_loop()
            document: Any = await loop.run_in_executor(None, json.loads, content or "{}")
        except json.JSONDecodeError as e:
            raise SnippetStorageError(f"Failed to parse snippet file {self.path}: {e}") from e
        except OSError as e:
            raise SnippetStorageError(f"Failed to read snippet file {self.path}: {e}") from e

        try:
            return [Snippet.model_validate(item) for item in document.get("snippets", [])]
        except (AttributeError, TypeError, ValidationError) as e:
            raise SnippetStorageError(f"Unexpected snippet file layout in {self.path}: {e}") from e

    async def _save(self, snippets: list[Snippet]) -> None:
        document = {"snippets": [s.model_dump(exclude={"preview"}) for s in snippets]}
        try:
            loop = asyncio.get_running_loop()
            content: str = await loop.run_in_executor(
                None,
                lambda: json.dumps(document, indent=JSON_INDENT, ensure_ascii=False),
            )
            async with aiofiles.open(self._tmp_path, "w", encoding="utf-8") as f:
                await f.write(content)
            await asyncio.to_thread(self._tmp_path.replace, self.path)
        except OSError as e:
            self._tmp_path.unlink(missing_ok=True)
            raise SnippetStorageError(f"Failed to save snippet file {self.path}: {e}") from e

    async def submit(self, owner: str, code: str) -> str:
        snippet = Snippet(
            id=new_snippet_id(),
            owner=owner,
            code=code,
            submitted_at=self._clock(),
        )
        async with self._lock:
            snippets = await self._load()
            snippets.append(snippet)
            await self._save(snippets)
        return snippet.id

    async def set_output(self, owner: str, snippet_id: str, output: str) -> bool:
        async with self._lock:
            snippets = await self._load()
            for index, snippet in enumerate(snippets):
                if snippet.owner == owner and snippet.id == snippet_id:
                    snippets[index] = snippet.model_copy(update={"output": output})
                    await self._save(snippets)
                    return True
        return False

    async def list(self, owner: str) -> list[Snippet]:
        async with self._lock:
            snippets = await self._load()
        return newest_first(s for s in snippets if s.owner == owner)

    async def get(self, owner: str, snippet_id: str) -> Snippet | None:
        async with self._lock:
            snippets = await self._load()
        return next((s for s in snippets if s.owner == owner and s.id == snippet_id), None)

    async def delete(self, owner: str, snippet_id: str) -> bool:
        async with self._lock:
            snippets = await self._load()
            remaining = [s for s in snippets if not (s.owner == owner and s.id == snippet_id)]
            if len(remaining) == len(snippets):
                return False
            await self._save(remaining)
        return True

    async def clear(self, owner: str) -> int:
        async with self._lock:
            snippets = await self._load()
            remaining = [s for s in snippets if s.owner != owner]
            removed = len(snippets) - len(remaining)
            if removed:
                await self._save(remaining)
        return removed
