# -*- coding: utf-8 -*-
"""
Snippet store contract
======================

Stores keep every submitted program per owner. All operations are scoped by
owner, so one owner can never read, find or delete another owner's snippets.
Listings are newest first; snippets submitted at the same instant are
ordered by insertion, latest first.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable
import uuid

from pydantic import BaseModel, computed_field

ID_LENGTH = 12
PREVIEW_MAX_LENGTH = 120


def new_snippet_id() -> str:
    return uuid.uuid4().hex[:ID_LENGTH]


class Snippet(BaseModel):
    """One submitted program.

    Attributes:
        id: Opaque identifier returned by submit().
        owner: Principal that submitted it.
        code: Java source as submitted.
        output: What the editor displayed for the run; None until it finishes.
        submitted_at: Unix timestamp of submission.
    """

    id: str
    owner: str
    code: str
    output: str | None = None
    submitted_at: float

    @computed_field  # type: ignore[prop-decorator]
    @property
    def preview(self) -> str:
        """First non-blank line, truncated for list views."""
        first_line = next((line for line in self.code.split("\n") if line.strip()), "")
        if len(first_line) > PREVIEW_MAX_LENGTH:
            return first_line[:PREVIEW_MAX_LENGTH] + "..."
        return first_line

    @property
    def line_count(self) -> int:
        return len(self.code.split("\n"))


def newest_first(snippets: Iterable[Snippet]) -> list[Snippet]:
    """Sort newest first; equal timestamps keep reverse insertion order."""
    return sorted(reversed(list(snippets)), key=lambda s: s.submitted_at, reverse=True)


def matches(snippet: Snippet, term: str) -> bool:
    return term.lower() in snippet.code.lower()


class SnippetStore(ABC):
    """Abstract persistence for submitted snippets."""

    @abstractmethod
    async def submit(self, owner: str, code: str) -> str:
        """Store code for owner and return the new snippet id."""

    @abstractmethod
    async def set_output(self, owner: str, snippet_id: str, output: str) -> bool:
        """Attach run output to a snippet; False when owner has no such snippet."""

    @abstractmethod
    async def list(self, owner: str) -> list[Snippet]:
        """All of owner's snippets, newest first."""

    @abstractmethod
    async def get(self, owner: str, snippet_id: str) -> Snippet | None:
        ...

    @abstractmethod
    async def delete(self, owner: str, snippet_id: str) -> bool:
        """Remove one snippet; False when owner has no such snippet."""

    @abstractmethod
    async def clear(self, owner: str) -> int:
        """Remove all of owner's snippets and return how many were removed."""

    async def search(self, owner: str, term: str) -> list[Snippet]:
        """Case-insensitive substring search over code; blank term lists everything."""
        snippets = await self.list(owner)
        if not term.strip():
            return snippets
        return [s for s in snippets if matches(s, term)]
