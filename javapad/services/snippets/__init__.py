"""
Snippet History
===============

Per-owner storage of submitted programs, plus an identity-gated facade.

Usage:
    from javapad.services.snippets import InMemorySnippetStore, SnippetHistory

    history = SnippetHistory(InMemorySnippetStore(), identity)
    snippet_id = await history.submit(code)
    matches = await history.search("Scanner")
"""

from .base import PREVIEW_MAX_LENGTH, Snippet, SnippetStore
from .factory import create_snippet_store
from .file_store import JsonFileSnippetStore, SnippetStorageError
from .history import SnippetHistory
from .memory import InMemorySnippetStore

__all__ = [
    "PREVIEW_MAX_LENGTH",
    "InMemorySnippetStore",
    "JsonFileSnippetStore",
    "Snippet",
    "SnippetHistory",
    "SnippetStorageError",
    "SnippetStore",
    "create_snippet_store",
]
