"""Build the configured snippet store."""

from __future__ import annotations

from pathlib import Path

from javapad.config import PROJECT_ROOT, StorageSettings

from .base import SnippetStore
from .file_store import JsonFileSnippetStore
from .memory import InMemorySnippetStore

MEMORY_STORE = "memory"


def create_snippet_store(settings: StorageSettings) -> SnippetStore:
    """Return an in-memory store for "memory", else a JSON file store at that path.

    Relative paths are resolved against the project root.
    """
    target = settings.snippet_store.strip()
    if not target or target.lower() == MEMORY_STORE:
        return InMemorySnippetStore()
    path = Path(target)
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return JsonFileSnippetStore(path)
