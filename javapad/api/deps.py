"""FastAPI dependencies: caller identity and the shared service objects."""

from __future__ import annotations

from fastapi import Depends, Header

from javapad.config import get_config
from javapad.services.editor import EditorSession
from javapad.services.execution import ExecutionOrchestrator
from javapad.services.identity import Identity
from javapad.services.snippets import SnippetHistory, SnippetStore, create_snippet_store

PRINCIPAL_HEADER = "X-Principal"

_orchestrator: ExecutionOrchestrator | None = None
_snippet_store: SnippetStore | None = None


class SessionRegistry:
    """EditorSessions for authenticated principals with work in flight.

    Sessions carry the in-flight run guard, so a caller's overlapping runs
    are rejected. A session leaves the registry as soon as it is idle, so
    the map only ever holds callers with a run or a submission record in
    progress. Anonymous callers get a fresh session per request.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, EditorSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def get(
        self,
        identity: Identity,
        orchestrator: ExecutionOrchestrator,
        store: SnippetStore,
    ) -> EditorSession:
        history = SnippetHistory(store, identity)
        if not identity.is_authenticated:
            return EditorSession(orchestrator, history, identity)
        principal = identity.principal or ""
        session = self._sessions.get(principal)
        if session is None:
            session = EditorSession(orchestrator, history, identity, on_idle=self._release)
            self._sessions[principal] = session
        return session

    def _release(self, session: EditorSession) -> None:
        principal = session.identity.principal or ""
        if self._sessions.get(principal) is session:
            del self._sessions[principal]

    def clear(self) -> None:
        self._sessions.clear()


session_registry = SessionRegistry()


def get_identity(
    x_principal: str | None = Header(default=None, alias=PRINCIPAL_HEADER),
) -> Identity:
    return Identity(x_principal.strip() if x_principal else None)


def get_orchestrator() -> ExecutionOrchestrator:
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = ExecutionOrchestrator.from_config(get_config())
    return _orchestrator


def get_snippet_store() -> SnippetStore:
    global _snippet_store
    if _snippet_store is None:
        _snippet_store = create_snippet_store(get_config().storage)
    return _snippet_store


def get_history(
    identity: Identity = Depends(get_identity),
    store: SnippetStore = Depends(get_snippet_store),
) -> SnippetHistory:
    return SnippetHistory(store, identity)


def get_session(
    identity: Identity = Depends(get_identity),
    orchestrator: ExecutionOrchestrator = Depends(get_orchestrator),
    store: SnippetStore = Depends(get_snippet_store),
) -> EditorSession:
    return session_registry.get(identity, orchestrator, store)


def reset_dependencies() -> None:
    """Forget cached service objects (used on shutdown and in tests)."""
    global _orchestrator, _snippet_store
    _orchestrator = None
    _snippet_store = None
    session_registry.clear()
