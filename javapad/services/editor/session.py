"""Editor session: one caller's run button.

Wires the execution orchestrator, the stdin heuristic and snippet history
together the way the editor uses them. The run and the submission record are
independent: recording happens in a detached task whose outcome never
reaches the caller. Once the run finishes, that task attaches the displayed
output to the recorded snippet.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Callable

from pydantic import BaseModel

from javapad.logging import get_logger
from javapad.services.execution import (
    AllProvidersExhausted,
    ExecutionOrchestrator,
    ExecutionOutcome,
    uses_stdin,
)
from javapad.services.identity import Identity
from javapad.services.snippets import SnippetHistory

logger = get_logger("EditorSession")

CONNECTIVITY_NOTE = (
    "Note: Java code execution uses an external API. "
    "Please check your internet connection and try again."
)


class RunStatus(str, Enum):
    SUCCESS = "success"
    COMPILE_ERROR = "compile_error"
    RUNTIME_ERROR = "runtime_error"
    TIMEOUT = "timeout"
    EXECUTION_FAILED = "execution_failed"


class RunReport(BaseModel):
    """What the editor shows after pressing run."""

    status: RunStatus
    output: str
    provider: str | None = None
    uses_stdin: bool = False

    @classmethod
    def from_outcome(cls, outcome: ExecutionOutcome, stdin_hint: bool) -> "RunReport":
        return cls(
            status=RunStatus(outcome.tag.value),
            output=outcome.display,
            provider=outcome.provider or None,
            uses_stdin=stdin_hint,
        )


class RunInProgressError(RuntimeError):
    """Raised when run() is called while a previous run has not finished."""


def execution_failed_message(reason: str) -> str:
    return f"Execution failed: {reason}\n\n{CONNECTIVITY_NOTE}"


class EditorSession:
    """
    Run and record Java programs for one caller.

    Usage:
        session = EditorSession(orchestrator, SnippetHistory(store, identity), identity)
        report = await session.run(code, stdin="")
    """

    def __init__(
        self,
        orchestrator: ExecutionOrchestrator,
        history: SnippetHistory,
        identity: Identity | None = None,
        on_idle: Callable[["EditorSession"], None] | None = None,
    ) -> None:
        """
        Args:
            on_idle: Called whenever the session has no run in flight and no
                pending submission record.
        """
        self.orchestrator = orchestrator
        self.history = history
        self.identity = identity or history.identity
        self._on_idle = on_idle
        self._running = False
        # strong references keep detached tasks alive until they finish
        self._pending: set[asyncio.Task] = set()

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def is_idle(self) -> bool:
        return not self._running and not self._pending

    def _notify_if_idle(self) -> None:
        if self._on_idle is not None and self.is_idle:
            self._on_idle(self)

    @staticmethod
    def stdin_hint(code: str) -> bool:
        """Whether the editor should open the stdin panel for this code."""
        return uses_stdin(code)

    async def run(self, code: str, stdin: str = "") -> RunReport:
        """Execute code and return the report to display.

        Raises:
            RunInProgressError: A previous run from this session is still in flight.
        """
        if self._running:
            raise RunInProgressError("A run is already in progress")
        self._running = True
        report_ready: asyncio.Future | None = None
        try:
            if self.identity.is_authenticated:
                report_ready = self._record_submission(code)

            report = await self._execute(code, stdin)
            if report_ready is not None:
                report_ready.set_result(report)
            return report
        finally:
            if report_ready is not None and not report_ready.done():
                report_ready.set_result(None)
            self._running = False
            self._notify_if_idle()

    async def _execute(self, code: str, stdin: str) -> RunReport:
        hint = uses_stdin(code)
        try:
            outcome = await self.orchestrator.run(code, stdin)
        except AllProvidersExhausted as exc:
            reason = str(exc.last_error) if exc.last_error is not None else exc.message
            return RunReport(
                status=RunStatus.EXECUTION_FAILED,
                output=execution_failed_message(reason),
                uses_stdin=hint,
            )
        return RunReport.from_outcome(outcome, hint)

    def _record_submission(self, code: str) -> asyncio.Future:
        """Start recording code; the returned future takes the run's report."""
        report_ready = asyncio.get_running_loop().create_future()
        task = asyncio.create_task(self._record(code, report_ready))
        self._pending.add(task)
        task.add_done_callback(self._on_recorded)
        return report_ready

    async def _record(self, code: str, report_ready: asyncio.Future) -> None:
        snippet_id = await self.history.submit(code)
        report = await report_ready
        # runs that raised leave no output to attach
        if snippet_id is not None and report is not None:
            await self.history.set_output(snippet_id, report.output)

    def _on_recorded(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if not task.cancelled():
            error = task.exception()
            if error is not None:
                logger.debug("Failed to record submission: %s", error)
        self._notify_if_idle()

    async def drain(self) -> None:
        """Wait for detached submission records to settle."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
