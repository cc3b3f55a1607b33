"""Classify a RawResult into exactly one ExecutionOutcome.

Rules are evaluated top to bottom and the first match wins. Provider-reported
status phrases are checked before any text heuristic, because some providers
report a clean status even when incidental stderr output exists.
"""

from __future__ import annotations

from .types import ExecutionOutcome, OutcomeTag, RawResult

COMPILATION_ERROR_STATUS = "compilation error"
RUNTIME_ERROR_STATUS_PREFIX = "runtime error"
TIME_LIMIT_EXCEEDED_STATUS = "time limit exceeded"

NO_OUTPUT_MARKER = "(no output)"
COMPILE_FAILED_MESSAGE = "Compilation failed with no output."
RUNTIME_FAILED_MESSAGE = "Runtime error occurred."
TIMEOUT_MESSAGE = "Time Limit Exceeded: Your code took too long to execute."


def _normalize_status(status: str | None) -> str:
    return (status or "").strip().lower()


def _compile_error(raw: RawResult) -> ExecutionOutcome:
    return ExecutionOutcome(
        tag=OutcomeTag.COMPILE_ERROR,
        display=raw.compile_output or raw.stderr or COMPILE_FAILED_MESSAGE,
        provider=raw.provider,
    )


def classify(raw: RawResult) -> ExecutionOutcome:
    """Map a provider result to its outcome. Pure and deterministic."""
    status = _normalize_status(raw.status)

    if status == COMPILATION_ERROR_STATUS:
        return _compile_error(raw)

    if status.startswith(RUNTIME_ERROR_STATUS_PREFIX):
        return ExecutionOutcome(
            tag=OutcomeTag.RUNTIME_ERROR,
            display=raw.stderr or raw.stdout or RUNTIME_FAILED_MESSAGE,
            provider=raw.provider,
        )

    if status == TIME_LIMIT_EXCEEDED_STATUS:
        return ExecutionOutcome(
            tag=OutcomeTag.TIMEOUT,
            display=TIMEOUT_MESSAGE,
            provider=raw.provider,
        )

    # Text heuristics: providers without a status phrase (Piston) land here.
    if raw.compile_output and not raw.stdout:
        return _compile_error(raw)

    if raw.stderr:
        return ExecutionOutcome(
            tag=OutcomeTag.RUNTIME_ERROR,
            display=raw.stderr,
            provider=raw.provider,
        )

    # Unknown statuses with no output also end up here.
    return ExecutionOutcome(
        tag=OutcomeTag.SUCCESS,
        display=raw.stdout or NO_OUTPUT_MARKER,
        provider=raw.provider,
    )
