"""
Editor Service
==============

Usage:
    from javapad.services.editor import EditorSession

    report = await session.run(code, stdin)
"""

from .session import (
    CONNECTIVITY_NOTE,
    EditorSession,
    RunInProgressError,
    RunReport,
    RunStatus,
    execution_failed_message,
)

__all__ = [
    "CONNECTIVITY_NOTE",
    "EditorSession",
    "RunInProgressError",
    "RunReport",
    "RunStatus",
    "execution_failed_message",
]
