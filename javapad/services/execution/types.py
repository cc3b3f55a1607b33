"""Shared execution data models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class OutcomeTag(str, Enum):
    """The four classifications of a program run."""

    SUCCESS = "success"
    COMPILE_ERROR = "compile_error"
    RUNTIME_ERROR = "runtime_error"
    TIMEOUT = "timeout"


class RawResult(BaseModel):
    """Provider response translated into a provider-neutral shape, before classification."""

    model_config = ConfigDict(frozen=True)

    stdout: str = ""
    stderr: str = ""
    compile_output: str = ""
    status: str | None = None
    provider: str = ""
    raw_response: dict[str, Any] = Field(default_factory=dict)


class ExecutionOutcome(BaseModel):
    """Normalized, UI-facing classification of a run."""

    model_config = ConfigDict(frozen=True)

    tag: OutcomeTag
    display: str
    provider: str = ""

    @property
    def is_success(self) -> bool:
        return self.tag is OutcomeTag.SUCCESS


__all__ = [
    "ExecutionOutcome",
    "OutcomeTag",
    "RawResult",
]
