"""
Execution Service
=================

Runs Java source against remote execution providers with sequential
fallback, and classifies the result.

Usage:
    from javapad.services.execution import ExecutionOrchestrator, uses_stdin

    orchestrator = ExecutionOrchestrator.from_config()
    outcome = await orchestrator.run(code, stdin="")
    print(outcome.tag, outcome.display)
"""

from .classifier import NO_OUTPUT_MARKER, TIMEOUT_MESSAGE, classify
from .exceptions import (
    AllProvidersExhausted,
    ExecutionConfigError,
    ExecutionError,
    MalformedResponseError,
    ProviderConnectionError,
    ProviderHTTPError,
    ProviderTimeoutError,
    TransportFailure,
)
from .orchestrator import ExecutionOrchestrator
from .providers import BaseExecutionProvider, Judge0Provider, PistonProvider
from .registry import build_provider, build_providers, register_provider
from .stdin_hint import STDIN_TOKENS, uses_stdin
from .types import ExecutionOutcome, OutcomeTag, RawResult

__all__ = [
    "AllProvidersExhausted",
    "BaseExecutionProvider",
    "ExecutionConfigError",
    "ExecutionError",
    "ExecutionOrchestrator",
    "ExecutionOutcome",
    "Judge0Provider",
    "MalformedResponseError",
    "NO_OUTPUT_MARKER",
    "OutcomeTag",
    "PistonProvider",
    "ProviderConnectionError",
    "ProviderHTTPError",
    "ProviderTimeoutError",
    "RawResult",
    "STDIN_TOKENS",
    "TIMEOUT_MESSAGE",
    "TransportFailure",
    "build_provider",
    "build_providers",
    "classify",
    "register_provider",
    "uses_stdin",
]
