"""Execution orchestrator: sequential provider fallback plus classification.

One run walks the provider chain in preference order with at most one call
in flight. Only a TransportFailure moves on to the next provider; the first
provider that returns a RawResult is authoritative, even if the program
failed to compile or crashed.
"""

from __future__ import annotations

import time
from typing import Sequence

import httpx

from javapad.config import AppConfig, get_config
from javapad.logging import get_logger

from .classifier import classify
from .exceptions import AllProvidersExhausted, ExecutionConfigError, TransportFailure
from .providers.base_provider import BaseExecutionProvider
from .registry import build_providers
from .types import ExecutionOutcome, RawResult

logger = get_logger("Orchestrator")


class ExecutionOrchestrator:
    """Runs a program against an ordered chain of execution providers."""

    def __init__(self, providers: Sequence[BaseExecutionProvider]) -> None:
        if not providers:
            raise ExecutionConfigError("At least one execution provider must be configured")
        self._providers: tuple[BaseExecutionProvider, ...] = tuple(providers)

    @classmethod
    def from_config(
        cls,
        config: AppConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> "ExecutionOrchestrator":
        config = config or get_config()
        return cls(build_providers(config.execution.providers, client=client))

    @property
    def providers(self) -> tuple[BaseExecutionProvider, ...]:
        return self._providers

    async def fetch_raw_result(self, code: str, stdin: str = "") -> RawResult:
        """Return the first RawResult any provider produces.

        Raises:
            AllProvidersExhausted: Every provider failed at the transport level.
        """
        failures: list[TransportFailure] = []
        total = len(self._providers)

        for position, provider in enumerate(self._providers, start=1):
            logger.info("Trying provider %s (%d/%d)", provider.name, position, total)
            try:
                raw = await provider.execute(code, stdin)
            except TransportFailure as exc:
                failures.append(exc)
                logger.warning("Provider %s failed: %s", provider.name, exc)
                continue
            return raw

        exhausted = AllProvidersExhausted(failures)
        logger.error("%s; last error: %s", exhausted.message, exhausted.last_error)
        raise exhausted

    async def run(self, code: str, stdin: str = "") -> ExecutionOutcome:
        """Execute code with stdin and classify the result.

        stdin is forwarded unchanged, including when it is empty.

        Raises:
            AllProvidersExhausted: No provider could be reached usably.
        """
        started = time.monotonic()
        raw = await self.fetch_raw_result(code, stdin)
        outcome = classify(raw)
        logger.success(
            "Classified %s result as %s",
            raw.provider,
            outcome.tag.value,
            elapsed=time.monotonic() - started,
        )
        return outcome
