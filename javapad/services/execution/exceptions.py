"""Execution service exceptions.

Only transport-level problems are exceptions here. A program that fails to
compile, crashes or runs out of time is a successful classification and is
returned as data (see ExecutionOutcome), never raised.
"""

from __future__ import annotations

from typing import Any, Sequence


class ExecutionError(Exception):
    """Base exception for all execution-service errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        provider: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.provider = provider

    def __str__(self) -> str:
        text = f"[{self.provider}] {self.message}" if self.provider else self.message
        return f"{text} (details: {self.details})" if self.details else text


class ExecutionConfigError(ExecutionError):
    """Raised when the provider chain is misconfigured."""

    pass


class TransportFailure(ExecutionError):
    """
    A provider could not be reached or did not answer usably.

    Recorded per attempt; the orchestrator moves on to the next provider.
    """

    @property
    def is_retryable(self) -> bool:
        """Whether the same provider may be asked again without risk of a duplicate run."""
        return False


class ProviderConnectionError(TransportFailure):
    """The request never reached the provider (DNS, refused, TLS, ...)."""

    @property
    def is_retryable(self) -> bool:
        return True


class ProviderTimeoutError(TransportFailure):
    """The provider accepted the request but did not answer in time."""

    def __init__(
        self,
        message: str = "Request timed out",
        timeout: float | None = None,
        provider: str | None = None,
    ):
        super().__init__(message, provider=provider)
        self.timeout = timeout


class ProviderHTTPError(TransportFailure):
    """The provider answered with a non-success HTTP status."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        provider: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details=details, provider=provider)
        self.status_code = status_code

    def __str__(self) -> str:
        prefix = "" if self.status_code is None else f"HTTP {self.status_code} "
        return prefix + super().__str__()


class MalformedResponseError(TransportFailure):
    """The provider answered 2xx but the body could not be interpreted."""

    def __init__(
        self,
        message: str = "Malformed provider response",
        provider: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details=details, provider=provider)


class AllProvidersExhausted(ExecutionError):
    """Every configured provider failed at the transport level."""

    def __init__(self, failures: Sequence[TransportFailure]):
        self.failures: list[TransportFailure] = list(failures)
        last = self.failures[-1] if self.failures else None
        message = (
            f"All {len(self.failures)} execution providers failed"
            if self.failures
            else "No execution providers were attempted"
        )
        super().__init__(
            message,
            details={"last_error": str(last)} if last is not None else None,
        )

    @property
    def last_error(self) -> TransportFailure | None:
        return self.failures[-1] if self.failures else None


__all__ = [
    "ExecutionError",
    "ExecutionConfigError",
    "TransportFailure",
    "ProviderConnectionError",
    "ProviderTimeoutError",
    "ProviderHTTPError",
    "MalformedResponseError",
    "AllProvidersExhausted",
]
