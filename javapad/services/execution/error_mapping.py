"""Map httpx / parsing errors raised while talking to a provider onto TransportFailure."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Callable

import httpx

from .exceptions import (
    ExecutionError,
    MalformedResponseError,
    ProviderConnectionError,
    ProviderHTTPError,
    ProviderTimeoutError,
    TransportFailure,
)

logger = logging.getLogger(__name__)


ErrorFactory = Callable[[BaseException, str | None], TransportFailure]


def _http_status_error(exc: BaseException, provider: str | None) -> TransportFailure:
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    body = ""
    if response is not None:
        try:
            body = response.text[:200]
        except (httpx.ResponseNotRead, UnicodeDecodeError):
            body = ""
    return ProviderHTTPError(
        f"Provider returned HTTP {status_code}" if status_code else str(exc),
        status_code=status_code,
        provider=provider,
        details={"body": body} if body else None,
    )


# Order matters: ConnectTimeout is a TimeoutException but the request was
# never sent, so it must be classified as a connection failure first.
_RULES: tuple[tuple[tuple[type[BaseException], ...], ErrorFactory], ...] = (
    (
        (httpx.ConnectTimeout, httpx.ConnectError, httpx.UnsupportedProtocol),
        lambda exc, provider: ProviderConnectionError(
            str(exc) or type(exc).__name__, provider=provider
        ),
    ),
    (
        (httpx.TimeoutException, TimeoutError, asyncio.TimeoutError),
        lambda exc, provider: ProviderTimeoutError(
            str(exc) or "Request timed out", provider=provider
        ),
    ),
    ((httpx.HTTPStatusError,), _http_status_error),
    (
        (json.JSONDecodeError, UnicodeDecodeError),
        lambda exc, provider: MalformedResponseError(
            f"Response body is not valid JSON: {exc}", provider=provider
        ),
    ),
    (
        (httpx.HTTPError,),
        lambda exc, provider: TransportFailure(
            str(exc) or type(exc).__name__,
            provider=provider,
            details={"original_type": type(exc).__name__},
        ),
    ),
)


def map_transport_error(exc: BaseException, provider: str | None = None) -> BaseException:
    """Map a low-level exception to the TransportFailure family.

    Notes:
        - Errors that are already ExecutionError are returned unchanged.
        - Interpreter control flow and cancellation are returned unchanged.
        - Programming errors (KeyError/TypeError/...) are returned unchanged
          so they surface instead of silently triggering a fallback.
    """
    if isinstance(exc, ExecutionError):
        return exc

    if isinstance(exc, (KeyboardInterrupt, SystemExit, asyncio.CancelledError)):
        return exc

    if isinstance(exc, (KeyError, TypeError, AttributeError, AssertionError)):
        return exc

    for types, factory in _RULES:
        if isinstance(exc, types):
            return factory(exc, provider)

    if isinstance(exc, OSError):
        return ProviderConnectionError(str(exc) or type(exc).__name__, provider=provider)

    logger.debug("No transport mapping for %s; surfacing as-is", type(exc).__name__)
    return exc
