"""Pooled httpx client shared by every execution provider.

One connection pool serves the whole provider chain. Providers pass their own
per-request timeouts; the client-level timeout only applies to callers that
do not.
"""

import asyncio
from typing import Optional

import httpx

from javapad.logging import get_logger

logger = get_logger("HTTPClient")

POOL_LIMITS = httpx.Limits(max_connections=50, max_keepalive_connections=10, keepalive_expiry=30.0)
DEFAULT_TIMEOUT = httpx.Timeout(30.0, connect=10.0)
# error bodies from execution APIs can echo the submitted program
ERROR_BODY_PREVIEW = 200


class HTTPClientManager:
    """Process-wide owner of the shared client; recreates it after close()."""

    _instance: Optional["HTTPClientManager"] = None
    _lock = asyncio.Lock()

    def __init__(self):
        self._client: httpx.AsyncClient | None = None

    @classmethod
    async def get_instance(cls) -> "HTTPClientManager":
        async with cls._lock:
            if cls._instance is None:
                cls._instance = cls()
        return cls._instance

    async def get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            logger.debug("Opening shared HTTP client for execution providers")
            self._client = httpx.AsyncClient(
                limits=POOL_LIMITS,
                timeout=DEFAULT_TIMEOUT,
                follow_redirects=True,
                event_hooks={"response": [self._warn_on_error_status]},
            )
        return self._client

    async def close(self) -> None:
        client, self._client = self._client, None
        if client is not None and not client.is_closed:
            await client.aclose()
            logger.info("Shared HTTP client closed")

    @staticmethod
    async def _warn_on_error_status(response: httpx.Response) -> None:
        if response.is_error:
            await response.aread()
            logger.warning(
                "%s %s answered HTTP %d: %s",
                response.request.method,
                response.url,
                response.status_code,
                response.text[:ERROR_BODY_PREVIEW],
            )


async def get_shared_http_client() -> httpx.AsyncClient:
    manager = await HTTPClientManager.get_instance()
    return await manager.get_client()


async def close_shared_http_client() -> None:
    if HTTPClientManager._instance is not None:
        await HTTPClientManager._instance.close()
