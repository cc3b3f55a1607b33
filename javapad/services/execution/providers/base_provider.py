"""Base execution provider: one HTTP round trip translated into a RawResult."""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
import logging
from typing import Any

import httpx
import tenacity
from tenacity import AsyncRetrying, retry_if_exception, stop_after_attempt

from javapad.config.schema import ProviderSettings

from ..error_mapping import map_transport_error
from ..exceptions import MalformedResponseError, TransportFailure
from ..http_client import get_shared_http_client
from ..types import RawResult

logger = logging.getLogger(__name__)

MAX_RETRY_DELAY_SECONDS = 5.0
BASE_RETRY_DELAY_SECONDS = 0.5


def _text(value: object) -> str:
    """Provider fields may be null or missing; normalize to a string."""
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


class BaseExecutionProvider(ABC):
    """
    Base class for remote execution providers.

    Subclasses describe the wire shape (request payload and response parsing);
    this class owns the HTTP call, transport error mapping and the
    connect-only retry policy.
    """

    kind: str = "base"

    def __init__(
        self,
        settings: ProviderSettings,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings
        self.name = settings.name
        self.base_url = settings.base_url
        self.api_key = settings.api_key
        self.max_retries = settings.max_retries
        self.timeout = httpx.Timeout(settings.timeout, connect=settings.connect_timeout)
        self._client = client

    @property
    @abstractmethod
    def endpoint(self) -> str:
        """Absolute URL the submission is POSTed to."""

    @abstractmethod
    def build_payload(self, code: str, stdin: str) -> dict[str, Any]:
        """JSON body for one submission."""

    @abstractmethod
    def parse_response(self, data: dict[str, Any]) -> RawResult:
        """Translate the decoded JSON body; raise MalformedResponseError if unusable."""

    def request_params(self) -> dict[str, str]:
        return {}

    def request_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is not None:
            return self._client
        return await get_shared_http_client()

    async def _post(self, code: str, stdin: str) -> RawResult:
        client = await self._get_client()
        response = await client.post(
            self.endpoint,
            params=self.request_params(),
            headers=self.request_headers(),
            json=self.build_payload(code, stdin),
            timeout=self.timeout,
        )
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"Expected a JSON object, got {type(data).__name__}",
                provider=self.name,
            )
        return self.parse_response(data)

    async def _attempt(self, code: str, stdin: str) -> RawResult:
        try:
            return await self._post(code, stdin)
        except Exception as exc:
            mapped = map_transport_error(exc, provider=self.name)
            if mapped is exc:
                raise
            raise mapped from exc

    def _should_retry_error(self, error: BaseException) -> bool:
        return isinstance(error, TransportFailure) and error.is_retryable

    async def execute(
        self,
        code: str,
        stdin: str = "",
        sleep: Callable[[int | float], Awaitable[None]] | None = None,
    ) -> RawResult:
        """Submit code and stdin; return the translated result.

        Raises:
            TransportFailure: When the provider cannot be used for this run.
        """
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_retries + 1),
            wait=tenacity.wait_exponential(
                multiplier=BASE_RETRY_DELAY_SECONDS,
                min=BASE_RETRY_DELAY_SECONDS,
                max=MAX_RETRY_DELAY_SECONDS,
            ),
            retry=retry_if_exception(self._should_retry_error),
            reraise=True,
            before_sleep=tenacity.before_sleep_log(logger, logging.WARNING),
            **({"sleep": sleep} if sleep is not None else {}),
        )

        async for attempt in retrying:
            with attempt:
                return await self._attempt(code, stdin)

        raise RuntimeError("Retry loop exited without returning")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, endpoint={self.endpoint!r})"
