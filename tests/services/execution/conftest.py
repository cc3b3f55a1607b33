"""Shared fixtures for execution tests."""

from typing import Any, Callable

import httpx
import pytest

from javapad.config.schema import ProviderSettings
from javapad.services.execution import RawResult


class FakeProvider:
    """Stands in for a BaseExecutionProvider in orchestrator tests."""

    def __init__(self, name: str, result: RawResult | BaseException):
        self.name = name
        self.result = result
        self.calls: list[tuple[str, str]] = []

    async def execute(self, code: str, stdin: str = "") -> RawResult:
        self.calls.append((code, stdin))
        if isinstance(self.result, BaseException):
            raise self.result
        return self.result


@pytest.fixture
def make_provider() -> Callable[..., FakeProvider]:
    return FakeProvider


@pytest.fixture
def judge0_settings() -> Callable[..., ProviderSettings]:
    def factory(**overrides: Any) -> ProviderSettings:
        values = {
            "name": "judge0_ce",
            "kind": "judge0",
            "base_url": "https://ce.judge0.com",
            "language_id": 62,
        }
        values.update(overrides)
        return ProviderSettings(**values)

    return factory


@pytest.fixture
def piston_settings() -> Callable[..., ProviderSettings]:
    def factory(**overrides: Any) -> ProviderSettings:
        values = {
            "name": "piston",
            "kind": "piston",
            "base_url": "https://emkc.org/api/v2/piston",
        }
        values.update(overrides)
        return ProviderSettings(**values)

    return factory


@pytest.fixture
def mock_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.AsyncClient]:
    """Build an AsyncClient whose requests are answered by handler."""

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
def no_sleep() -> Callable[[float], Any]:
    """Replacement for asyncio.sleep so retry tests do not wait."""

    async def _sleep(_seconds: float) -> None:
        return None

    return _sleep
