"""
Unit Tests for the Connect-Only Retry Policy
============================================

Only failures where the request never reached the provider are retried, so
a billable execution is never submitted twice.
"""

import httpx
import pytest

from javapad.services.execution import (
    Judge0Provider,
    ProviderConnectionError,
    ProviderHTTPError,
    ProviderTimeoutError,
)


def counting_handler(responses):
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        outcome = responses[min(calls["count"], len(responses) - 1)]
        calls["count"] += 1
        if isinstance(outcome, type) and issubclass(outcome, Exception):
            raise outcome("simulated", request=request)
        return outcome()

    return handler, calls


def accepted() -> httpx.Response:
    return httpx.Response(200, json={"stdout": "ok", "status": {"description": "Accepted"}})


class TestConnectOnlyRetry:
    @pytest.mark.asyncio
    async def test_connection_errors_are_retried(self, judge0_settings, mock_client, no_sleep):
        handler, calls = counting_handler([httpx.ConnectError, httpx.ConnectError, accepted])

        async with mock_client(handler) as client:
            provider = Judge0Provider(judge0_settings(max_retries=2), client=client)
            raw = await provider.execute("code", sleep=no_sleep)

        assert raw.stdout == "ok"
        assert calls["count"] == 3

    @pytest.mark.asyncio
    async def test_retries_are_bounded(self, judge0_settings, mock_client, no_sleep):
        handler, calls = counting_handler([httpx.ConnectError])

        async with mock_client(handler) as client:
            provider = Judge0Provider(judge0_settings(max_retries=1), client=client)
            with pytest.raises(ProviderConnectionError):
                await provider.execute("code", sleep=no_sleep)

        assert calls["count"] == 2

    @pytest.mark.asyncio
    async def test_no_retry_by_default(self, judge0_settings, mock_client, no_sleep):
        handler, calls = counting_handler([httpx.ConnectError, accepted])

        async with mock_client(handler) as client:
            with pytest.raises(ProviderConnectionError):
                await Judge0Provider(judge0_settings(), client=client).execute("code", sleep=no_sleep)

        assert calls["count"] == 1

    @pytest.mark.asyncio
    async def test_read_timeouts_are_not_retried(self, judge0_settings, mock_client, no_sleep):
        handler, calls = counting_handler([httpx.ReadTimeout, accepted])

        async with mock_client(handler) as client:
            provider = Judge0Provider(judge0_settings(max_retries=3), client=client)
            with pytest.raises(ProviderTimeoutError):
                await provider.execute("code", sleep=no_sleep)

        assert calls["count"] == 1

    @pytest.mark.asyncio
    async def test_http_errors_are_not_retried(self, judge0_settings, mock_client, no_sleep):
        handler, calls = counting_handler([lambda: httpx.Response(502, text="bad gateway"), accepted])

        async with mock_client(handler) as client:
            provider = Judge0Provider(judge0_settings(max_retries=3), client=client)
            with pytest.raises(ProviderHTTPError):
                await provider.execute("code", sleep=no_sleep)

        assert calls["count"] == 1
