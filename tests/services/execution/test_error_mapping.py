import asyncio
import json

import httpx
import pytest

from javapad.services.execution import (
    AllProvidersExhausted,
    MalformedResponseError,
    ProviderConnectionError,
    ProviderHTTPError,
    ProviderTimeoutError,
    TransportFailure,
)
from javapad.services.execution.error_mapping import map_transport_error

REQUEST = httpx.Request("POST", "https://ce.judge0.com/submissions")


def test_connect_timeout_is_a_connection_failure():
    mapped = map_transport_error(httpx.ConnectTimeout("slow dns", request=REQUEST), provider="judge0_ce")
    assert isinstance(mapped, ProviderConnectionError)
    assert mapped.is_retryable
    assert mapped.provider == "judge0_ce"


def test_read_timeout_is_not_retryable():
    mapped = map_transport_error(httpx.ReadTimeout("slow", request=REQUEST))
    assert isinstance(mapped, ProviderTimeoutError)
    assert not mapped.is_retryable


def test_builtin_timeout():
    assert isinstance(map_transport_error(asyncio.TimeoutError()), ProviderTimeoutError)


def test_http_status_error_keeps_code_and_body():
    response = httpx.Response(503, text="maintenance", request=REQUEST)
    error = httpx.HTTPStatusError("503", request=REQUEST, response=response)

    mapped = map_transport_error(error, provider="judge0_ce")

    assert isinstance(mapped, ProviderHTTPError)
    assert mapped.status_code == 503
    assert mapped.details == {"body": "maintenance"}


def test_json_decode_error_is_malformed():
    with pytest.raises(json.JSONDecodeError) as exc_info:
        json.loads("not json")
    assert isinstance(map_transport_error(exc_info.value), MalformedResponseError)


def test_other_httpx_errors_are_transport_failures():
    mapped = map_transport_error(httpx.RemoteProtocolError("peer closed", request=REQUEST))
    assert type(mapped) is TransportFailure
    assert mapped.details["original_type"] == "RemoteProtocolError"


def test_os_errors_are_connection_failures():
    assert isinstance(map_transport_error(ConnectionResetError("reset")), ProviderConnectionError)


@pytest.mark.parametrize(
    "error",
    [KeyError("stdout"), TypeError("bad"), AttributeError("x"), ValueError("other")],
)
def test_programming_errors_are_returned_unchanged(error):
    assert map_transport_error(error) is error


def test_execution_errors_pass_through():
    error = MalformedResponseError(provider="piston")
    assert map_transport_error(error) is error


def test_cancellation_passes_through():
    error = asyncio.CancelledError()
    assert map_transport_error(error) is error


class TestExceptionFormatting:
    def test_str_includes_provider_and_details(self):
        error = TransportFailure("boom", provider="piston", details={"a": 1})
        assert str(error) == "[piston] boom (details: {'a': 1})"

    def test_http_error_prefix(self):
        error = ProviderHTTPError("Provider returned HTTP 500", status_code=500, provider="judge0_ce")
        assert str(error).startswith("HTTP 500 [judge0_ce]")

    def test_exhausted_without_failures(self):
        error = AllProvidersExhausted([])
        assert error.last_error is None
        assert error.message == "No execution providers were attempted"
