"""
Unit Tests for the Execution Orchestrator
=========================================

Tests sequential fallback:
1. A transport failure moves on to the next provider
2. A program-level failure never triggers fallback
3. Exhaustion raises AllProvidersExhausted carrying every failure
4. stdin is forwarded unchanged, even when empty
"""

import pytest

from javapad.config import load_config
from javapad.services.execution import (
    AllProvidersExhausted,
    ExecutionConfigError,
    ExecutionOrchestrator,
    Judge0Provider,
    OutcomeTag,
    PistonProvider,
    ProviderHTTPError,
    ProviderTimeoutError,
    RawResult,
    classify,
)
from javapad.services.execution.classifier import TIMEOUT_MESSAGE

HELLO_WORLD = 'public class Main { public static void main(String[] a) { System.out.println("Hello World"); } }'


class TestFallback:
    @pytest.mark.asyncio
    async def test_first_provider_result_is_used(self, make_provider):
        first = make_provider("judge0", RawResult(stdout="Hello World\n", status="Accepted", provider="judge0"))
        second = make_provider("piston", RawResult(stdout="never", provider="piston"))

        outcome = await ExecutionOrchestrator([first, second]).run(HELLO_WORLD, "")

        assert outcome.tag is OutcomeTag.SUCCESS
        assert outcome.display == "Hello World\n"
        assert second.calls == []

    @pytest.mark.asyncio
    async def test_transport_timeout_falls_back_transparently(self, make_provider):
        fallback_raw = RawResult(stdout="42", provider="piston")
        first = make_provider("judge0", ProviderTimeoutError(provider="judge0"))
        second = make_provider("piston", fallback_raw)

        outcome = await ExecutionOrchestrator([first, second]).run("code", "")

        assert outcome == classify(fallback_raw)
        assert outcome.tag is OutcomeTag.SUCCESS
        assert outcome.display == "42"
        assert len(first.calls) == 1
        assert len(second.calls) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "raw",
        [
            RawResult(stderr="Exception in thread \"main\"", status="Runtime Error (NZEC)"),
            RawResult(compile_output="error: ';' expected", status="Compilation Error"),
            RawResult(status="Time Limit Exceeded"),
        ],
    )
    async def test_program_failure_never_falls_back(self, make_provider, raw):
        first = make_provider("judge0", raw)
        second = make_provider("piston", RawResult(stdout="ok"))

        outcome = await ExecutionOrchestrator([first, second]).run("code")

        assert outcome.tag is not OutcomeTag.SUCCESS
        assert second.calls == []

    @pytest.mark.asyncio
    async def test_timeout_scenario(self, make_provider):
        first = make_provider("judge0", RawResult(status="Time Limit Exceeded"))
        outcome = await ExecutionOrchestrator([first]).run("while (true) {}")
        assert outcome.tag is OutcomeTag.TIMEOUT
        assert outcome.display == TIMEOUT_MESSAGE

    @pytest.mark.asyncio
    async def test_providers_tried_in_order(self, make_provider):
        order: list[str] = []

        class Recording:
            def __init__(self, name, result):
                self.name = name
                self.result = result

            async def execute(self, code, stdin=""):
                order.append(self.name)
                if isinstance(self.result, Exception):
                    raise self.result
                return self.result

        providers = [
            Recording("judge0_rapidapi", ProviderHTTPError("quota", status_code=429)),
            Recording("judge0_ce", ProviderTimeoutError()),
            Recording("piston", RawResult(stdout="done", provider="piston")),
        ]
        outcome = await ExecutionOrchestrator(providers).run("code")

        assert order == ["judge0_rapidapi", "judge0_ce", "piston"]
        assert outcome.provider == "piston"


class TestExhaustion:
    @pytest.mark.asyncio
    async def test_all_providers_failing_raises(self, make_provider):
        first_error = ProviderTimeoutError(provider="judge0")
        last_error = ProviderHTTPError("Provider returned HTTP 503", status_code=503, provider="piston")
        first = make_provider("judge0", first_error)
        second = make_provider("piston", last_error)

        with pytest.raises(AllProvidersExhausted) as exc_info:
            await ExecutionOrchestrator([first, second]).run("code")

        assert exc_info.value.failures == [first_error, last_error]
        assert exc_info.value.last_error is last_error
        assert "503" in exc_info.value.details["last_error"]

    @pytest.mark.asyncio
    async def test_programming_errors_are_not_swallowed(self, make_provider):
        first = make_provider("judge0", KeyError("stdout"))
        second = make_provider("piston", RawResult(stdout="ok"))

        with pytest.raises(KeyError):
            await ExecutionOrchestrator([first, second]).run("code")
        assert second.calls == []


class TestStdinForwarding:
    @pytest.mark.asyncio
    async def test_empty_stdin_is_forwarded(self, make_provider):
        provider = make_provider("judge0", RawResult(stdout="x"))
        await ExecutionOrchestrator([provider]).run(HELLO_WORLD, "")
        assert provider.calls == [(HELLO_WORLD, "")]

    @pytest.mark.asyncio
    async def test_stdin_is_forwarded_without_input_tokens(self, make_provider):
        provider = make_provider("judge0", RawResult(stdout="x"))
        await ExecutionOrchestrator([provider]).run(HELLO_WORLD, "5\n7\n")
        assert provider.calls == [(HELLO_WORLD, "5\n7\n")]


class TestConstruction:
    def test_empty_chain_is_rejected(self):
        with pytest.raises(ExecutionConfigError):
            ExecutionOrchestrator([])

    def test_from_config_builds_default_chain(self):
        config = load_config(path="/nonexistent/main.yaml", env={})
        orchestrator = ExecutionOrchestrator.from_config(config)

        names = [p.name for p in orchestrator.providers]
        assert names == ["judge0_rapidapi", "judge0_ce", "piston"]
        assert isinstance(orchestrator.providers[0], Judge0Provider)
        assert isinstance(orchestrator.providers[2], PistonProvider)
