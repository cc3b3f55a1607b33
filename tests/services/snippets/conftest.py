"""Shared fixtures for snippet store tests."""

from pathlib import Path

import pytest

from javapad.services.snippets import InMemorySnippetStore, JsonFileSnippetStore


class FakeClock:
    """Deterministic clock; advances one second per reading unless frozen."""

    def __init__(self, start: float = 1_700_000_000.0, step: float = 1.0):
        self.now = start
        self.step = step

    def __call__(self) -> float:
        value = self.now
        self.now += self.step
        return value


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture(params=["memory", "json"])
def store(request, clock: FakeClock, tmp_path: Path):
    """Every store implementation must satisfy the same contract."""
    if request.param == "memory":
        return InMemorySnippetStore(clock=clock)
    return JsonFileSnippetStore(tmp_path / "snippets" / "history.json", clock=clock)
