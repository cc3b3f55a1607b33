import os
from typing import Generator
from unittest.mock import patch

import pytest

from javapad.config import clear_config_cache


@pytest.fixture(scope="session", autouse=True)
def mock_env() -> Generator[None, None, None]:
    """
    Mock environment variables for the entire test session.

    Points configuration at a file that does not exist so tests never pick
    up a local config/main.yaml, and enables error details in API responses.
    """
    env_vars = {
        "ENVIRONMENT": "test",
        "JAVAPAD_CONFIG": os.path.join(os.sep, "nonexistent", "javapad-test.yaml"),
        "JAVAPAD_LOG_LEVEL": "DEBUG",
        "JAVAPAD_SNIPPET_STORE": "memory",
    }
    with patch.dict(os.environ, env_vars):
        for key in ("JAVAPAD_PROVIDERS", "JUDGE0_RAPIDAPI_API_KEY"):
            os.environ.pop(key, None)
        yield


@pytest.fixture(autouse=True)
def fresh_config() -> Generator[None, None, None]:
    clear_config_cache()
    yield
    clear_config_cache()
