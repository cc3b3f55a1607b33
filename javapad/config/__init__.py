"""
Configuration
=============

Usage:
    from javapad.config import get_config

    config = get_config()
    for provider in config.execution.providers:
        print(provider.name, provider.base_url)
"""

from .defaults import DEFAULTS, JUDGE0_JAVA_LANGUAGE_ID
from .loader import PROJECT_ROOT, clear_config_cache, get_config, load_config
from .schema import (
    AppConfig,
    ExecutionSettings,
    LoggingSettings,
    ProviderSettings,
    StorageSettings,
)

__all__ = [
    "DEFAULTS",
    "JUDGE0_JAVA_LANGUAGE_ID",
    "PROJECT_ROOT",
    "AppConfig",
    "ExecutionSettings",
    "LoggingSettings",
    "ProviderSettings",
    "StorageSettings",
    "clear_config_cache",
    "get_config",
    "load_config",
]
