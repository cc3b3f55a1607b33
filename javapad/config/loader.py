"""
Configuration Loader
====================

Builds the validated AppConfig from three layers, later layers winning:

1. DEFAULTS (javapad.config.defaults)
2. Optional YAML file (JAVAPAD_CONFIG, default <project>/config/main.yaml)
3. Environment variables (.env files are loaded without overriding the
   real environment)

Per-provider environment overrides use the upper-cased provider name as
prefix, e.g. JUDGE0_RAPIDAPI_API_KEY or PISTON_BASE_URL.
"""

from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Any, Mapping

from dotenv import load_dotenv
import yaml

from .defaults import DEFAULTS
from .schema import AppConfig

PROJECT_ROOT = Path(__file__).resolve().parents[2]

CONFIG_PATH_ENV = "JAVAPAD_CONFIG"
PROVIDERS_ENV = "JAVAPAD_PROVIDERS"
LOG_LEVEL_ENV = "JAVAPAD_LOG_LEVEL"
SNIPPET_STORE_ENV = "JAVAPAD_SNIPPET_STORE"

_PROVIDER_ENV_FIELDS = {
    "BASE_URL": "base_url",
    "API_KEY": "api_key",
    "TIMEOUT": "timeout",
}

_config: AppConfig | None = None


def _deep_merge(base: dict[str, Any], override: Any) -> dict[str, Any]:
    """Merge nested mappings; lists and scalars in override replace base."""
    if not isinstance(override, dict):
        return base
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping at the top level")
    return data


def _apply_provider_env(providers: list[dict[str, Any]], env: Mapping[str, str]) -> list[dict[str, Any]]:
    for provider in providers:
        prefix = str(provider.get("name", "")).upper()
        for suffix, field in _PROVIDER_ENV_FIELDS.items():
            value = (env.get(f"{prefix}_{suffix}") or "").strip()
            if value:
                provider[field] = value

    selection = (env.get(PROVIDERS_ENV) or "").strip()
    if not selection:
        return providers

    by_name = {p.get("name"): p for p in providers}
    ordered = []
    for name in (part.strip() for part in selection.split(",")):
        if not name:
            continue
        if name not in by_name:
            raise ValueError(
                f"{PROVIDERS_ENV} names unknown provider '{name}'. "
                f"Known providers: {sorted(by_name)}"
            )
        ordered.append(by_name[name])
    return ordered


def load_config(
    path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> AppConfig:
    """Load and validate configuration.

    Args:
        path: YAML file to merge over the defaults. Falls back to
            $JAVAPAD_CONFIG, then <project>/config/main.yaml.
        env: Environment mapping (defaults to os.environ after loading .env).

    Raises:
        ValueError / pydantic.ValidationError: On invalid configuration.
    """
    if env is None:
        load_dotenv(PROJECT_ROOT / ".env.local", override=False)
        load_dotenv(PROJECT_ROOT / ".env", override=False)
        env = os.environ

    if path is None:
        path = env.get(CONFIG_PATH_ENV) or PROJECT_ROOT / "config" / "main.yaml"

    data = _deep_merge(copy.deepcopy(DEFAULTS), _load_yaml(Path(path)))
    data["execution"]["providers"] = _apply_provider_env(
        [dict(p) for p in data["execution"].get("providers", [])],
        env,
    )

    log_level = (env.get(LOG_LEVEL_ENV) or "").strip()
    if log_level:
        data["logging"]["level"] = log_level.upper()

    snippet_store = (env.get(SNIPPET_STORE_ENV) or "").strip()
    if snippet_store:
        data["storage"]["snippet_store"] = snippet_store

    return AppConfig.model_validate(data)


def get_config() -> AppConfig:
    """Return the process-wide configuration, loading it on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def clear_config_cache() -> None:
    global _config
    _config = None
