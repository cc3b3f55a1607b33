"""
Execution Provider Registry
===========================

Provider classes register under their protocol kind ("judge0", "piston");
configuration entries name a kind and the registry builds the instances in
configured order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

import httpx

from .exceptions import ExecutionConfigError

if TYPE_CHECKING:
    from javapad.config.schema import ProviderSettings

    from .providers.base_provider import BaseExecutionProvider

_provider_registry: dict[str, type] = {}

_PROVIDER_ALIASES = {
    "judge0_ce": "judge0",
    "judge0-ce": "judge0",
    "emkc": "piston",
}


def register_provider(kind: str):
    """Register an execution provider class under a protocol kind.

    Args:
        kind: Name configuration uses to select this class

    Returns:
        Decorator function
    """

    def decorator(cls):
        if kind in _provider_registry:
            raise ValueError(f"Provider kind '{kind}' is already registered")
        _provider_registry[kind] = cls
        cls.kind = kind
        return cls

    return decorator


def get_provider_class(kind: str) -> type:
    """
    Get a registered provider class by kind.

    Raises:
        KeyError: If no provider is registered under the kind
    """
    kind = _PROVIDER_ALIASES.get(kind, kind)
    if kind not in _provider_registry:
        raise KeyError(f"Provider kind '{kind}' is not registered")
    return _provider_registry[kind]


def list_providers() -> list[str]:
    return list(_provider_registry.keys())


def is_provider_registered(kind: str) -> bool:
    return _PROVIDER_ALIASES.get(kind, kind) in _provider_registry


def build_provider(
    settings: "ProviderSettings",
    client: httpx.AsyncClient | None = None,
) -> "BaseExecutionProvider":
    """Instantiate the provider class configured for one chain entry."""
    # Importing the package registers the built-in providers.
    from . import providers  # noqa: F401

    try:
        provider_cls = get_provider_class(settings.kind)
    except KeyError as exc:
        raise ExecutionConfigError(
            f"Unknown provider kind '{settings.kind}'",
            provider=settings.name,
            details={"registered": list_providers()},
        ) from exc
    return provider_cls(settings, client=client)


def build_providers(
    settings: Iterable["ProviderSettings"],
    client: httpx.AsyncClient | None = None,
) -> list["BaseExecutionProvider"]:
    """Instantiate the whole chain, preserving preference order."""
    chain = [build_provider(entry, client=client) for entry in settings]
    if not chain:
        raise ExecutionConfigError("At least one execution provider must be configured")
    return chain
