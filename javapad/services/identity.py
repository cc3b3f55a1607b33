"""Caller identity as supplied by the external identity layer.

javapad does not authenticate anyone itself; it only needs to know whether a
caller is authenticated and, if so, their opaque principal.
"""

from __future__ import annotations

from dataclasses import dataclass

# Principal the identity layer reports for callers that have not logged in.
ANONYMOUS_PRINCIPAL = "2vxsx-fae"


@dataclass(frozen=True, slots=True)
class Identity:
    principal: str | None = None

    @property
    def is_authenticated(self) -> bool:
        principal = (self.principal or "").strip()
        return bool(principal) and principal != ANONYMOUS_PRINCIPAL

    @classmethod
    def anonymous(cls) -> "Identity":
        return cls(None)
