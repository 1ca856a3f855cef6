from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol, runtime_checkable

DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class ProviderHealth:
    status: Literal["healthy", "degraded", "unreachable"]
    details: str | None = None

    @property
    def is_healthy(self) -> bool:
        return self.status == "healthy"


@runtime_checkable
class Provider(Protocol):
    """Minimal interface shared by backend-facing clients."""

    name: str

    async def health_check(self) -> ProviderHealth:
        ...

    async def aclose(self) -> None:
        ...
