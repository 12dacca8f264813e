"""Discovery collaborator interface used by the Client."""

from __future__ import annotations

from typing import Protocol

from ..state import EndpointPair


class Locator(Protocol):
    """Anything that can turn query parameters into server URL pairs, best first."""

    async def discover(self, params: list[tuple[str, str]], scheme: str) -> list[EndpointPair]: ...


__all__ = ["Locator"]
