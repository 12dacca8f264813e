"""Server discovery errors."""

from __future__ import annotations

from .base import MsakError


class DiscoveryError(MsakError):
    """Raised when no endpoint pair could be resolved; the session never starts."""

    error_code = "discovery_failed"


__all__ = ["DiscoveryError"]
