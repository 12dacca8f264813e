"""Configuration validation errors.

Raised while building a TestConfig, EndpointPair, or Client, before any
network activity starts.
"""

from __future__ import annotations

from .base import MsakError


class ConfigError(MsakError):
    """Invalid test parameters (stream count, duration, cc, byte limit, URLs)."""

    error_code = "invalid_config"


__all__ = ["ConfigError"]
