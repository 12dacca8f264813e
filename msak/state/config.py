"""Immutable test configuration with fail-fast validation."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from ..errors import ConfigError
from ..config.defaults import (
    STREAMS_MIN,
    STREAMS_MAX,
    DURATION_MS_MIN,
    DURATION_MS_MAX,
    SUPPORTED_CC_ALGORITHMS,
    SUPPORTED_SCHEMES,
    DEFAULT_STREAMS,
    DEFAULT_DURATION_MS,
    DEFAULT_CC,
    DEFAULT_SCHEME,
    DEFAULT_BYTE_LIMIT,
)


def _require_int(name: str, value: object) -> int:
    # bool is an int subclass; True streams is never what the caller meant.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{name} must be an integer, got {value!r}")
    return value


@dataclass(frozen=True)
class TestConfig:
    """Parameters for one measurement session.

    Attributes:
        streams: Concurrent streams per phase (1-4).
        duration_ms: Test duration per phase in milliseconds (1-20000).
        cc: Congestion control algorithm requested from the server.
        scheme: "ws" or "wss".
        byte_limit: Maximum application bytes per stream; 0 means unlimited.
        metadata: Free-form key/value pairs forwarded to the server.
    """

    __test__ = False  # not a pytest test class

    streams: int = DEFAULT_STREAMS
    duration_ms: int = DEFAULT_DURATION_MS
    cc: str = DEFAULT_CC
    scheme: str = DEFAULT_SCHEME
    byte_limit: int = DEFAULT_BYTE_LIMIT
    metadata: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        streams = _require_int("streams", self.streams)
        if not STREAMS_MIN <= streams <= STREAMS_MAX:
            raise ConfigError(f"number of streams must be between {STREAMS_MIN} and {STREAMS_MAX}, got {streams}")

        duration_ms = _require_int("duration_ms", self.duration_ms)
        if not DURATION_MS_MIN <= duration_ms <= DURATION_MS_MAX:
            raise ConfigError(
                f"duration must be between {DURATION_MS_MIN} and {DURATION_MS_MAX} ms, got {duration_ms}"
            )

        if self.cc not in SUPPORTED_CC_ALGORITHMS:
            raise ConfigError(f"supported algorithms are {', '.join(SUPPORTED_CC_ALGORITHMS)}, got {self.cc!r}")

        if self.scheme not in SUPPORTED_SCHEMES:
            raise ConfigError(f"scheme must be 'ws' or 'wss', got {self.scheme!r}")

        byte_limit = _require_int("byte_limit", self.byte_limit)
        if byte_limit < 0:
            raise ConfigError(f"byte limit must be >= 0, got {byte_limit}")

        if not isinstance(self.metadata, Mapping):
            raise ConfigError("metadata must be a mapping of strings")
        cleaned: dict[str, str] = {}
        for key, value in self.metadata.items():
            if not isinstance(key, str) or not isinstance(value, str):
                raise ConfigError(f"metadata keys and values must be strings, got {key!r}={value!r}")
            cleaned[key] = value
        object.__setattr__(self, "metadata", MappingProxyType(cleaned))

    @property
    def duration_s(self) -> float:
        return self.duration_ms / 1000.0


__all__ = ["TestConfig"]
