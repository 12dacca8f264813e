"""Default test parameters and their accepted ranges.

The defaults can be overridden from the environment; the limits cannot,
since the measurement server enforces the same ranges.
"""

from __future__ import annotations

import os

LIBRARY_NAME = "msak-client"
LIBRARY_VERSION = "0.1.0"

# ============================================================================
# Limits
# ============================================================================

STREAMS_MIN = 1
STREAMS_MAX = 4
DURATION_MS_MIN = 1
DURATION_MS_MAX = 20_000

SUPPORTED_CC_ALGORITHMS: tuple[str, ...] = ("bbr", "cubic")
SUPPORTED_SCHEMES: tuple[str, ...] = ("ws", "wss")

# ============================================================================
# Defaults
# ============================================================================

DEFAULT_STREAMS = int(os.getenv("MSAK_STREAMS", "2"))
DEFAULT_DURATION_MS = int(os.getenv("MSAK_DURATION_MS", "5000"))
DEFAULT_CC = os.getenv("MSAK_CC", "bbr")
DEFAULT_SCHEME = os.getenv("MSAK_SCHEME", "wss")
DEFAULT_BYTE_LIMIT = int(os.getenv("MSAK_BYTE_LIMIT", "0"))

__all__ = [
    "LIBRARY_NAME",
    "LIBRARY_VERSION",
    "STREAMS_MIN",
    "STREAMS_MAX",
    "DURATION_MS_MIN",
    "DURATION_MS_MAX",
    "SUPPORTED_CC_ALGORITHMS",
    "SUPPORTED_SCHEMES",
    "DEFAULT_STREAMS",
    "DEFAULT_DURATION_MS",
    "DEFAULT_CC",
    "DEFAULT_SCHEME",
    "DEFAULT_BYTE_LIMIT",
]
