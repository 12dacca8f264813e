"""Discovery service configuration values."""

from __future__ import annotations

import os

LOCATE_BASE_URL = os.getenv("MSAK_LOCATE_BASE_URL", "https://locate.measurementlab.net/v2/nearest/")
LOCATE_RESOURCE_PATH = os.getenv("MSAK_LOCATE_RESOURCE_PATH", "msak/throughput1")
LOCATE_TIMEOUT_S = float(os.getenv("MSAK_LOCATE_TIMEOUT_S", "10"))

__all__ = [
    "LOCATE_BASE_URL",
    "LOCATE_RESOURCE_PATH",
    "LOCATE_TIMEOUT_S",
]
