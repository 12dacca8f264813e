"""Aggregator of configuration modules.

This module re-exports the config API from smaller modules:
- protocol: sub-protocol, paths, upload sizing, cadence, socket lifecycle
- defaults: default test parameters and accepted ranges
- locate: discovery service settings
- logging, telemetry: read directly by msak.logging and msak.telemetry
"""

from .protocol import (
    SUBPROTOCOL,
    DOWNLOAD_PATH,
    UPLOAD_PATH,
    UPLOAD_INITIAL_MESSAGE_SIZE,
    UPLOAD_MAX_MESSAGE_SIZE,
    UPLOAD_SCALING_FRACTION,
    UPLOAD_BUFFER_FRAMES,
    UPLOAD_YIELD_S,
    DOWNLOAD_MEASUREMENT_INTERVAL_S,
    UPLOAD_MEASUREMENT_INTERVAL_S,
    STREAM_SAFETY_GRACE_MS,
    STREAM_OPEN_TIMEOUT_S,
    STREAM_CLOSE_TIMEOUT_S,
    STREAM_WRITE_LIMIT,
)
from .defaults import (
    LIBRARY_NAME,
    LIBRARY_VERSION,
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
from .locate import LOCATE_BASE_URL, LOCATE_RESOURCE_PATH, LOCATE_TIMEOUT_S

__all__ = [
    # protocol
    "SUBPROTOCOL",
    "DOWNLOAD_PATH",
    "UPLOAD_PATH",
    "UPLOAD_INITIAL_MESSAGE_SIZE",
    "UPLOAD_MAX_MESSAGE_SIZE",
    "UPLOAD_SCALING_FRACTION",
    "UPLOAD_BUFFER_FRAMES",
    "UPLOAD_YIELD_S",
    "DOWNLOAD_MEASUREMENT_INTERVAL_S",
    "UPLOAD_MEASUREMENT_INTERVAL_S",
    "STREAM_SAFETY_GRACE_MS",
    "STREAM_OPEN_TIMEOUT_S",
    "STREAM_CLOSE_TIMEOUT_S",
    "STREAM_WRITE_LIMIT",
    # defaults
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
    # locate
    "LOCATE_BASE_URL",
    "LOCATE_RESOURCE_PATH",
    "LOCATE_TIMEOUT_S",
]
