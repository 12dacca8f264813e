"""Wire-protocol constants for the throughput measurement sockets.

Sizing:
    UPLOAD_INITIAL_MESSAGE_SIZE: First binary frame size (2^13 bytes).
    UPLOAD_MAX_MESSAGE_SIZE: Frame size ceiling (2^23 bytes).
    UPLOAD_SCALING_FRACTION: The frame size doubles once the bytes sent
        exceed this many frames' worth at the current size.
    UPLOAD_BUFFER_FRAMES: Frames kept queued in the transport before the
        sender stops handing it more data.

Cadence:
    DOWNLOAD_MEASUREMENT_INTERVAL_S / UPLOAD_MEASUREMENT_INTERVAL_S: How often
        a client-side measurement is emitted and sent to the peer.

Lifecycle:
    STREAM_SAFETY_GRACE_MS: Added to the test duration to get the per-stream
        safety timeout; peers routinely close a little late.
"""

from __future__ import annotations

import os

# ============================================================================
# Sub-protocol and Paths
# ============================================================================

SUBPROTOCOL = "net.measurementlab.throughput.v1"
DOWNLOAD_PATH = "/throughput/v1/download"
UPLOAD_PATH = "/throughput/v1/upload"

# ============================================================================
# Upload Sizing
# ============================================================================

UPLOAD_INITIAL_MESSAGE_SIZE = 1 << 13  # 8 KiB
UPLOAD_MAX_MESSAGE_SIZE = 1 << 23  # 8 MiB
UPLOAD_SCALING_FRACTION = 16
UPLOAD_BUFFER_FRAMES = 7
UPLOAD_YIELD_S = float(os.getenv("MSAK_UPLOAD_YIELD_S", "0"))

# ============================================================================
# Measurement Cadence
# ============================================================================

DOWNLOAD_MEASUREMENT_INTERVAL_S = float(os.getenv("MSAK_DOWNLOAD_MEASUREMENT_INTERVAL_S", "0.1"))
UPLOAD_MEASUREMENT_INTERVAL_S = float(os.getenv("MSAK_UPLOAD_MEASUREMENT_INTERVAL_S", "0.25"))

# ============================================================================
# Socket Lifecycle
# ============================================================================

STREAM_SAFETY_GRACE_MS = 1000
STREAM_OPEN_TIMEOUT_S = float(os.getenv("MSAK_STREAM_OPEN_TIMEOUT_S", "10"))
STREAM_CLOSE_TIMEOUT_S = float(os.getenv("MSAK_STREAM_CLOSE_TIMEOUT_S", "1"))
# Above the worst-case queue depth so the sender's own buffer check governs.
STREAM_WRITE_LIMIT = (UPLOAD_BUFFER_FRAMES + 1) * UPLOAD_MAX_MESSAGE_SIZE

__all__ = [
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
]
