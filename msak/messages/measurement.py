"""Control message codec for the measurement sockets.

Control messages are JSON text frames interleaved with binary bulk frames on
the same socket. Only text frames are ever decoded; binary frames carry
payload whose size is all that matters.

Wire shape (keys the client reads or writes):

    {
        "Application": {"BytesSent": 123, "BytesReceived": 456},
        "ElapsedTime": 250000,                # microseconds since connect
        "TCPInfo": {"MinRTT": 900, "BytesRetrans": 10, "BytesSent": 1000}
    }

``TCPInfo`` is optional and only present in server messages.
"""

from __future__ import annotations

import json
import math
from typing import Any

from ..errors import ProtocolError
from ..state import Sample, SampleSource, TransportInfo

_TRANSPORT_FIELDS = (
    ("MinRTT", "min_rtt"),
    ("BytesRetrans", "bytes_retrans"),
    ("BytesSent", "bytes_sent"),
)


def _as_counter(raw: str | bytes, value: Any, label: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ProtocolError(f"{label} must be a number, got {value!r}", raw=raw)
    if isinstance(value, float) and not (math.isfinite(value) and value.is_integer()):
        raise ProtocolError(f"{label} must be a whole number, got {value!r}", raw=raw)
    if value < 0:
        raise ProtocolError(f"{label} must be >= 0, got {value!r}", raw=raw)
    return int(value)


def _decode_transport(raw: str | bytes, info: Any) -> TransportInfo | None:
    if info is None:
        return None
    if not isinstance(info, dict):
        raise ProtocolError("TCPInfo must be a JSON object", raw=raw)
    values: dict[str, int] = {}
    for wire_key, attr in _TRANSPORT_FIELDS:
        if info.get(wire_key) is not None:
            values[attr] = _as_counter(raw, info[wire_key], f"TCPInfo.{wire_key}")
    if not values:
        return None
    return TransportInfo(**values)


def encode_measurement(sample: Sample) -> str:
    """Serialize a sample into a compact JSON control message."""
    payload: dict[str, Any] = {
        "Application": {
            "BytesSent": sample.application_bytes_sent,
            "BytesReceived": sample.application_bytes_received,
        },
        "ElapsedTime": sample.elapsed_micros,
    }
    transport = sample.transport
    if transport is not None:
        info = {
            wire_key: getattr(transport, attr)
            for wire_key, attr in _TRANSPORT_FIELDS
            if getattr(transport, attr) is not None
        }
        if info:
            payload["TCPInfo"] = info
    return json.dumps(payload, separators=(",", ":"))


def decode_measurement(raw: str | bytes, source: SampleSource = SampleSource.SERVER) -> Sample:
    """Parse one inbound control message into a Sample.

    Raises:
        ProtocolError: The message is not valid JSON, not an object, or is
            missing the application byte counters.
    """
    try:
        msg = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ProtocolError(f"Invalid JSON control message: {exc}", raw=raw) from exc

    if not isinstance(msg, dict):
        raise ProtocolError("Control message must be a JSON object", raw=raw)

    app = msg.get("Application")
    if not isinstance(app, dict):
        raise ProtocolError("Control message is missing 'Application' counters", raw=raw)

    transport_raw = msg.get("TCPInfo")
    elapsed = msg.get("ElapsedTime")
    if elapsed is None and isinstance(transport_raw, dict):
        elapsed = transport_raw.get("ElapsedTime")

    return Sample(
        source=source,
        application_bytes_sent=_as_counter(raw, app.get("BytesSent", 0), "Application.BytesSent"),
        application_bytes_received=_as_counter(raw, app.get("BytesReceived", 0), "Application.BytesReceived"),
        elapsed_micros=_as_counter(raw, elapsed if elapsed is not None else 0, "ElapsedTime"),
        transport=_decode_transport(raw, transport_raw),
    )


__all__ = ["encode_measurement", "decode_measurement"]
