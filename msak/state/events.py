"""Typed events flowing from stream workers to the phase orchestrator."""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import MsakError
from .sample import Sample
from .stream import StreamSnapshot
from .enums import EventKind, StreamRole


@dataclass(frozen=True)
class StreamEvent:
    """One message from a stream to its orchestrator.

    Attributes:
        kind: What happened.
        stream_id: Index of the emitting stream.
        role: Direction of the emitting stream.
        timestamp: Monotonic clock reading when the event was produced.
        sample: Measurement carried by measurement events.
        snapshot: Counter snapshot taken when the event was produced.
        error: TransportError for error events, ProtocolError for
            protocol_error events.
        timed_out: Set on close events when the safety timer forced closure.
    """

    kind: EventKind
    stream_id: int
    role: StreamRole
    timestamp: float
    sample: Sample | None = None
    snapshot: StreamSnapshot | None = None
    error: MsakError | None = None
    timed_out: bool = False


__all__ = ["StreamEvent"]
