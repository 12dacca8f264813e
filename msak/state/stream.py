"""Per-stream counters and their immutable snapshots."""

from __future__ import annotations

from dataclasses import dataclass

from .enums import StreamRole
from .sample import Sample, TransportInfo


@dataclass(frozen=True)
class StreamSnapshot:
    """Read-only copy of a StreamState handed to the aggregator."""

    stream_id: int
    role: StreamRole
    bytes_application_sent: int
    bytes_application_received: int
    peer_application_bytes_received: int | None
    last_server_info: TransportInfo | None
    terminal: bool

    @property
    def transferred_bytes(self) -> int:
        """Application bytes that count toward goodput for this stream's role."""
        if self.role is StreamRole.DOWNLOAD:
            return self.bytes_application_received
        if self.peer_application_bytes_received is not None:
            return self.peer_application_bytes_received
        return self.bytes_application_sent


@dataclass
class StreamState:
    """Mutable state owned by exactly one stream engine.

    Counters only move forward; use add_sent/add_received rather than
    assigning to them.
    """

    stream_id: int
    role: StreamRole
    bytes_application_sent: int = 0
    bytes_application_received: int = 0
    peer_application_bytes_received: int | None = None
    last_server_info: TransportInfo | None = None
    phase_start_time: float | None = None
    terminal: bool = False

    def add_sent(self, count: int) -> None:
        if count < 0:
            raise ValueError(f"sent byte count cannot decrease (got {count})")
        self.bytes_application_sent += count

    def add_received(self, count: int) -> None:
        if count < 0:
            raise ValueError(f"received byte count cannot decrease (got {count})")
        self.bytes_application_received += count

    def record_server_sample(self, sample: Sample) -> None:
        """Keep the latest peer-reported figures."""
        if sample.transport is not None:
            self.last_server_info = sample.transport
        previous = self.peer_application_bytes_received or 0
        self.peer_application_bytes_received = max(previous, sample.application_bytes_received)

    def snapshot(self) -> StreamSnapshot:
        return StreamSnapshot(
            stream_id=self.stream_id,
            role=self.role,
            bytes_application_sent=self.bytes_application_sent,
            bytes_application_received=self.bytes_application_received,
            peer_application_bytes_received=self.peer_application_bytes_received,
            last_server_info=self.last_server_info,
            terminal=self.terminal,
        )


__all__ = ["StreamState", "StreamSnapshot"]
