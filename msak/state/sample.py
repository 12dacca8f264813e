"""Point-in-time measurements exchanged as control messages."""

from __future__ import annotations

from dataclasses import dataclass

from .enums import SampleSource


@dataclass(frozen=True)
class TransportInfo:
    """Transport-level statistics reported by the peer's TCP stack.

    ``min_rtt`` is in microseconds, as the server reports it.
    """

    min_rtt: int | None = None
    bytes_retrans: int | None = None
    bytes_sent: int | None = None

    @property
    def has_retransmission_data(self) -> bool:
        return self.bytes_retrans is not None and self.bytes_sent is not None


@dataclass(frozen=True)
class Sample:
    """Cumulative counters at one instant.

    ``elapsed_micros`` is measured from the producing stream's own connect,
    not from the phase's global start time.
    """

    source: SampleSource
    application_bytes_sent: int
    application_bytes_received: int
    elapsed_micros: int
    transport: TransportInfo | None = None


__all__ = ["TransportInfo", "Sample"]
