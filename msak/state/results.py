"""Aggregate results for a phase and a whole session."""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import MsakError
from .enums import StreamRole
from .stream import StreamSnapshot


@dataclass(frozen=True)
class SessionResult:
    """Aggregate view of one phase, recomputed from the current snapshots.

    ``retransmission_ratio`` and ``min_rtt`` are None until at least one
    stream has reported transport statistics.
    """

    elapsed_seconds: float
    aggregate_goodput_bps: float
    retransmission_ratio: float | None = None
    min_rtt: int | None = None
    contributing_streams: int = 0

    @property
    def goodput_mbps(self) -> float:
        return self.aggregate_goodput_bps / 1_000_000


@dataclass(frozen=True)
class PhaseResult:
    """Outcome of one phase after every stream has terminated."""

    role: StreamRole
    result: SessionResult
    streams: int
    snapshots: tuple[StreamSnapshot, ...] = ()
    errors: tuple[MsakError, ...] = ()
    start_time: float | None = None

    @property
    def ok(self) -> bool:
        """True when at least one stream finished without error."""
        return len(self.errors) < self.streams


@dataclass(frozen=True)
class SessionReport:
    """Download and upload phase outcomes of a full session."""

    download: PhaseResult | None = None
    upload: PhaseResult | None = None


__all__ = ["SessionResult", "PhaseResult", "SessionReport"]
