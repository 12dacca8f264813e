"""Aggregate goodput, retransmission and latency across a phase's streams.

The aggregate is recomputed from scratch from the latest snapshot of every
contributing stream each time a sample arrives; nothing is accumulated
between calls.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..state import SessionResult, StreamSnapshot


def goodput_bps(transferred_bytes: int, elapsed_seconds: float) -> float:
    """Bits per second, or 0.0 when no time has elapsed."""
    if elapsed_seconds <= 0:
        return 0.0
    return transferred_bytes * 8 / elapsed_seconds


def aggregate(snapshots: Iterable[StreamSnapshot], elapsed_seconds: float) -> SessionResult:
    """Combine per-stream snapshots into one SessionResult.

    Args:
        snapshots: Latest snapshot of each stream that should contribute.
        elapsed_seconds: Time since the phase's global start.

    Returns:
        SessionResult with goodput in bit/s. ``retransmission_ratio`` is None
        unless some stream reported both retransmitted and sent byte counts
        with a non-zero total; ``min_rtt`` is None unless some stream
        reported one.
    """
    transferred = 0
    retrans = 0
    transport_sent = 0
    has_retrans = False
    min_rtt: int | None = None
    count = 0

    for snapshot in snapshots:
        count += 1
        transferred += snapshot.transferred_bytes
        info = snapshot.last_server_info
        if info is None:
            continue
        if info.has_retransmission_data:
            has_retrans = True
            retrans += info.bytes_retrans or 0
            transport_sent += info.bytes_sent or 0
        if info.min_rtt is not None and (min_rtt is None or info.min_rtt < min_rtt):
            min_rtt = info.min_rtt

    ratio = retrans / transport_sent if has_retrans and transport_sent > 0 else None
    return SessionResult(
        elapsed_seconds=max(0.0, elapsed_seconds),
        aggregate_goodput_bps=goodput_bps(transferred, elapsed_seconds),
        retransmission_ratio=ratio,
        min_rtt=min_rtt,
        contributing_streams=count,
    )


__all__ = ["aggregate", "goodput_bps"]
