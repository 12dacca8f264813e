"""Phase-level aggregation of stream snapshots."""

from .aggregator import aggregate, goodput_bps

__all__ = ["aggregate", "goodput_bps"]
