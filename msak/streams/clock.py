"""Phase-wide start time shared by every stream of a phase."""

from __future__ import annotations

import threading


class PhaseClock:
    """Holds the global start time of one phase.

    The first stream to connect fixes the start; later claims return the
    already-fixed value. The check-and-set happens under a lock so the rule
    holds even if claims come from different threads.
    """

    def __init__(self) -> None:
        self._start: float | None = None
        self._lock = threading.Lock()

    @property
    def start(self) -> float | None:
        return self._start

    def claim(self, timestamp: float) -> float:
        """Fix the start at ``timestamp`` unless already fixed; return the start."""
        with self._lock:
            if self._start is None:
                self._start = timestamp
            return self._start

    def elapsed(self, now: float) -> float:
        """Seconds since the start, or 0.0 if no stream has connected yet."""
        if self._start is None:
            return 0.0
        return max(0.0, now - self._start)


__all__ = ["PhaseClock"]
