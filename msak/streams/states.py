"""Stream lifecycle states and the transitions allowed between them."""

from __future__ import annotations

from enum import Enum


class StreamStatus(str, Enum):
    """Lifecycle of one stream.

    INIT -> CONNECTING -> OPEN -> RUNNING -> CLOSING -> CLOSED, with ERRORED
    absorbing failures from CONNECTING, OPEN, or RUNNING.
    """

    INIT = "init"
    CONNECTING = "connecting"
    OPEN = "open"
    RUNNING = "running"
    CLOSING = "closing"
    CLOSED = "closed"
    ERRORED = "errored"

    @property
    def terminal(self) -> bool:
        return self in (StreamStatus.CLOSED, StreamStatus.ERRORED)

    def can_transition(self, target: StreamStatus) -> bool:
        return target in _TRANSITIONS[self]


_TRANSITIONS: dict[StreamStatus, frozenset[StreamStatus]] = {
    StreamStatus.INIT: frozenset({StreamStatus.CONNECTING}),
    StreamStatus.CONNECTING: frozenset({StreamStatus.OPEN, StreamStatus.ERRORED}),
    StreamStatus.OPEN: frozenset({StreamStatus.RUNNING, StreamStatus.ERRORED}),
    StreamStatus.RUNNING: frozenset({StreamStatus.CLOSING, StreamStatus.ERRORED}),
    StreamStatus.CLOSING: frozenset({StreamStatus.CLOSED}),
    StreamStatus.CLOSED: frozenset(),
    StreamStatus.ERRORED: frozenset(),
}


__all__ = ["StreamStatus"]
