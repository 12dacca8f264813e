"""Enumerations shared by the stream engine and the orchestrator."""

from __future__ import annotations

from enum import Enum


class StreamRole(str, Enum):
    """Direction of a stream."""

    DOWNLOAD = "download"
    UPLOAD = "upload"


class SampleSource(str, Enum):
    """Who produced a measurement."""

    CLIENT = "client"
    SERVER = "server"


class EventKind(str, Enum):
    """Kinds of events a stream emits to its orchestrator.

    Within one stream the order is connect, zero or more measurement /
    protocol_error, then exactly one of error or close.
    """

    CONNECT = "connect"
    MEASUREMENT = "measurement"
    PROTOCOL_ERROR = "protocol_error"
    ERROR = "error"
    CLOSE = "close"

    @property
    def terminal(self) -> bool:
        return self in (EventKind.ERROR, EventKind.CLOSE)


__all__ = ["StreamRole", "SampleSource", "EventKind"]
