"""Dataclasses and enums shared across the measurement client."""

from .config import TestConfig
from .events import StreamEvent
from .endpoints import EndpointPair
from .sample import Sample, TransportInfo
from .stream import StreamState, StreamSnapshot
from .enums import EventKind, StreamRole, SampleSource
from .results import PhaseResult, SessionReport, SessionResult

__all__ = [
    "TestConfig",
    "EndpointPair",
    "StreamRole",
    "SampleSource",
    "EventKind",
    "Sample",
    "TransportInfo",
    "StreamState",
    "StreamSnapshot",
    "StreamEvent",
    "SessionResult",
    "PhaseResult",
    "SessionReport",
]
