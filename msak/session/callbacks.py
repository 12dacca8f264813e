"""Caller-facing callback surface for one phase."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from ..errors import MsakError, ProtocolError
from ..state import PhaseResult, SessionResult, StreamEvent


def raise_error(error: MsakError) -> None:
    """Default error handler: an unhandled stream error is fatal."""
    raise error


@dataclass
class Callbacks:
    """Hooks invoked by a PhaseRunner. Each may be sync or async.

    Attributes:
        on_connect: Called with the connect StreamEvent of each stream.
        on_measurement: Called with every measurement StreamEvent.
        on_result: Called with the recomputed SessionResult after each
            measurement.
        on_error: Called with the TransportError of a failed stream. The
            default re-raises, which aborts the phase.
        on_protocol_error: Called with the ProtocolError of a malformed
            control message; the stream keeps running.
        on_complete: Called once with the PhaseResult after every stream
            has terminated.
    """

    on_connect: Callable[[StreamEvent], Awaitable[Any] | Any] | None = None
    on_measurement: Callable[[StreamEvent], Awaitable[Any] | Any] | None = None
    on_result: Callable[[SessionResult], Awaitable[Any] | Any] | None = None
    on_error: Callable[[MsakError], Awaitable[Any] | Any] | None = raise_error
    on_protocol_error: Callable[[ProtocolError], Awaitable[Any] | Any] | None = None
    on_complete: Callable[[PhaseResult], Awaitable[Any] | Any] | None = None


__all__ = ["Callbacks", "raise_error"]
