"""Span context managers for phase and stream tracing."""

from __future__ import annotations

from opentelemetry import trace
from collections.abc import Iterator
from contextlib import contextmanager
from ..config.telemetry import SPAN_PHASE, SPAN_STREAM, OTEL_SERVICE_NAME


def _tracer() -> trace.Tracer:
    return trace.get_tracer(OTEL_SERVICE_NAME)


@contextmanager
def phase_span(*, role: str, streams: int, duration_ms: int) -> Iterator[trace.Span]:
    """Span wrapping every stream of one download or upload phase."""
    with _tracer().start_as_current_span(
        SPAN_PHASE,
        attributes={"phase.role": role, "phase.streams": streams, "phase.duration_ms": duration_ms},
    ) as span:
        yield span


@contextmanager
def stream_span(*, stream_id: int, role: str) -> Iterator[trace.Span]:
    """Per-stream span, from connect attempt to close or error."""
    with _tracer().start_as_current_span(
        SPAN_STREAM,
        attributes={"stream.id": stream_id, "stream.role": role},
    ) as span:
        yield span


__all__ = ["phase_span", "stream_span"]
