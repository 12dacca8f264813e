"""Public telemetry API: re-exports for convenience."""

from .traces import phase_span, stream_span
from .setup import init_telemetry, shutdown_telemetry
from .instruments import get_metrics, initialize_metrics

__all__ = [
    "init_telemetry",
    "shutdown_telemetry",
    "get_metrics",
    "initialize_metrics",
    "phase_span",
    "stream_span",
]
