"""MetricInstruments registry: typed accessors for all OTel instruments."""

from __future__ import annotations

import logging
from opentelemetry import metrics
from ..config.telemetry import (
    METRIC_GOODPUT,
    METRIC_MIN_RTT,
    OTEL_SERVICE_NAME,
    METRIC_BYTES_SENT_TOTAL,
    METRIC_STREAM_ERRORS_TOTAL,
    METRIC_BYTES_RECEIVED_TOTAL,
    METRIC_PROTOCOL_ERRORS_TOTAL,
    METRIC_STREAMS_COMPLETED_TOTAL,
)

logger = logging.getLogger(__name__)


def _histogram(meter: metrics.Meter, definition: tuple[str, str, str]) -> metrics.Histogram:
    name, unit, desc = definition
    return meter.create_histogram(name, unit=unit, description=desc)


def _counter(meter: metrics.Meter, definition: tuple[str, str, str]) -> metrics.Counter:
    name, unit, desc = definition
    return meter.create_counter(name, unit=unit, description=desc)


class MetricInstruments:
    """Holds all OTel metric instruments created from config specs."""

    __slots__ = (
        "goodput",
        "min_rtt",
        "bytes_sent_total",
        "bytes_received_total",
        "stream_errors_total",
        "protocol_errors_total",
        "streams_completed_total",
    )

    def __init__(self, meter: metrics.Meter) -> None:
        # Histograms
        self.goodput = _histogram(meter, METRIC_GOODPUT)
        self.min_rtt = _histogram(meter, METRIC_MIN_RTT)
        # Counters
        self.bytes_sent_total = _counter(meter, METRIC_BYTES_SENT_TOTAL)
        self.bytes_received_total = _counter(meter, METRIC_BYTES_RECEIVED_TOTAL)
        self.stream_errors_total = _counter(meter, METRIC_STREAM_ERRORS_TOTAL)
        self.protocol_errors_total = _counter(meter, METRIC_PROTOCOL_ERRORS_TOTAL)
        self.streams_completed_total = _counter(meter, METRIC_STREAMS_COMPLETED_TOTAL)


_metrics: MetricInstruments | None = None


def get_metrics() -> MetricInstruments:
    """Return the global MetricInstruments (no-op meter if OTel not initialized)."""
    global _metrics  # noqa: PLW0603
    if _metrics is None:
        meter = metrics.get_meter(OTEL_SERVICE_NAME)
        _metrics = MetricInstruments(meter)
    return _metrics


def initialize_metrics() -> None:
    """Recreate MetricInstruments from the (now configured) global meter."""
    global _metrics  # noqa: PLW0603
    meter = metrics.get_meter(OTEL_SERVICE_NAME)
    _metrics = MetricInstruments(meter)
    logger.info("Telemetry metrics initialized")


__all__ = ["MetricInstruments", "get_metrics", "initialize_metrics"]
