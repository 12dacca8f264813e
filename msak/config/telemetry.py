"""Telemetry configuration: env vars, metric specs, span names."""

import os

# ---------------------------------------------------------------------------
# OTel export
# ---------------------------------------------------------------------------
OTEL_SERVICE_NAME: str = os.getenv("OTEL_SERVICE_NAME", "msak-client")
OTEL_EXPORTER_OTLP_ENDPOINT: str = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "")
OTEL_EXPORTER_OTLP_HEADERS: str = os.getenv("OTEL_EXPORTER_OTLP_HEADERS", "")
OTEL_TRACES_EXPORT_INTERVAL_MS: int = int(os.getenv("OTEL_TRACES_EXPORT_INTERVAL_MS", "5000"))
OTEL_METRICS_EXPORT_INTERVAL_MS: int = int(os.getenv("OTEL_METRICS_EXPORT_INTERVAL_MS", "15000"))

# ---------------------------------------------------------------------------
# Metric definitions: (name, unit, description)
# ---------------------------------------------------------------------------

# Histograms
METRIC_GOODPUT = ("msak.goodput", "bit/s", "Aggregate phase goodput at completion")
METRIC_MIN_RTT = ("msak.min_rtt", "us", "Minimum RTT reported by the server")

# Counters
METRIC_BYTES_SENT_TOTAL = ("msak.bytes_sent_total", "By", "Application bytes sent")
METRIC_BYTES_RECEIVED_TOTAL = ("msak.bytes_received_total", "By", "Application bytes received")
METRIC_STREAM_ERRORS_TOTAL = ("msak.stream_errors_total", "{error}", "Streams that ended in error")
METRIC_PROTOCOL_ERRORS_TOTAL = ("msak.protocol_errors_total", "{message}", "Malformed control messages")
METRIC_STREAMS_COMPLETED_TOTAL = ("msak.streams_completed_total", "{stream}", "Streams closed normally")

# ---------------------------------------------------------------------------
# Span names
# ---------------------------------------------------------------------------
SPAN_PHASE = "msak.phase"
SPAN_STREAM = "msak.stream"

__all__ = [
    "OTEL_SERVICE_NAME",
    "OTEL_EXPORTER_OTLP_ENDPOINT",
    "OTEL_EXPORTER_OTLP_HEADERS",
    "OTEL_TRACES_EXPORT_INTERVAL_MS",
    "OTEL_METRICS_EXPORT_INTERVAL_MS",
    "METRIC_GOODPUT",
    "METRIC_MIN_RTT",
    "METRIC_BYTES_SENT_TOTAL",
    "METRIC_BYTES_RECEIVED_TOTAL",
    "METRIC_STREAM_ERRORS_TOTAL",
    "METRIC_PROTOCOL_ERRORS_TOTAL",
    "METRIC_STREAMS_COMPLETED_TOTAL",
    "SPAN_PHASE",
    "SPAN_STREAM",
]
