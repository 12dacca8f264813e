"""OTLP/HTTP export for measurement spans and metrics.

Export is opt-in: ``init_otel`` is only called when
OTEL_EXPORTER_OTLP_ENDPOINT is set. Until then the opentelemetry API hands
out no-op tracers and meters, so instrumented code never checks.
"""

from __future__ import annotations

import logging

from opentelemetry import trace, metrics
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter

from ..config.defaults import LIBRARY_NAME, LIBRARY_VERSION
from ..config.telemetry import (
    OTEL_SERVICE_NAME,
    OTEL_EXPORTER_OTLP_ENDPOINT,
    OTEL_EXPORTER_OTLP_HEADERS,
    OTEL_TRACES_EXPORT_INTERVAL_MS,
    OTEL_METRICS_EXPORT_INTERVAL_MS,
)

logger = logging.getLogger(__name__)

_providers: tuple[TracerProvider, MeterProvider] | None = None


def parse_otlp_headers(raw: str) -> dict[str, str]:
    """Parse ``key=value,key2=value2`` into exporter headers, skipping blanks."""
    headers: dict[str, str] = {}
    for item in raw.split(","):
        key, sep, value = item.partition("=")
        if sep and key.strip():
            headers[key.strip()] = value.strip()
    return headers


def _tracer_provider(resource: Resource, endpoint: str, headers: dict[str, str]) -> TracerProvider:
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(
        BatchSpanProcessor(
            OTLPSpanExporter(endpoint=endpoint, headers=headers),
            schedule_delay_millis=OTEL_TRACES_EXPORT_INTERVAL_MS,
        )
    )
    return provider


def _meter_provider(resource: Resource, endpoint: str, headers: dict[str, str]) -> MeterProvider:
    reader = PeriodicExportingMetricReader(
        OTLPMetricExporter(endpoint=endpoint, headers=headers),
        export_interval_millis=OTEL_METRICS_EXPORT_INTERVAL_MS,
    )
    return MeterProvider(resource=resource, metric_readers=[reader])


def init_otel() -> None:
    """Register global tracer and meter providers. Idempotent."""
    global _providers  # noqa: PLW0603
    if _providers is not None:
        return

    resource = Resource.create(
        {
            "service.name": OTEL_SERVICE_NAME,
            "service.version": LIBRARY_VERSION,
            "service.namespace": LIBRARY_NAME,
        }
    )
    headers = parse_otlp_headers(OTEL_EXPORTER_OTLP_HEADERS)
    base = OTEL_EXPORTER_OTLP_ENDPOINT.rstrip("/")

    tracer_provider = _tracer_provider(resource, f"{base}/v1/traces", headers)
    meter_provider = _meter_provider(resource, f"{base}/v1/metrics", headers)
    trace.set_tracer_provider(tracer_provider)
    metrics.set_meter_provider(meter_provider)
    _providers = (tracer_provider, meter_provider)
    logger.info("OTel export enabled: %s", base)


def shutdown_otel() -> None:
    """Flush pending spans and metrics, then release the providers. Idempotent."""
    global _providers  # noqa: PLW0603
    if _providers is None:
        return
    for provider in _providers:
        provider.force_flush()
        provider.shutdown()
    _providers = None


__all__ = ["init_otel", "parse_otlp_headers", "shutdown_otel"]
