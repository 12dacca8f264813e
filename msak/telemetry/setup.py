"""Telemetry lifecycle orchestration (init / shutdown)."""

from __future__ import annotations

import logging
from .otel import init_otel, shutdown_otel
from .instruments import initialize_metrics
from ..config.telemetry import OTEL_EXPORTER_OTLP_ENDPOINT

logger = logging.getLogger(__name__)


def init_telemetry() -> None:
    """Activate OTLP export when an endpoint is configured. Idempotent."""
    if OTEL_EXPORTER_OTLP_ENDPOINT:
        init_otel()
        initialize_metrics()
    else:
        logger.debug("OTel export disabled (OTEL_EXPORTER_OTLP_ENDPOINT not set)")


def shutdown_telemetry() -> None:
    """Flush and shutdown all telemetry backends. Idempotent."""
    shutdown_otel()


__all__ = ["init_telemetry", "shutdown_telemetry"]
