"""Multi-stream WebSocket throughput measurement client.

The client drives parallel download and upload tests against a measurement
server speaking the ``net.measurementlab.throughput.v1`` sub-protocol,
collects client-observed and server-reported byte and latency statistics,
and derives aggregate goodput for each phase.

Architecture Overview:
    - config/: Configuration modules (environment-based)
    - state/: Dataclasses and enums for configs, samples, snapshots, results
    - messages/: JSON codec for control messages
    - streams/: Per-stream state machine, download and upload roles
    - metrics/: Aggregation of stream snapshots into phase results
    - session/: Phase orchestrator and the top-level Client
    - locate/: Server discovery
    - telemetry/: OpenTelemetry metrics and spans
    - scripts/: The msak-measure command-line entry point

Example:
    >>> import asyncio
    >>> from msak import Client, TestConfig
    >>> client = Client("my-app", "1.0", config=TestConfig(streams=2, scheme="ws"))
    >>> report = asyncio.run(client.start("localhost:8080"))  # doctest: +SKIP

Environment Variables:
    - MSAK_STREAMS, MSAK_DURATION_MS, MSAK_CC, MSAK_SCHEME, MSAK_BYTE_LIMIT:
      defaults for TestConfig
    - MSAK_LOCATE_BASE_URL, MSAK_LOCATE_TIMEOUT_S: discovery service
    - MSAK_LOG_LEVEL: log level used by configure_logging
    - OTEL_EXPORTER_OTLP_ENDPOINT: enables OTLP export when set
"""

from .errors import ConfigError, DiscoveryError, MsakError, ProtocolError, TransportError
from .session import Callbacks, Client, PhaseRunner
from .state import EndpointPair, PhaseResult, SessionReport, SessionResult, StreamRole, TestConfig

__all__ = [
    "Client",
    "PhaseRunner",
    "Callbacks",
    "TestConfig",
    "EndpointPair",
    "StreamRole",
    "SessionResult",
    "PhaseResult",
    "SessionReport",
    "MsakError",
    "ConfigError",
    "DiscoveryError",
    "TransportError",
    "ProtocolError",
]
