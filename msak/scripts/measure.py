#!/usr/bin/env python3
"""
Throughput measurement client: runs a download and/or upload phase against a
measurement server and prints aggregate goodput, retransmission ratio and
minimum RTT per phase.

Usage:
  msak-measure
  msak-measure --server localhost:8080 --scheme ws --streams 4
  msak-measure --phase upload --duration 10000 --metadata site=lab1

Env:
  MSAK_STREAMS=2
  MSAK_DURATION_MS=5000
  MSAK_CC=bbr|cubic
  MSAK_SCHEME=wss|ws
  MSAK_LOG_LEVEL=INFO
  OTEL_EXPORTER_OTLP_ENDPOINT=http://collector:4318 (optional)

Without --server the nearest server is found through the locate service.
"""

from __future__ import annotations

import asyncio
import logging
from argparse import ArgumentParser, ArgumentTypeError, Namespace

from ..errors import ConfigError, DiscoveryError, MsakError
from ..logging import configure_logging
from ..session import Callbacks, Client
from ..state import PhaseResult, SessionResult, TestConfig
from ..telemetry import init_telemetry, shutdown_telemetry
from ..config.defaults import (
    DEFAULT_CC,
    DEFAULT_SCHEME,
    DEFAULT_STREAMS,
    DEFAULT_BYTE_LIMIT,
    DEFAULT_DURATION_MS,
    SUPPORTED_SCHEMES,
    SUPPORTED_CC_ALGORITHMS,
)
from .reporting import format_phase, format_result_inline

logger = logging.getLogger("msak.scripts.measure")

PHASE_CHOICES = ("both", "download", "upload")
LOG_LEVEL_CHOICES = ("DEBUG", "INFO", "WARNING", "ERROR")


def _metadata_pair(value: str) -> tuple[str, str]:
    key, sep, item = value.partition("=")
    if not sep or not key:
        raise ArgumentTypeError(f"expected KEY=VALUE, got {value!r}")
    return key, item


def _parse_args(argv: list[str] | None = None) -> Namespace:
    parser = ArgumentParser(prog="msak-measure", description="Multi-stream throughput measurement client")
    parser.add_argument("--server", help="host[:port] of a measurement server (default: use the locate service)")
    parser.add_argument("--streams", type=int, default=DEFAULT_STREAMS, help="concurrent streams per phase (1-4)")
    parser.add_argument("--duration", type=int, default=DEFAULT_DURATION_MS, help="phase duration in milliseconds")
    parser.add_argument("--cc", default=DEFAULT_CC, choices=SUPPORTED_CC_ALGORITHMS, help="congestion control")
    parser.add_argument("--scheme", default=DEFAULT_SCHEME, choices=SUPPORTED_SCHEMES, help="ws or wss")
    parser.add_argument(
        "--bytes",
        dest="byte_limit",
        type=int,
        default=DEFAULT_BYTE_LIMIT,
        help="stop each stream after this many application bytes (0 = unlimited)",
    )
    parser.add_argument("--client-name", default="msak-measure", help="client name reported to the server")
    parser.add_argument("--client-version", default="0.1.0", help="client version reported to the server")
    parser.add_argument(
        "--metadata",
        action="append",
        type=_metadata_pair,
        default=[],
        metavar="KEY=VALUE",
        help="extra key/value forwarded to the server (repeatable)",
    )
    parser.add_argument("--phase", choices=PHASE_CHOICES, default="both", help="which phase(s) to run")
    parser.add_argument(
        "--log-level",
        dest="log_level",
        type=str.upper,
        choices=LOG_LEVEL_CHOICES,
        help="log level (default env MSAK_LOG_LEVEL or INFO)",
    )
    return parser.parse_args(argv)


def _log_error(error: MsakError) -> None:
    logger.error("%s", error.message)


def _log_result(result: SessionResult) -> None:
    logger.debug("%s", format_result_inline(result))


def _print_phase(phase: PhaseResult) -> None:
    print(format_phase(phase))


def _callbacks() -> Callbacks:
    return Callbacks(on_result=_log_result, on_error=_log_error, on_complete=_print_phase)


async def _run(args: Namespace) -> int:
    config = TestConfig(
        streams=args.streams,
        duration_ms=args.duration,
        cc=args.cc,
        scheme=args.scheme,
        byte_limit=args.byte_limit,
        metadata=dict(args.metadata),
    )
    client = Client(
        args.client_name,
        args.client_version,
        config=config,
        download_callbacks=_callbacks(),
        upload_callbacks=_callbacks(),
    )
    if args.phase == "both":
        report = await client.start(args.server)
        phases = [report.download, report.upload]
    else:
        endpoints = await client.resolve_endpoints(args.server)
        if args.phase == "download":
            phases = [await client.download(endpoints.download_url)]
        else:
            phases = [await client.upload(endpoints.upload_url)]
    return 0 if all(phase is not None and phase.ok for phase in phases) else 2


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    configure_logging(args.log_level)
    init_telemetry()
    try:
        return asyncio.run(_run(args))
    except (ConfigError, DiscoveryError) as exc:
        logger.error("%s (%s)", exc.message, exc.error_code)
        return 1
    except KeyboardInterrupt:
        return 130
    finally:
        shutdown_telemetry()


if __name__ == "__main__":
    raise SystemExit(main())
