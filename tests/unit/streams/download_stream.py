"""Unit tests for the download stream engine."""

from __future__ import annotations

import json
import time
import asyncio

import pytest
from websockets.exceptions import ConnectionClosedError
from websockets.frames import Close

from msak.errors import ProtocolError, TransportError
from msak.state import EventKind, SampleSource, TestConfig
from msak.streams import DownloadStream, StreamStatus
from tests.helpers.events import kinds, run_engine
from tests.helpers.sockets import CLOSE, HANG, FakeConnector, FakeSocket

_SERVER_MESSAGE = json.dumps(
    {
        "Application": {"BytesSent": 1500, "BytesReceived": 0},
        "TCPInfo": {"ElapsedTime": 1000, "MinRTT": 900, "BytesRetrans": 10, "BytesSent": 1000},
    }
)


def _config(**overrides) -> TestConfig:
    values = {"streams": 1, "duration_ms": 1000, "scheme": "ws"}
    values.update(overrides)
    return TestConfig(**values)


def test_download_counts_binary_frames_and_closes_normally() -> None:
    async def _run():
        ws = FakeSocket([b"x" * 1000, _SERVER_MESSAGE, b"y" * 500, CLOSE])
        return await run_engine(DownloadStream, FakeConnector(ws), _config())

    engine, events = asyncio.run(_run())
    assert engine.status is StreamStatus.CLOSED
    assert engine.state.bytes_application_received == 1500
    assert kinds(events) == [
        EventKind.CONNECT,
        EventKind.MEASUREMENT,
        EventKind.MEASUREMENT,
        EventKind.CLOSE,
    ]
    server_sample, final_sample = events[1].sample, events[2].sample
    assert server_sample.source is SampleSource.SERVER
    assert server_sample.transport.min_rtt == 900
    assert final_sample.source is SampleSource.CLIENT
    assert final_sample.application_bytes_received == 1500
    assert events[-1].snapshot.terminal
    assert events[-1].snapshot.last_server_info.bytes_retrans == 10
    assert not events[-1].timed_out


def test_download_ticker_reports_to_peer() -> None:
    async def _run():
        ws = FakeSocket()

        async def close_later() -> None:
            await asyncio.sleep(0.35)
            ws.feed(CLOSE)

        closer = asyncio.create_task(close_later())
        result = await run_engine(DownloadStream, FakeConnector(ws), _config())
        await closer
        return ws, result

    ws, (engine, events) = asyncio.run(_run())
    assert len(ws.texts) >= 2
    reported = json.loads(ws.texts[0])
    assert set(reported) == {"Application", "ElapsedTime"}
    assert engine.state.bytes_application_sent == sum(len(text) for text in ws.texts)
    client_samples = [e for e in events if e.kind is EventKind.MEASUREMENT]
    assert len(client_samples) == len(ws.texts) + 1


def test_download_keeps_reporting_past_the_byte_limit() -> None:
    async def _run():
        ws = FakeSocket()

        async def close_later() -> None:
            await asyncio.sleep(0.35)
            ws.feed(CLOSE)

        closer = asyncio.create_task(close_later())
        result = await run_engine(DownloadStream, FakeConnector(ws), _config(byte_limit=16))
        await closer
        return ws, result

    ws, (engine, _events) = asyncio.run(_run())
    assert len(ws.texts) >= 2
    assert engine.state.bytes_application_sent > 16
    assert engine.status is StreamStatus.CLOSED


@pytest.mark.parametrize(
    "raw",
    [
        "{not json",
        '{"Application": {"BytesSent": NaN}}',
        '{"Application": {"BytesReceived": 1e400}}',
        '{"Application": {"BytesSent": 1.5}}',
    ],
)
def test_malformed_control_message_keeps_stream_running(raw: str) -> None:
    async def _run():
        ws = FakeSocket([raw, b"z" * 10, CLOSE])
        return await run_engine(DownloadStream, FakeConnector(ws), _config())

    engine, events = asyncio.run(_run())
    assert engine.status is StreamStatus.CLOSED
    protocol_errors = [e for e in events if e.kind is EventKind.PROTOCOL_ERROR]
    assert len(protocol_errors) == 1
    assert isinstance(protocol_errors[0].error, ProtocolError)
    assert protocol_errors[0].error.stream_id == 0
    assert engine.state.bytes_application_received == 10
    assert events[-1].kind is EventKind.CLOSE


def test_abnormal_closure_is_a_transport_error_without_close_event() -> None:
    async def _run():
        ws = FakeSocket([b"a" * 64, ConnectionClosedError(Close(1011, "internal error"), None)])
        return await run_engine(DownloadStream, FakeConnector(ws), _config(), stream_id=2)

    engine, events = asyncio.run(_run())
    assert engine.status is StreamStatus.ERRORED
    assert kinds(events) == [EventKind.CONNECT, EventKind.ERROR]
    error = events[-1].error
    assert isinstance(error, TransportError)
    assert error.stream_id == 2
    assert error.role == "download"
    assert error.code == 1011


def test_connect_failure_is_a_transport_error() -> None:
    async def _run():
        return await run_engine(DownloadStream, FakeConnector(ConnectionRefusedError("refused")), _config())

    engine, events = asyncio.run(_run())
    assert engine.status is StreamStatus.ERRORED
    assert kinds(events) == [EventKind.ERROR]
    assert "refused" in events[0].error.message


def test_peer_that_never_closes_is_force_closed_as_normal_completion() -> None:
    async def _run():
        ws = FakeSocket([b"q" * 100])
        started = time.perf_counter()
        result = await run_engine(DownloadStream, FakeConnector(ws), _config(duration_ms=200))
        return time.perf_counter() - started, result

    elapsed, (engine, events) = asyncio.run(_run())
    assert engine.status is StreamStatus.CLOSED
    assert 1.2 <= elapsed < 2.0
    assert events[-1].kind is EventKind.CLOSE
    assert events[-1].timed_out
    assert not any(e.kind is EventKind.ERROR for e in events)
    assert events[-2].sample.application_bytes_received == 100


def test_connect_that_never_completes_errors_at_safety_timeout() -> None:
    async def _run():
        return await run_engine(DownloadStream, FakeConnector(HANG), _config(duration_ms=100))

    engine, events = asyncio.run(_run())
    assert engine.status is StreamStatus.ERRORED
    assert kinds(events) == [EventKind.ERROR]
