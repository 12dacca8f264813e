"""Unit tests for the upload stream engine."""

from __future__ import annotations

import json
import time
import asyncio

from msak.state import EventKind, SampleSource, TestConfig
from msak.streams import PhaseClock, StreamStatus, UploadStream
from tests.helpers.events import kinds, run_engine
from tests.helpers.sockets import FakeConnector, FakeSocket


def _config(**overrides) -> TestConfig:
    values = {"streams": 1, "duration_ms": 2000, "scheme": "ws"}
    values.update(overrides)
    return TestConfig(**values)


def test_byte_limit_is_hit_exactly() -> None:
    async def _run():
        ws = FakeSocket(close_after_bytes=100_000)
        result = await run_engine(UploadStream, FakeConnector(ws), _config(byte_limit=100_000))
        return ws, result

    ws, (engine, events) = asyncio.run(_run())
    assert engine.status is StreamStatus.CLOSED
    assert ws.binary_sizes == [8192] * 12 + [100_000 - 12 * 8192]
    assert engine.state.bytes_application_sent == 100_000
    assert events[-1].kind is EventKind.CLOSE


def test_frames_grow_by_doubling_and_never_overshoot() -> None:
    limit = 3_000_000

    async def _run():
        ws = FakeSocket(close_after_bytes=limit)
        result = await run_engine(UploadStream, FakeConnector(ws), _config(byte_limit=limit))
        return ws, result

    ws, (engine, _) = asyncio.run(_run())
    sizes = ws.binary_sizes
    assert sizes[0] == 8192
    assert sum(sizes) == limit
    assert max(sizes) <= 1 << 23
    for previous, current in zip(sizes[:-1], sizes[1:-1]):
        assert current in (previous, previous * 2)
    assert engine.state.bytes_application_sent == limit


def test_full_transport_buffer_holds_back_frames() -> None:
    async def _run():
        ws = FakeSocket(buffered=7 * 8192)
        result = await run_engine(UploadStream, FakeConnector(ws), _config(duration_ms=100))
        return ws, result

    ws, (engine, events) = asyncio.run(_run())
    assert ws.binary_sizes == []
    assert engine.status is StreamStatus.CLOSED
    assert ws.close_calls >= 1
    assert not events[-1].timed_out


def test_sender_closes_socket_at_phase_deadline() -> None:
    async def _run():
        ws = FakeSocket()
        started = time.perf_counter()
        result = await run_engine(UploadStream, FakeConnector(ws), _config(duration_ms=300))
        return time.perf_counter() - started, ws, result

    elapsed, ws, (engine, events) = asyncio.run(_run())
    assert 0.3 <= elapsed < 1.0
    assert engine.status is StreamStatus.CLOSED
    assert ws.close_calls >= 1
    assert ws.texts, "a control message is sent every 250ms"
    assert set(json.loads(ws.texts[0])) == {"Application", "ElapsedTime"}
    assert not events[-1].timed_out
    assert engine.state.bytes_application_sent == sum(ws.binary_sizes) + sum(len(t) for t in ws.texts)


def test_deadline_uses_phase_start_not_own_connect() -> None:
    async def _run():
        clock = PhaseClock()
        clock.claim(time.perf_counter() - 10.0)
        ws = FakeSocket()
        result = await run_engine(UploadStream, FakeConnector(ws), _config(duration_ms=1000), clock=clock)
        return ws, result

    ws, (engine, events) = asyncio.run(_run())
    assert ws.binary_sizes == []
    assert engine.status is StreamStatus.CLOSED
    assert kinds(events)[0] is EventKind.CONNECT


def test_server_reports_become_server_samples() -> None:
    report = json.dumps(
        {
            "Application": {"BytesSent": 0, "BytesReceived": 8192},
            "TCPInfo": {"ElapsedTime": 5000, "MinRTT": 700, "BytesRetrans": 0, "BytesSent": 9000},
        }
    )

    async def _run():
        ws = FakeSocket(close_after_bytes=16_384)
        ws.feed(report)
        return await run_engine(UploadStream, FakeConnector(ws), _config(byte_limit=16_384))

    engine, events = asyncio.run(_run())
    server = [e.sample for e in events if e.kind is EventKind.MEASUREMENT and e.sample.source is SampleSource.SERVER]
    assert len(server) == 1
    assert server[0].transport.min_rtt == 700
    assert engine.state.snapshot().transferred_bytes == 8192
