"""Unit tests for StreamState counters and snapshots."""

from __future__ import annotations

import pytest

from msak.state import Sample, SampleSource, StreamRole, StreamState, TransportInfo


def _server_sample(received: int, transport: TransportInfo | None = None) -> Sample:
    return Sample(
        source=SampleSource.SERVER,
        application_bytes_sent=0,
        application_bytes_received=received,
        elapsed_micros=1000,
        transport=transport,
    )


def test_counters_reject_negative_deltas() -> None:
    state = StreamState(stream_id=0, role=StreamRole.DOWNLOAD)
    state.add_received(10)
    state.add_sent(3)
    with pytest.raises(ValueError):
        state.add_received(-1)
    with pytest.raises(ValueError):
        state.add_sent(-1)
    assert state.bytes_application_received == 10
    assert state.bytes_application_sent == 3


def test_snapshot_is_detached_from_state() -> None:
    state = StreamState(stream_id=1, role=StreamRole.DOWNLOAD)
    state.add_received(100)
    snapshot = state.snapshot()
    state.add_received(50)
    assert snapshot.bytes_application_received == 100
    assert snapshot.transferred_bytes == 100


def test_server_sample_keeps_latest_transport_info() -> None:
    state = StreamState(stream_id=0, role=StreamRole.UPLOAD)
    first = TransportInfo(min_rtt=900)
    state.record_server_sample(_server_sample(10, first))
    state.record_server_sample(_server_sample(20))
    assert state.last_server_info == first
    assert state.peer_application_bytes_received == 20


def test_upload_transferred_prefers_peer_report() -> None:
    state = StreamState(stream_id=0, role=StreamRole.UPLOAD)
    state.add_sent(1000)
    assert state.snapshot().transferred_bytes == 1000
    state.record_server_sample(_server_sample(800))
    assert state.snapshot().transferred_bytes == 800


def test_peer_received_never_moves_backwards() -> None:
    state = StreamState(stream_id=0, role=StreamRole.UPLOAD)
    state.record_server_sample(_server_sample(500))
    state.record_server_sample(_server_sample(400))
    assert state.peer_application_bytes_received == 500
