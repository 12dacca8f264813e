"""Unit tests for the stream lifecycle transition table."""

from __future__ import annotations

import pytest

from msak.streams import StreamStatus

_HAPPY_PATH = [
    StreamStatus.INIT,
    StreamStatus.CONNECTING,
    StreamStatus.OPEN,
    StreamStatus.RUNNING,
    StreamStatus.CLOSING,
    StreamStatus.CLOSED,
]


def test_happy_path_transitions_are_allowed() -> None:
    for current, target in zip(_HAPPY_PATH, _HAPPY_PATH[1:]):
        assert current.can_transition(target)


@pytest.mark.parametrize("status", [StreamStatus.CONNECTING, StreamStatus.OPEN, StreamStatus.RUNNING])
def test_errored_reachable_from_active_states(status: StreamStatus) -> None:
    assert status.can_transition(StreamStatus.ERRORED)


@pytest.mark.parametrize("status", [StreamStatus.INIT, StreamStatus.CLOSING, StreamStatus.CLOSED])
def test_errored_not_reachable_elsewhere(status: StreamStatus) -> None:
    assert not status.can_transition(StreamStatus.ERRORED)


@pytest.mark.parametrize("status", [StreamStatus.CLOSED, StreamStatus.ERRORED])
def test_terminal_states_are_absorbing(status: StreamStatus) -> None:
    assert status.terminal
    assert not any(status.can_transition(target) for target in StreamStatus)


def test_skipping_states_is_rejected() -> None:
    assert not StreamStatus.INIT.can_transition(StreamStatus.RUNNING)
    assert not StreamStatus.RUNNING.can_transition(StreamStatus.CLOSED)
