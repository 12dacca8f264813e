"""Per-stream connection state machine shared by both directions.

A StreamEngine owns one socket for one direction of one stream. It drives
INIT -> CONNECTING -> OPEN -> RUNNING -> CLOSING -> CLOSED (or ERRORED) and
reports what happens as StreamEvents on the orchestrator's queue. Its
StreamState never leaves the engine; only immutable snapshots do.

Subclasses implement ``_run_role`` for the direction-specific behavior.
Both directions read inbound frames the same way: text frames are control
messages from the peer, binary frames count toward bytes received.
"""

from __future__ import annotations

import time
import asyncio
import logging
import contextlib
from collections.abc import Callable, Coroutine
from typing import Any

import websockets

from ..errors import ProtocolError, TransportError
from ..logging import log_context
from ..messages import decode_measurement, encode_measurement
from ..telemetry import stream_span
from ..config.protocol import STREAM_SAFETY_GRACE_MS
from ..state import (
    EventKind,
    Sample,
    SampleSource,
    StreamEvent,
    StreamRole,
    StreamState,
    TestConfig,
)
from .clock import PhaseClock
from .states import StreamStatus
from .timer import SafetyTimer
from .sockets import Connector, close_code, is_open, open_socket

logger = logging.getLogger(__name__)

_TRANSPORT_ERRORS = (websockets.WebSocketException, OSError, asyncio.TimeoutError)


def _describe(exc: BaseException) -> str:
    text = str(exc)
    if not text:
        return type(exc).__name__
    return f"{type(exc).__name__}: {text}"


class StreamEngine:
    """Runs one stream of one phase from connect to close.

    Attributes:
        role: Direction handled by the subclass.
        state: Counters owned by this engine.
        status: Current lifecycle state.
    """

    role: StreamRole

    def __init__(
        self,
        stream_id: int,
        url: str,
        config: TestConfig,
        events: asyncio.Queue[StreamEvent],
        clock: PhaseClock,
        *,
        connector: Connector | None = None,
        now_fn: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.state = StreamState(stream_id=stream_id, role=self.role)
        self.status = StreamStatus.INIT
        self._url = url
        self._config = config
        self._events = events
        self._clock = clock
        self._connector = connector
        self._now = now_fn
        self._global_start: float | None = None
        self._closing = False

    @property
    def stream_id(self) -> int:
        return self.state.stream_id

    @property
    def safety_timeout_s(self) -> float:
        return (self._config.duration_ms + STREAM_SAFETY_GRACE_MS) / 1000.0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def run(self) -> None:
        """Run the stream until it closes, errors, or the safety timer fires.

        Never raises for stream-level failures; they are reported as events.
        """
        with log_context(phase=self.role.value, stream_id=self.stream_id):
            with stream_span(stream_id=self.stream_id, role=self.role.value):
                work = asyncio.create_task(self._drive())
                timer = SafetyTimer(self.safety_timeout_s, on_expire=work.cancel)
                timer.start()
                try:
                    await work
                except asyncio.CancelledError:
                    if not timer.expired():
                        work.cancel()
                        raise
                    self._on_safety_timeout()
                except Exception as exc:  # noqa: BLE001
                    logger.exception("Stream worker failed unexpectedly")
                    if not self.state.terminal:
                        self.status = StreamStatus.ERRORED
                        self._report_error(exc)
                finally:
                    await timer.stop()

    async def _drive(self) -> None:
        self._transition(StreamStatus.CONNECTING)
        logger.debug("Connecting to %s", self._url)
        try:
            async with open_socket(self._url, self._connector) as ws:
                self._on_open()
                await self._run_role(ws)
                self._transition(StreamStatus.CLOSING)
        except websockets.ConnectionClosedOK:
            if self.status is StreamStatus.RUNNING:
                self._transition(StreamStatus.CLOSING)
        except _TRANSPORT_ERRORS as exc:
            if self.status is not StreamStatus.CLOSING:
                self._fail(exc)
                return
            logger.debug("Ignoring error raised while closing: %s", _describe(exc))
        self._complete(timed_out=False)

    def _on_open(self) -> None:
        connected_at = self._now()
        self.state.phase_start_time = connected_at
        self._global_start = self._clock.claim(connected_at)
        self._transition(StreamStatus.OPEN)
        logger.debug("Connected (global start %.6f)", self._global_start)
        self._emit(EventKind.CONNECT, timestamp=connected_at)
        self._transition(StreamStatus.RUNNING)

    def _on_safety_timeout(self) -> None:
        if self.status is StreamStatus.INIT:
            self._transition(StreamStatus.CONNECTING)
        if self.status is StreamStatus.CONNECTING:
            self._fail(asyncio.TimeoutError("no connection before the safety timeout"))
            return
        if self.status in (StreamStatus.OPEN, StreamStatus.RUNNING):
            if self.status is StreamStatus.OPEN:
                self._transition(StreamStatus.RUNNING)
            self._transition(StreamStatus.CLOSING)
        if self.status is StreamStatus.CLOSING:
            self._complete(timed_out=True)

    def _complete(self, *, timed_out: bool) -> None:
        self._transition(StreamStatus.CLOSED)
        self.state.terminal = True
        self._emit_measurement(self._client_sample())
        logger.info(
            "Stream closed%s: sent=%d received=%d",
            " by safety timer" if timed_out else "",
            self.state.bytes_application_sent,
            self.state.bytes_application_received,
        )
        self._emit(EventKind.CLOSE, timed_out=timed_out)

    def _fail(self, exc: BaseException) -> None:
        self._transition(StreamStatus.ERRORED)
        self._report_error(exc)

    def _report_error(self, exc: BaseException) -> None:
        error = TransportError(
            _describe(exc),
            stream_id=self.stream_id,
            role=self.role.value,
            code=close_code(exc),
        )
        self.state.terminal = True
        logger.warning("Stream failed: %s", error.description)
        self._emit(EventKind.ERROR, error=error)

    def _transition(self, target: StreamStatus) -> None:
        if not self.status.can_transition(target):
            raise RuntimeError(f"invalid stream transition {self.status.value} -> {target.value}")
        self.status = target

    # ------------------------------------------------------------------
    # Role behavior
    # ------------------------------------------------------------------

    async def _run_role(self, ws: Any) -> None:
        raise NotImplementedError

    async def _pump(self, reader: Coroutine[Any, Any, None], writer: Coroutine[Any, Any, None]) -> None:
        """Run the reader to completion with the writer alongside it.

        The socket closing ends the reader; the writer is then cancelled.
        """
        reader_task = asyncio.create_task(reader)
        writer_task = asyncio.create_task(writer)
        try:
            await reader_task
        finally:
            self._closing = True
            reader_task.cancel()
            writer_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await writer_task

    async def _receive(self, ws: Any) -> None:
        try:
            async for message in ws:
                if isinstance(message, str):
                    self._handle_control(message)
                else:
                    self.state.add_received(len(message))
        finally:
            self._closing = True

    def _handle_control(self, raw: str) -> None:
        try:
            sample = decode_measurement(raw, SampleSource.SERVER)
        except ProtocolError as exc:
            error = exc.for_stream(self.stream_id)
            logger.warning("Discarding malformed control message: %s", error.message)
            self._emit(EventKind.PROTOCOL_ERROR, error=error)
            return
        self.state.record_server_sample(sample)
        self._emit_measurement(sample)

    def _socket_usable(self, ws: Any) -> bool:
        return not self._closing and is_open(ws)

    def _control_fits(self, count: int) -> bool:
        return True

    async def _send_measurement(self, ws: Any) -> None:
        """Emit a client-side sample and send it to the peer as a control message.

        The message length counts toward bytes sent. Upload streams keep it off
        the wire when it would overshoot the byte limit.
        """
        sample = self._client_sample()
        self._emit_measurement(sample)
        text = encode_measurement(sample)
        if not self._control_fits(len(text)):
            return
        await ws.send(text)
        self.state.add_sent(len(text))

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def _client_sample(self) -> Sample:
        started = self.state.phase_start_time
        elapsed = 0.0 if started is None else max(0.0, self._now() - started)
        return Sample(
            source=SampleSource.CLIENT,
            application_bytes_sent=self.state.bytes_application_sent,
            application_bytes_received=self.state.bytes_application_received,
            elapsed_micros=int(elapsed * 1_000_000),
        )

    def _emit_measurement(self, sample: Sample) -> None:
        self._emit(EventKind.MEASUREMENT, sample=sample)

    def _emit(self, kind: EventKind, *, timestamp: float | None = None, **fields: Any) -> None:
        self._events.put_nowait(
            StreamEvent(
                kind=kind,
                stream_id=self.stream_id,
                role=self.role,
                timestamp=self._now() if timestamp is None else timestamp,
                snapshot=self.state.snapshot(),
                **fields,
            )
        )


__all__ = ["StreamEngine"]
