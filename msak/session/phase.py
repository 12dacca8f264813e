"""Phase orchestrator: runs N streams of one direction and aggregates them.

Streams never share state. Each one reports StreamEvents on a queue owned
by the PhaseRunner, which is the only consumer and the only place the
phase's snapshots and aggregate are updated.
"""

from __future__ import annotations

import time
import asyncio
import logging
from collections.abc import Callable

from ..errors import MsakError
from ..helpers import invoke
from ..logging import log_context
from ..metrics import aggregate
from ..streams import ENGINES, PhaseClock
from ..streams.sockets import Connector
from ..telemetry import get_metrics, phase_span
from ..state import (
    EventKind,
    PhaseResult,
    StreamEvent,
    StreamRole,
    StreamSnapshot,
    TestConfig,
)
from .callbacks import Callbacks

logger = logging.getLogger(__name__)


class PhaseRunner:
    """Runs one download or upload phase against a single URL.

    Every call to ``run`` starts from fresh phase-scoped state, so the same
    runner never mixes counters across phases.
    """

    def __init__(
        self,
        role: StreamRole,
        url: str,
        config: TestConfig,
        callbacks: Callbacks | None = None,
        *,
        connector: Connector | None = None,
        now_fn: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.role = role
        self.url = url
        self.config = config
        self.callbacks = callbacks or Callbacks()
        self._connector = connector
        self._now = now_fn

    async def run(self) -> PhaseResult:
        """Run every stream to termination and return the phase outcome.

        Stream errors go to ``on_error`` as they arrive. If ``on_error``
        raises, the remaining streams are cancelled and the error propagates.
        """
        clock = PhaseClock()
        events: asyncio.Queue[StreamEvent] = asyncio.Queue()
        snapshots: dict[int, StreamSnapshot] = {}
        errors: list[MsakError] = []
        errored: set[int] = set()
        engine_cls = ENGINES[self.role]
        engines = [
            engine_cls(
                stream_id,
                self.url,
                self.config,
                events,
                clock,
                connector=self._connector,
                now_fn=self._now,
            )
            for stream_id in range(self.config.streams)
        ]

        with log_context(phase=self.role.value), phase_span(
            role=self.role.value,
            streams=self.config.streams,
            duration_ms=self.config.duration_ms,
        ):
            logger.info("Starting %d %s streams", self.config.streams, self.role.value)
            tasks = [
                asyncio.create_task(engine.run(), name=f"msak-{self.role.value}-{engine.stream_id}")
                for engine in engines
            ]
            pending = {engine.stream_id for engine in engines}
            last_timestamp = self._now()
            try:
                while pending:
                    event = await events.get()
                    last_timestamp = event.timestamp
                    if event.stream_id not in errored and event.snapshot is not None:
                        snapshots[event.stream_id] = event.snapshot
                    if event.kind is EventKind.ERROR:
                        errored.add(event.stream_id)
                        snapshots.pop(event.stream_id, None)
                    if event.kind.terminal:
                        pending.discard(event.stream_id)
                    await self._dispatch(event, clock, snapshots, errors)
                await asyncio.gather(*tasks)
            finally:
                for task in tasks:
                    if not task.done():
                        task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)

        result = PhaseResult(
            role=self.role,
            result=aggregate(snapshots.values(), clock.elapsed(last_timestamp)),
            streams=self.config.streams,
            snapshots=tuple(snapshots[key] for key in sorted(snapshots)),
            errors=tuple(errors),
            start_time=clock.start,
        )
        self._record_phase(result)
        logger.info(
            "%s phase complete: %.2f Mbit/s over %.2fs (%d/%d streams ok)",
            self.role.value.capitalize(),
            result.result.goodput_mbps,
            result.result.elapsed_seconds,
            self.config.streams - len(errors),
            self.config.streams,
        )
        await invoke(self.callbacks.on_complete, result)
        return result

    async def _dispatch(
        self,
        event: StreamEvent,
        clock: PhaseClock,
        snapshots: dict[int, StreamSnapshot],
        errors: list[MsakError],
    ) -> None:
        callbacks = self.callbacks
        metrics = get_metrics()
        attributes = {"role": self.role.value}

        if event.kind is EventKind.CONNECT:
            await invoke(callbacks.on_connect, event)
        elif event.kind is EventKind.MEASUREMENT:
            await invoke(callbacks.on_measurement, event)
            result = aggregate(snapshots.values(), clock.elapsed(event.timestamp))
            await invoke(callbacks.on_result, result)
        elif event.kind is EventKind.PROTOCOL_ERROR:
            metrics.protocol_errors_total.add(1, attributes)
            await invoke(callbacks.on_protocol_error, event.error)
        elif event.kind is EventKind.ERROR:
            metrics.stream_errors_total.add(1, attributes)
            if event.error is not None:
                errors.append(event.error)
                await invoke(callbacks.on_error, event.error)
        elif event.kind is EventKind.CLOSE:
            metrics.streams_completed_total.add(1, {**attributes, "timed_out": event.timed_out})
            if event.snapshot is not None:
                metrics.bytes_sent_total.add(event.snapshot.bytes_application_sent, attributes)
                metrics.bytes_received_total.add(event.snapshot.bytes_application_received, attributes)

    def _record_phase(self, phase: PhaseResult) -> None:
        metrics = get_metrics()
        attributes = {"role": self.role.value}
        metrics.goodput.record(phase.result.aggregate_goodput_bps, attributes)
        if phase.result.min_rtt is not None:
            metrics.min_rtt.record(phase.result.min_rtt, attributes)


__all__ = ["PhaseRunner"]
