"""Per-stream safety timer.

Peers do not always close the socket promptly at the end of a test. Each
stream arms a SafetyTimer when it starts; if the stream is still running
when the timer fires, the timer invokes its expiry callback (the engine
cancels its work and closes the socket) and the stream is reported as a
normal completion.

Usage:
    timer = SafetyTimer(timeout_s, on_expire=work_task.cancel)
    timer.start()
    ...
    await timer.stop()
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import contextlib
from collections.abc import Callable

logger = logging.getLogger(__name__)


class SafetyTimer:
    """One-shot timer that fires an expiry callback unless stopped first."""

    def __init__(self, timeout_s: float, on_expire: Callable[[], object]) -> None:
        self._timeout_s = max(0.0, float(timeout_s))
        self._on_expire = on_expire
        self._expired = False
        self._task: asyncio.Task | None = None

    @property
    def timeout_s(self) -> float:
        return self._timeout_s

    def expired(self) -> bool:
        """True once the timer has fired."""
        return self._expired

    def start(self) -> asyncio.Task:
        """Arm the timer (idempotent)."""
        if self._task is None:
            self._task = asyncio.create_task(self._run())
        return self._task

    async def stop(self) -> None:
        """Disarm the timer and wait for its task to finish."""
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None

    async def _run(self) -> None:
        try:
            await asyncio.sleep(self._timeout_s)
        except asyncio.CancelledError:
            return
        self._expired = True
        logger.info("Safety timeout of %.1fs reached; forcing stream closure", self._timeout_s)
        result = self._on_expire()
        if inspect.isawaitable(result):
            await result


__all__ = ["SafetyTimer"]
