"""Upload direction: the client sends, the peer reports what it received."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import websockets

from ..state import StreamRole
from ..config.protocol import UPLOAD_MEASUREMENT_INTERVAL_S, UPLOAD_YIELD_S
from .base import StreamEngine
from .sizing import MessageSizer
from .sockets import buffered_amount

logger = logging.getLogger(__name__)


class UploadStream(StreamEngine):
    """Sends binary frames until the phase deadline or the byte limit.

    Frames are only handed to the socket while its outbound buffer holds
    less than a few frames' worth of data, so the buffer never grows without
    bound. The deadline is measured from the phase-wide start, not from this
    stream's own connect.
    """

    role = StreamRole.UPLOAD

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.sizer = MessageSizer(self._config.byte_limit)

    async def _run_role(self, ws: Any) -> None:
        await self._pump(self._receive(ws), self._send_loop(ws))

    def _control_fits(self, count: int) -> bool:
        # Control messages share the byte budget with bulk frames.
        return self.sizer.fits(self.state.bytes_application_sent, count)

    def _deadline(self) -> float:
        start = self._global_start
        if start is None:
            start = self.state.phase_start_time or self._now()
        return start + self._config.duration_s

    async def _send_loop(self, ws: Any) -> None:
        deadline = self._deadline()
        payload = bytes(self.sizer.size)
        last_report = self._now()
        try:
            while self._socket_usable(ws):
                now = self._now()
                if now >= deadline:
                    logger.debug("Upload duration elapsed; closing socket")
                    self._closing = True
                    await ws.close()
                    return

                sent = self.state.bytes_application_sent
                if self.sizer.limit_reached(sent):
                    logger.debug("Byte limit of %d reached", self.sizer.byte_limit)
                    return

                if buffered_amount(ws) < self.sizer.target_buffer:
                    size = self.sizer.frame_size(sent)
                    if len(payload) != self.sizer.size:
                        payload = bytes(self.sizer.size)
                    frame = payload if size == len(payload) else payload[:size]
                    await ws.send(frame)
                    self.state.add_sent(size)
                    self.sizer.grow(self.state.bytes_application_sent)

                if now - last_report >= UPLOAD_MEASUREMENT_INTERVAL_S:
                    last_report = now
                    await self._send_measurement(ws)

                await asyncio.sleep(UPLOAD_YIELD_S)
        except websockets.ConnectionClosed:
            logger.debug("Socket closed while uploading")


__all__ = ["UploadStream"]
