"""Download direction: the peer sends, the client counts and reports."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import websockets

from ..state import StreamRole
from ..config.protocol import DOWNLOAD_MEASUREMENT_INTERVAL_S
from .base import StreamEngine

logger = logging.getLogger(__name__)


class DownloadStream(StreamEngine):
    """Receives binary frames until the peer closes the connection.

    While receiving, a client-side measurement is sent back to the peer
    every DOWNLOAD_MEASUREMENT_INTERVAL_S seconds.
    """

    role = StreamRole.DOWNLOAD

    async def _run_role(self, ws: Any) -> None:
        await self._pump(self._receive(ws), self._report(ws))

    async def _report(self, ws: Any) -> None:
        while self._socket_usable(ws):
            await asyncio.sleep(DOWNLOAD_MEASUREMENT_INTERVAL_S)
            if not self._socket_usable(ws):
                return
            try:
                await self._send_measurement(ws)
            except websockets.ConnectionClosed:
                logger.debug("Socket closed while sending a measurement")
                return


__all__ = ["DownloadStream"]
