"""Scripted stand-ins for measurement sockets.

FakeSocket mimics the parts of a ``websockets`` client connection the
stream engines use. Inbound frames are scripted up front (or fed later);
outbound frames are recorded, binary frames by length only.
"""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import AsyncIterator, Iterable
from typing import Any

from websockets.exceptions import ConnectionClosedOK
from websockets.protocol import State

CLOSE = object()
HANG = object()


class FakeTransport:
    def __init__(self, buffered: int = 0) -> None:
        self.buffered = buffered

    def get_write_buffer_size(self) -> int:
        return self.buffered


class FakeSocket:
    """Socket whose inbound side is a script of frames.

    Script items are ``str`` (text frame), ``bytes`` (binary frame),
    ``CLOSE`` (peer closes normally) or an exception instance (raised from
    the receive side, e.g. an abnormal closure).

    Args:
        inbound: Initial script.
        buffered: Value reported as the transport's write buffer size.
        close_after_bytes: Peer closes once this many binary bytes arrived.
    """

    def __init__(
        self,
        inbound: Iterable[Any] = (),
        *,
        buffered: int = 0,
        close_after_bytes: int | None = None,
    ) -> None:
        self._inbound: asyncio.Queue[Any] = asyncio.Queue()
        for item in inbound:
            self._inbound.put_nowait(item)
        self.transport = FakeTransport(buffered)
        self.state = State.OPEN
        self.sent: list[int | str] = []
        self.close_calls = 0
        self._close_after_bytes = close_after_bytes

    @property
    def binary_sizes(self) -> list[int]:
        return [item for item in self.sent if isinstance(item, int)]

    @property
    def texts(self) -> list[str]:
        return [item for item in self.sent if isinstance(item, str)]

    def feed(self, item: Any) -> None:
        self._inbound.put_nowait(item)

    async def send(self, data: str | bytes) -> None:
        if self.state is not State.OPEN:
            raise ConnectionClosedOK(None, None)
        if isinstance(data, str):
            self.sent.append(data)
            return
        self.sent.append(len(data))
        if self._close_after_bytes is not None and sum(self.binary_sizes) >= self._close_after_bytes:
            self.feed(CLOSE)

    async def close(self) -> None:
        self.close_calls += 1
        if self.state is State.OPEN:
            self.state = State.CLOSING
            self.feed(CLOSE)

    def __aiter__(self) -> FakeSocket:
        return self

    async def __anext__(self) -> str | bytes:
        item = await self._inbound.get()
        if item is CLOSE:
            self.state = State.CLOSED
            raise StopAsyncIteration
        if isinstance(item, BaseException):
            self.state = State.CLOSED
            raise item
        return item


class FakeConnector:
    """Connector handing out scripted sockets in connection order.

    Items are FakeSocket instances, exceptions (raised on connect) or HANG
    (the connection attempt never completes).
    """

    def __init__(self, *items: Any) -> None:
        self._items = list(items)
        self.urls: list[str] = []

    def __call__(self, url: str) -> contextlib.AbstractAsyncContextManager:
        self.urls.append(url)
        return _connect(self._items.pop(0))


@contextlib.asynccontextmanager
async def _connect(item: Any) -> AsyncIterator[Any]:
    if item is HANG:
        await asyncio.sleep(3600)
    if isinstance(item, BaseException):
        raise item
    try:
        yield item
    finally:
        await item.close()


__all__ = ["CLOSE", "HANG", "FakeSocket", "FakeConnector", "FakeTransport"]
