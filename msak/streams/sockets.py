"""Measurement socket helpers.

Streams talk to a small socket surface: ``send``, async iteration (or
``recv``), ``close``, an optional ``transport`` for buffer accounting, and an
optional ``state``. ``websockets`` client connections provide all of it; a
custom ``connector`` can substitute any object that does.
"""

from __future__ import annotations

import contextlib
from collections.abc import Callable
from typing import Any

import websockets
from websockets.protocol import State

from ..config.protocol import (
    SUBPROTOCOL,
    STREAM_WRITE_LIMIT,
    STREAM_OPEN_TIMEOUT_S,
    STREAM_CLOSE_TIMEOUT_S,
)

Connector = Callable[[str], contextlib.AbstractAsyncContextManager]


def open_socket(url: str, connector: Connector | None = None) -> contextlib.AbstractAsyncContextManager:
    """Return an async context manager yielding an open measurement socket.

    Frames can be up to several MiB, so the default inbound size cap is
    lifted. Compression would only burn CPU on incompressible payloads.
    """
    if connector is not None:
        return connector(url)
    return websockets.connect(
        url,
        subprotocols=[SUBPROTOCOL],
        max_size=None,
        max_queue=None,
        compression=None,
        write_limit=STREAM_WRITE_LIMIT,
        open_timeout=STREAM_OPEN_TIMEOUT_S,
        close_timeout=STREAM_CLOSE_TIMEOUT_S,
        ping_interval=None,
    )


def buffered_amount(ws: Any) -> int:
    """Bytes handed to the socket but not yet written to the network."""
    transport = getattr(ws, "transport", None)
    if transport is None:
        return 0
    return transport.get_write_buffer_size()


def is_open(ws: Any) -> bool:
    """False once the socket has started closing."""
    state = getattr(ws, "state", None)
    return state is None or state is State.OPEN


def close_code(exc: BaseException) -> int | None:
    """Close code received from the peer, if the error carries one."""
    rcvd = getattr(exc, "rcvd", None)
    if rcvd is None:
        return None
    return getattr(rcvd, "code", None)


__all__ = ["Connector", "open_socket", "buffered_amount", "is_open", "close_code"]
