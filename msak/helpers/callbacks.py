"""Invocation of user callbacks that may be plain functions or coroutines."""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from typing import Any


async def invoke(callback: Callable[..., Awaitable[Any] | Any] | None, *args: Any) -> Any:
    """Call ``callback`` with ``args``, awaiting the result if needed."""
    if callback is None:
        return None
    result = callback(*args)
    if inspect.isawaitable(result):
        return await result
    return result


__all__ = ["invoke"]
