"""Logging context helpers for consistent structured fields.

Every stream runs in its own asyncio task, and tasks copy the context they
were created in, so a stream can set its phase and stream id once and every
record it logs carries them.
"""

from __future__ import annotations

import logging
import contextlib
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import Token, ContextVar

_PHASE: ContextVar[str] = ContextVar("phase", default="-")
_STREAM_ID: ContextVar[str] = ContextVar("stream_id", default="-")


def set_log_context(
    *,
    phase: str | None = None,
    stream_id: int | str | None = None,
) -> list[tuple[ContextVar[str], Token[str]]]:
    """Set log context values and return tokens for reset."""
    tokens: list[tuple[ContextVar[str], Token[str]]] = []
    if phase is not None:
        tokens.append((_PHASE, _PHASE.set(phase)))
    if stream_id is not None:
        tokens.append((_STREAM_ID, _STREAM_ID.set(str(stream_id))))
    return tokens


def reset_log_context(tokens: list[tuple[ContextVar[str], Token[str]]]) -> None:
    """Reset log context values using tokens returned by set_log_context."""
    for var, token in reversed(tokens):
        var.reset(token)


@contextmanager
def log_context(
    *,
    phase: str | None = None,
    stream_id: int | str | None = None,
) -> Iterator[None]:
    """Context manager for applying log fields within a block."""
    tokens = set_log_context(phase=phase, stream_id=stream_id)
    try:
        yield
    finally:
        reset_log_context(tokens)


def install_log_context() -> None:
    """Install a LogRecord factory that injects context fields."""
    if getattr(install_log_context, "_installed", False):
        return

    old_factory = logging.getLogRecordFactory()

    def record_factory(*args, **kwargs):
        record = old_factory(*args, **kwargs)
        record.phase = _PHASE.get()
        record.stream_id = _STREAM_ID.get()
        return record

    logging.setLogRecordFactory(record_factory)
    install_log_context._installed = True  # type: ignore[attr-defined]


def configure_logging(level: str | None = None) -> None:
    """Initialize root logging configuration once per process."""
    from msak.config.logging import APP_LOG_LEVEL, APP_LOG_FORMAT, APP_LOG_DATEFMT  # noqa: PLC0415

    resolved = (level or APP_LOG_LEVEL).upper()
    install_log_context()
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(level=resolved, format=APP_LOG_FORMAT, datefmt=APP_LOG_DATEFMT)
    else:
        root_logger.setLevel(resolved)
        for handler in root_logger.handlers:
            with contextlib.suppress(Exception):
                handler.setLevel(resolved)
                handler.setFormatter(logging.Formatter(APP_LOG_FORMAT, datefmt=APP_LOG_DATEFMT))

    logging.getLogger("msak").setLevel(resolved)
    # The socket library logs every frame at DEBUG.
    logging.getLogger("websockets").setLevel(max(logging.INFO, logging.getLevelName(resolved)))


__all__ = [
    "install_log_context",
    "log_context",
    "reset_log_context",
    "set_log_context",
    "configure_logging",
]
