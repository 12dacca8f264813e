"""Control message decoding errors."""

from __future__ import annotations

from .base import MsakError

_RAW_PREVIEW_CHARS = 120


class ProtocolError(MsakError):
    """Raised when an inbound control message cannot be decoded.

    The stream that received it keeps running; the error is local to it.
    """

    error_code = "invalid_measurement"

    def __init__(self, message: str, *, raw: str | bytes | None = None, stream_id: int | None = None) -> None:
        super().__init__(message)
        self.stream_id = stream_id
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8", errors="replace")
        self.raw = raw[:_RAW_PREVIEW_CHARS] if raw is not None else None

    def for_stream(self, stream_id: int) -> ProtocolError:
        """Return a copy attributed to ``stream_id``."""
        return ProtocolError(self.message, raw=self.raw, stream_id=stream_id)


__all__ = ["ProtocolError"]
