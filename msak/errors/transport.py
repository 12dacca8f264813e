"""Per-stream socket failures.

A TransportError is always attributed to exactly one stream. It is delivered
to the caller's error callback and never cancels sibling streams.
"""

from __future__ import annotations

from .base import MsakError


class TransportError(MsakError):
    """Socket-level failure on one stream.

    Attributes:
        stream_id: Index of the failed stream within its phase.
        role: "download" or "upload".
        code: WebSocket close code when the failure was an abnormal close.
    """

    error_code = "transport_error"

    def __init__(
        self,
        message: str,
        *,
        stream_id: int,
        role: str,
        code: int | None = None,
    ) -> None:
        super().__init__(f"stream #{stream_id} ({role}): {message}")
        self.stream_id = stream_id
        self.role = role
        self.code = code
        self.description = message


__all__ = ["TransportError"]
