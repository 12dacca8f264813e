"""Adaptive frame sizing for the upload sender.

The sender cannot know the link speed ahead of time. Small frames are needed
to measure slow links with any granularity, while fast links need large frames
or the event loop cannot hand the transport data quickly enough. The frame
size therefore starts small and doubles each time roughly
UPLOAD_SCALING_FRACTION frames' worth of bytes have gone out at the current
size, up to UPLOAD_MAX_MESSAGE_SIZE. Doubling keeps the number of distinct
buffer sizes small.
"""

from __future__ import annotations

from ..config.protocol import (
    UPLOAD_BUFFER_FRAMES,
    UPLOAD_MAX_MESSAGE_SIZE,
    UPLOAD_SCALING_FRACTION,
    UPLOAD_INITIAL_MESSAGE_SIZE,
)


class MessageSizer:
    """Tracks the current upload frame size and the optional byte budget.

    Attributes:
        size: Current (untruncated) frame size in bytes.
    """

    def __init__(
        self,
        byte_limit: int = 0,
        *,
        initial_size: int = UPLOAD_INITIAL_MESSAGE_SIZE,
        max_size: int = UPLOAD_MAX_MESSAGE_SIZE,
        scaling_fraction: int = UPLOAD_SCALING_FRACTION,
        buffer_frames: int = UPLOAD_BUFFER_FRAMES,
    ) -> None:
        if initial_size <= 0 or max_size < initial_size:
            raise ValueError("initial_size must be positive and no larger than max_size")
        self.size = initial_size
        self._byte_limit = max(0, byte_limit)
        self._max_size = max_size
        self._scaling_fraction = scaling_fraction
        self._buffer_frames = buffer_frames

    @property
    def byte_limit(self) -> int:
        return self._byte_limit

    @property
    def target_buffer(self) -> int:
        """Queued bytes below which another frame may be handed to the transport."""
        return self._buffer_frames * self.size

    def limit_reached(self, sent: int) -> bool:
        return self._byte_limit > 0 and sent >= self._byte_limit

    def fits(self, sent: int, count: int) -> bool:
        """Whether ``count`` more bytes stay within the byte limit."""
        return self._byte_limit <= 0 or sent + count <= self._byte_limit

    def frame_size(self, sent: int) -> int:
        """Size of the next frame, truncated so the byte limit is hit exactly."""
        if self._byte_limit > 0:
            return max(0, min(self.size, self._byte_limit - sent))
        return self.size

    def grow(self, sent: int) -> int:
        """Double the frame size once ``sent`` exceeds scaling_fraction frames."""
        if self.size < self._max_size and sent > self.size * self._scaling_fraction:
            self.size = min(self.size * 2, self._max_size)
        return self.size


__all__ = ["MessageSizer"]
