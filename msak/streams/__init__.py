"""Per-stream engines and the helpers they share."""

from .clock import PhaseClock
from .timer import SafetyTimer
from .base import StreamEngine
from .states import StreamStatus
from .sizing import MessageSizer
from .upload import UploadStream
from .download import DownloadStream
from ..state import StreamRole

ENGINES = {
    StreamRole.DOWNLOAD: DownloadStream,
    StreamRole.UPLOAD: UploadStream,
}

__all__ = [
    "ENGINES",
    "PhaseClock",
    "SafetyTimer",
    "StreamEngine",
    "StreamStatus",
    "MessageSizer",
    "UploadStream",
    "DownloadStream",
]
