"""Phase orchestration and the top-level measurement client."""

from .client import Client
from .locator import Locator
from .phase import PhaseRunner
from .callbacks import Callbacks, raise_error
from ..streams import PhaseClock

__all__ = [
    "Client",
    "Locator",
    "PhaseRunner",
    "PhaseClock",
    "Callbacks",
    "raise_error",
]
