"""Centralized exception classes for the measurement client.

Organization:
    - base.py: MsakError, the common base with an error code
    - config.py: invalid parameters, raised before any network activity
    - discovery.py: endpoint resolution failures (session fatal)
    - transport.py: socket failures isolated to one stream
    - protocol.py: malformed control messages (stream keeps running)
"""

from .base import MsakError
from .config import ConfigError
from .protocol import ProtocolError
from .discovery import DiscoveryError
from .transport import TransportError

__all__ = [
    "MsakError",
    "ConfigError",
    "DiscoveryError",
    "TransportError",
    "ProtocolError",
]
