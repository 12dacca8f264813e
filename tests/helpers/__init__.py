"""Shared fakes for stream, phase and client tests."""

__all__ = [
    "sockets",
    "events",
]
