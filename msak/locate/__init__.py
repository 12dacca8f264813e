"""Measurement server discovery."""

from .client import LocateClient, parse_locate_response

__all__ = ["LocateClient", "parse_locate_response"]
