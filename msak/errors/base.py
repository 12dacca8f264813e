"""Base error class shared by the measurement client."""

from __future__ import annotations


class MsakError(Exception):
    """Base class for all client errors.

    Attributes:
        error_code: Machine-parseable error identifier.
        message: Human-readable error description.
    """

    error_code = "msak_error"

    def __init__(self, message: str, *, error_code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if error_code is not None:
            self.error_code = error_code


__all__ = ["MsakError"]
