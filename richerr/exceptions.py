"""
Exception hierarchy for failures raised by richerr itself.

These are distinct from :class:`richerr.core.structured.StructuredError`, which
is the value the library builds for callers.  The classes below only surface
problems with the library's own inputs: a blob that does not decode, or a
configuration key nobody declared.
"""

from __future__ import annotations

from typing import Any


class RichErrError(Exception):
    """Base class for all richerr specific exceptions."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.context = context or {}


class NotStructuredError(RichErrError, ValueError):
    """Raised when a value is not a well-formed encoded structured error."""


class RichErrConfigError(RichErrError):
    """Raised for configuration or profile related issues."""


__all__ = [
    "RichErrError",
    "NotStructuredError",
    "RichErrConfigError",
]
