"""
Call stack capture for structured errors.

A captured stack is a tuple of :class:`StackLocation` records, innermost call
first.  Capture is bounded by a depth limit; running out of frames before the
limit is reached simply yields a shorter tuple.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Tuple

from richerr.utils.config_loader import DEFAULT_SETTINGS, ErrorSettings


@dataclass(frozen=True)
class StackLocation:
    """One step of a captured call stack."""

    function: str
    file: str
    line: int

    def __str__(self) -> str:
        return f"{self.function} [{self.file}:{self.line}]"

    def shortened(self) -> "StackLocation":
        """Return a copy with the file reduced to its base name, for display."""
        return replace(self, file=os.path.basename(self.file))

    def as_dict(self) -> Dict[str, Any]:
        return {"function": self.function, "file": self.file, "line": self.line}

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "StackLocation":
        return cls(function=payload["function"], file=payload["file"], line=payload["line"])


Stack = Tuple[StackLocation, ...]


def _function_name(frame) -> str:
    code = frame.f_code
    module = frame.f_globals.get("__name__", "<unknown>")
    # co_qualname is only available from Python 3.11
    return f"{module}.{getattr(code, 'co_qualname', code.co_name)}"


def capture_stack(
    skip: int = 0,
    depth: Optional[int] = None,
    settings: Optional[ErrorSettings] = None,
) -> Stack:
    """
    Return the current call stack as :class:`StackLocation` records.

    ``skip=0`` makes the caller of ``capture_stack`` the first entry; each
    increment drops one more frame.  ``depth`` caps the number of entries; when
    omitted the ``stack.depth`` of ``settings`` (or of the packaged defaults)
    applies.
    """

    if depth is None:
        depth = (settings or DEFAULT_SETTINGS).stack_depth
    limit = max(0, depth)
    if limit == 0:
        return ()
    try:
        frame = sys._getframe(skip + 1)
    except ValueError:
        return ()

    locations = []
    while frame is not None and len(locations) < limit:
        locations.append(
            StackLocation(
                function=_function_name(frame),
                file=frame.f_code.co_filename,
                line=frame.f_lineno or frame.f_code.co_firstlineno,
            )
        )
        frame = frame.f_back
    return tuple(locations)


__all__ = ["StackLocation", "Stack", "capture_stack"]
