"""
Loguru helpers for writing structured errors to logs.

Records are attributed to the code that calls :class:`ErrorLogger`, not to
richerr, so they are unaffected by ``logger.disable("richerr")``.  Diagnostic
data from the whole chain is bound to the record as ``extra["error_data"]``.
"""

from __future__ import annotations

from types import TracebackType
from typing import Any, Dict, Optional, Type

from loguru import logger

from richerr.core.stack import capture_stack
from richerr.core.structured import StructuredError, details, message
from richerr.utils.config_loader import DEFAULT_SETTINGS, ErrorSettings


def _chain_data(err: BaseException) -> Dict[str, Any]:
    return err.chain_data() if isinstance(err, StructuredError) else {}


class ErrorLogger:
    """Thin convenience wrapper around Loguru for structured errors."""

    def __init__(self, settings: Optional[ErrorSettings] = None) -> None:
        self.settings = settings or DEFAULT_SETTINGS

    def _emit(self, err: BaseException, prefix: Optional[str], level: Optional[str], depth: int) -> None:
        text = details(
            err,
            self.settings.log_max_stack_lines,
            short_paths=self.settings.details_short_paths,
        )
        logger.opt(depth=depth + 1).bind(
            error_data=_chain_data(err),
            public_message=message(err),
        ).log(level or self.settings.log_level, "{}{}", f"{prefix}: " if prefix else "", text.lstrip("\n"))

    def log(self, err: Optional[BaseException], prefix: Optional[str] = None, *, level: Optional[str] = None) -> None:
        """Write the detailed view of ``err``; ``None`` is ignored."""
        if err is None:
            return
        self._emit(err, prefix, level, depth=1)

    def capture(self, operation: str, *, level: Optional[str] = None) -> "ErrorCapture":
        """
        Context manager logging and wrapping any exception raised in its block.

        The exception is re-raised wrapped with ``operation`` as its annotation
        so callers see the breadcrumb, with the original chained as
        ``__cause__``.  The wrapper's stack starts at the ``with`` statement.
        """
        return ErrorCapture(self, operation, level)


class ErrorCapture:
    def __init__(self, error_logger: ErrorLogger, operation: str, level: Optional[str]) -> None:
        self.error_logger = error_logger
        self.operation = operation
        self.level = level

    def __enter__(self) -> "ErrorCapture":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> bool:
        if exc is None or not isinstance(exc, Exception):
            return False
        wrapped = StructuredError(
            exc,
            wrap_message=self.operation,
            stack=capture_stack(skip=1, settings=self.error_logger.settings),
        )
        self.error_logger._emit(wrapped, None, self.level, depth=1)
        raise wrapped from exc


__all__ = ["ErrorLogger", "ErrorCapture"]
