"""Core structured error value and stack capture."""

from .stack import Stack, StackLocation, capture_stack
from .structured import (
    StructuredError,
    cause,
    details,
    errorf,
    extend,
    get_data,
    is_equal,
    mask,
    message,
    new,
    set_data,
    stack,
    wrap,
    wrapf,
)

__all__ = [
    "Stack",
    "StackLocation",
    "capture_stack",
    "StructuredError",
    "cause",
    "details",
    "errorf",
    "extend",
    "get_data",
    "is_equal",
    "mask",
    "message",
    "new",
    "set_data",
    "stack",
    "wrap",
    "wrapf",
]
