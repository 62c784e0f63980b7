"""
Structured errors: a preserved cause, a client-safe mask, a captured stack
and diagnostic data, with a single public message at the boundary.
"""

from loguru import logger

from .core import (
    StackLocation,
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
from .encoding import decode, encode, from_error, is_encoded, to_error
from .exceptions import NotStructuredError, RichErrConfigError, RichErrError
from .utils import DEFAULT_SETTINGS, ErrorSettings, load_settings
from .utils.logger import ErrorLogger

# Applications opt in with logger.enable("richerr").
logger.disable("richerr")

__all__ = [
    "StackLocation",
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
    "decode",
    "encode",
    "from_error",
    "is_encoded",
    "to_error",
    "NotStructuredError",
    "RichErrConfigError",
    "RichErrError",
    "DEFAULT_SETTINGS",
    "ErrorSettings",
    "load_settings",
    "ErrorLogger",
]
