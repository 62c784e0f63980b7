"""
Portable JSON encoding of structured errors.

Some boundaries only carry "an exception with a message": a task queue result,
a subprocess exit report, a service written in another language.  This module
packs a :class:`~richerr.core.structured.StructuredError` into a JSON blob with
exactly four fields::

    {"data": {...}, "causeError": "...", "maskError": "..." | null, "stack": [...]}

and carries it as the message of a plain ``Exception``.

Encoding flattens the chain to a single level: the cause text is the message
of the outer node's cause, the mask text is the outer node's mask or, for a
wrapped error, its rendered message, data from every node is merged with outer
nodes winning, and only the outer node's stack is kept.  Code that needs the
full chain must keep the error in-process.
"""

from __future__ import annotations

import json
from typing import Any, Optional, Tuple

from loguru import logger

from richerr.core.stack import StackLocation, capture_stack
from richerr.core.structured import StructuredError, message
from richerr.exceptions import NotStructuredError

FIELDS = frozenset({"data", "causeError", "maskError", "stack"})
STACK_FIELDS = frozenset({"function", "file", "line"})


def _mask_text(err: StructuredError) -> Optional[str]:
    if err.mask is not None:
        return message(err.mask)
    if err.wrap_message is not None:
        return str(err)
    return None


def encode(err: StructuredError) -> str:
    """Serialize ``err`` to its JSON blob; non-JSON data values are stringified."""

    if not isinstance(err, StructuredError):
        raise TypeError(f"Only structured errors can be encoded, got {type(err).__name__}.")
    payload = {
        "data": err.chain_data(),
        "causeError": message(err.cause),
        "maskError": _mask_text(err),
        "stack": [location.as_dict() for location in err.stack],
    }
    return json.dumps(payload, default=str)


def _reject(reason: str, text: Any) -> NotStructuredError:
    return NotStructuredError(f"Not an encoded structured error: {reason}", context={"value": text})


def _decode_location(entry: Any, text: str) -> StackLocation:
    if not isinstance(entry, dict) or set(entry) != STACK_FIELDS:
        raise _reject("malformed stack entry", text)
    line = entry["line"]
    if not isinstance(entry["function"], str) or not isinstance(entry["file"], str):
        raise _reject("stack entry function and file must be strings", text)
    if isinstance(line, bool) or not isinstance(line, int):
        raise _reject("stack entry line must be an integer", text)
    return StackLocation.from_dict(entry)


def decode(text: str) -> StructuredError:
    """
    Rebuild a single-level structured error from its JSON blob.

    Raises
    ------
    NotStructuredError
        If ``text`` is not a well-formed blob.  Nothing is partially decoded.
    """

    if not isinstance(text, str):
        raise _reject(f"expected str, got {type(text).__name__}", text)
    try:
        payload = json.loads(text)
    except (ValueError, RecursionError) as exc:
        raise _reject("invalid JSON", text) from exc

    if not isinstance(payload, dict) or set(payload) != FIELDS:
        raise _reject("expected an object with fields data, causeError, maskError, stack", text)

    data = payload["data"] if payload["data"] is not None else {}
    cause_text = payload["causeError"]
    mask_text = payload["maskError"]
    raw_stack = payload["stack"] if payload["stack"] is not None else []

    if not isinstance(data, dict):
        raise _reject("data must be an object", text)
    if not isinstance(cause_text, str):
        raise _reject("causeError must be a string", text)
    if mask_text is not None and not isinstance(mask_text, str):
        raise _reject("maskError must be a string or null", text)
    if not isinstance(raw_stack, list):
        raise _reject("stack must be a list", text)

    locations = tuple(_decode_location(entry, text) for entry in raw_stack)
    err = StructuredError(
        Exception(cause_text),
        mask=Exception(mask_text) if mask_text is not None else None,
        stack=locations,
    )
    for key, value in data.items():
        err.set_data(key, value)
    return err


def to_error(err: Optional[BaseException]) -> Optional[Exception]:
    """
    Return a plain ``Exception`` whose message is the encoded form of ``err``.

    Plain exceptions are promoted first, capturing the stack at the caller.
    Values that already carry an encoded blob are returned unchanged.
    """

    if err is None:
        return None
    if not isinstance(err, StructuredError):
        if is_encoded(err):
            return err  # type: ignore[return-value]
        err = StructuredError(err, stack=capture_stack(skip=1))
    return Exception(encode(err))


def from_error(err: Optional[BaseException]) -> Tuple[Optional[StructuredError], bool]:
    """Decode the message of ``err``; ``(None, False)`` if it is not an encoded error."""

    if err is None:
        return None, False
    if isinstance(err, StructuredError):
        return err, True
    try:
        return decode(message(err)), True
    except NotStructuredError as exc:
        logger.debug("Treating {} as a plain error: {}", type(err).__name__, exc)
        return None, False


def is_encoded(err: Optional[BaseException]) -> bool:
    if err is None:
        return False
    try:
        decode(message(err))
    except NotStructuredError:
        return False
    return True


__all__ = ["FIELDS", "encode", "decode", "to_error", "from_error", "is_encoded"]
