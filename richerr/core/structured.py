"""
The structured error value and the operations built around it.

A :class:`StructuredError` keeps the exception that actually went wrong (the
*cause*), an optional client-facing *mask*, an optional breadcrumb annotation
added by :func:`wrap`, the call stack captured where it was created and a bag
of diagnostic key/value data.  Errors form a singly linked chain when a
structured error becomes the cause of another one.

Every constructor returns ``None`` when handed ``None``, so the helpers can be
applied to "maybe an error" values without guards::

    def read_config(path):
        try:
            return path.read_text()
        except OSError as exc:
            raise richerr.wrapf(exc, "read %s", path) from exc

Instances are mutated in place by :func:`set_data` and :func:`mask`.  There is
no locking; once an error is shared between threads treat it as read-only.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple

from richerr.utils.config_loader import DEFAULT_SETTINGS, ErrorSettings

from .stack import Stack, StackLocation, capture_stack


def _text(exc: BaseException) -> str:
    try:
        return str(exc)
    except Exception:
        return f"<unprintable {type(exc).__name__}>"


def _format(fmt: str, args: Tuple[Any, ...]) -> str:
    # A lone mapping supplies %(name)s fields, as in logging.
    if not args:
        return fmt
    if len(args) == 1 and isinstance(args[0], Mapping) and args[0]:
        return fmt % args[0]
    return fmt % args


class StructuredError(Exception):
    """
    Exception carrying a cause, an optional mask, a stack and diagnostic data.

    Parameters
    ----------
    cause : BaseException
        The failure being described. Required.
    mask : BaseException, optional
        Replaces the cause's message in :meth:`__str__`.
    wrap_message : str, optional
        Prefix rendered as ``"<wrap_message>: <cause message>"`` when unmasked.
    stack : tuple of StackLocation, optional
        Pre-captured stack.  When omitted the stack is captured starting at
        the code that instantiated the error.
    depth : int, optional
        Capture limit used when ``stack`` is omitted.
    settings : ErrorSettings, optional
        Supplies the capture limit when ``depth`` is omitted.
    """

    def __init__(
        self,
        cause: BaseException,
        *,
        mask: Optional[BaseException] = None,
        wrap_message: Optional[str] = None,
        stack: Optional[Stack] = None,
        depth: Optional[int] = None,
        settings: Optional[ErrorSettings] = None,
    ) -> None:
        if cause is None:
            raise TypeError("StructuredError requires a cause; use extend() for optional errors.")
        super().__init__(cause)
        self._cause = cause
        self._mask = mask
        self._wrap_message = wrap_message
        if stack is None:
            stack = capture_stack(skip=1, depth=depth, settings=settings)
        self._stack: Stack = tuple(stack)
        self._data: Optional[Dict[str, Any]] = None
        self.__cause__ = cause

    # ---------------------------------------------------------------- fields
    @property
    def cause(self) -> BaseException:
        return self._cause

    @property
    def mask(self) -> Optional[BaseException]:
        return self._mask

    @mask.setter
    def mask(self, value: Optional[BaseException]) -> None:
        self._mask = value

    @property
    def wrap_message(self) -> Optional[str]:
        return self._wrap_message

    @property
    def stack(self) -> Stack:
        return self._stack

    @property
    def data(self) -> Dict[str, Any]:
        """Copy of the data attached to this node only (not the chain)."""
        return dict(self._data) if self._data else {}

    # ------------------------------------------------------------- behaviour
    def __str__(self) -> str:
        if self._mask is not None:
            return _text(self._mask)
        if self._wrap_message is not None:
            return f"{self._wrap_message}: {_text(self._cause)}"
        return _text(self._cause)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"

    def unwrap(self) -> BaseException:
        return self._cause

    def set_mask(self, mask: Optional[BaseException]) -> "StructuredError":
        self._mask = mask
        return self

    def set_data(self, key: str, value: Any) -> None:
        if self._data is None:
            self._data = {}
        self._data[key] = value

    def get_data(self, key: str) -> Tuple[Any, bool]:
        """Look ``key`` up on this node, then on each structured cause in turn."""
        node: BaseException = self
        while isinstance(node, StructuredError):
            if node._data and key in node._data:
                return node._data[key], True
            node = node._cause
        return None, False

    def chain(self) -> List["StructuredError"]:
        """Structured nodes from this one down to the innermost structured cause."""
        nodes = []
        node: BaseException = self
        while isinstance(node, StructuredError):
            nodes.append(node)
            node = node._cause
        return nodes

    def chain_data(self) -> Dict[str, Any]:
        """Data of the whole chain merged into one dict, outer nodes winning."""
        merged: Dict[str, Any] = {}
        for node in reversed(self.chain()):
            merged.update(node.data)
        return merged

    def details(
        self,
        max_stack_lines: Optional[int] = None,
        *,
        short_paths: Optional[bool] = None,
        settings: Optional[ErrorSettings] = None,
    ) -> str:
        settings = settings or DEFAULT_SETTINGS
        if max_stack_lines is None:
            max_stack_lines = settings.details_max_stack_lines
        if short_paths is None:
            short_paths = settings.details_short_paths

        cause_message = _text(self._cause)
        lines = ["", f"[ERROR] {cause_message}"]
        if self._mask is not None:
            mask_message = _text(self._mask)
            if mask_message != cause_message:
                lines.append(f"[MASK ERROR] {mask_message}")

        if not self._stack:
            return "\n".join(lines)

        lines.append("[STACK]:")
        for location in self._stack[: max(0, max_stack_lines)]:
            lines.append(str(location.shortened() if short_paths else location))
        return "\n".join(lines)


# ------------------------------------------------------------------ construction


def new(
    message: str,
    *,
    depth: Optional[int] = None,
    settings: Optional[ErrorSettings] = None,
) -> StructuredError:
    """Create a structured error around a fresh ``Exception(message)``."""

    return StructuredError(Exception(message), stack=capture_stack(skip=1, depth=depth, settings=settings))


def errorf(
    fmt: str,
    *args: Any,
    depth: Optional[int] = None,
    settings: Optional[ErrorSettings] = None,
) -> StructuredError:
    """Like :func:`new`, with the message built as ``fmt % args``."""

    message = _format(fmt, args)
    return StructuredError(Exception(message), stack=capture_stack(skip=1, depth=depth, settings=settings))


def extend(
    err: Optional[BaseException],
    *,
    depth: Optional[int] = None,
    settings: Optional[ErrorSettings] = None,
) -> Optional[StructuredError]:
    """
    Promote ``err`` to a structured error.

    Structured errors are returned unchanged so the original, deepest stack is
    kept.  ``None`` stays ``None``.
    """

    if err is None:
        return None
    if isinstance(err, StructuredError):
        return err
    return StructuredError(err, stack=capture_stack(skip=1, depth=depth, settings=settings))


def mask(
    err: Optional[BaseException],
    mask_err: Optional[BaseException],
    *,
    depth: Optional[int] = None,
    settings: Optional[ErrorSettings] = None,
) -> Optional[StructuredError]:
    """
    Hide the message of ``err`` behind ``mask_err``.

    A structured ``err`` is updated in place and returned; passing ``None`` as
    the mask reverts to the cause's own message.  A plain exception is always
    promoted, even without a mask, so later masking works the same way.
    """

    if err is None:
        return None
    if isinstance(err, StructuredError):
        err.mask = mask_err
        return err
    return StructuredError(err, mask=mask_err, stack=capture_stack(skip=1, depth=depth, settings=settings))


def wrap(
    err: Optional[BaseException],
    message: str,
    *,
    depth: Optional[int] = None,
    settings: Optional[ErrorSettings] = None,
) -> Optional[StructuredError]:
    """Return a new node rendering as ``"<message>: <str(err)>"``."""

    if err is None:
        return None
    return StructuredError(err, wrap_message=message, stack=capture_stack(skip=1, depth=depth, settings=settings))


def wrapf(
    err: Optional[BaseException],
    fmt: str,
    *args: Any,
    depth: Optional[int] = None,
    settings: Optional[ErrorSettings] = None,
) -> Optional[StructuredError]:
    """Like :func:`wrap`, with the annotation built as ``fmt % args``."""

    if err is None:
        return None
    message = _format(fmt, args)
    return StructuredError(err, wrap_message=message, stack=capture_stack(skip=1, depth=depth, settings=settings))


# -------------------------------------------------------------------- inspection


def message(err: Optional[BaseException]) -> str:
    """Public message of any error; ``""`` for ``None``."""

    if err is None:
        return ""
    return _text(err)


def cause(err: Optional[BaseException]) -> Optional[BaseException]:
    """Unwrap one level: the cause of a structured error, anything else as is."""

    if isinstance(err, StructuredError):
        return err.cause
    return err


def is_equal(err1: Optional[BaseException], err2: Optional[BaseException]) -> bool:
    """Compare two errors by the message of their causes, ignoring masks and stacks."""

    if err1 is None and err2 is None:
        return True
    if err1 is None or err2 is None:
        return False
    return message(cause(err1)) == message(cause(err2))


def get_data(err: Optional[BaseException], key: str) -> Tuple[Any, bool]:
    if isinstance(err, StructuredError):
        return err.get_data(key)
    return None, False


def set_data(err: Optional[BaseException], key: str, value: Any) -> None:
    if isinstance(err, StructuredError):
        err.set_data(key, value)


def stack(err: Optional[BaseException]) -> List[StackLocation]:
    if isinstance(err, StructuredError):
        return list(err.stack)
    return []


def details(
    err: Optional[BaseException],
    max_stack_lines: Optional[int] = None,
    *,
    short_paths: Optional[bool] = None,
    settings: Optional[ErrorSettings] = None,
) -> str:
    """
    Multi-line debugging view of ``err`` for logs.

    Plain exceptions render as their message.  Structured errors show the
    cause, the mask when it differs and up to ``max_stack_lines`` stack
    entries.  Defaults come from ``settings``, or the packaged defaults.
    Never send this to clients.
    """

    if err is None:
        return ""
    if isinstance(err, StructuredError):
        return err.details(max_stack_lines, short_paths=short_paths, settings=settings)
    return _text(err)


__all__ = [
    "StructuredError",
    "new",
    "errorf",
    "extend",
    "mask",
    "wrap",
    "wrapf",
    "message",
    "cause",
    "is_equal",
    "get_data",
    "set_data",
    "stack",
    "details",
]
