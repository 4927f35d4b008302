"""Rendering of values inside assertion messages."""

from __future__ import annotations

from enum import Enum
from typing import Any

UNPRINTABLE = "<UNPRINTABLE>"


def _is_printable(value: Any) -> bool:
    cls = type(value)
    return cls.__str__ is not object.__str__ or cls.__repr__ is not object.__repr__


def to_string(value: Any) -> str:
    """Render a value for a failure message.

    Enum members render their underlying value. Anything whose type defines
    its own text rendering uses ``str()``. Everything else becomes
    ``<UNPRINTABLE>``.
    """
    if isinstance(value, Enum):
        return to_string(value.value)
    if _is_printable(value):
        return str(value)
    return UNPRINTABLE


def args_string(*args: Any, **kwargs: Any) -> str:
    parts = [to_string(arg) for arg in args]
    parts.extend(f"{key}={to_string(val)}" for key, val in kwargs.items())
    return ", ".join(parts)


def error_description(error: BaseException) -> str | None:
    """Return the error's own description, or None when it carries none."""
    description = str(error)
    return description or None
