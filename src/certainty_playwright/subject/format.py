# src/certainty_playwright/subject/format.py
"""Render arbitrary values into human-readable failure text."""

from typing import Any


def format_value(value: Any) -> str:
    """
    Format a value for inclusion in a failure message.

    Strings are quoted, exceptions are rendered as their message (or their
    class name when the message is empty) and sequences are formatted item
    by item.

    Example:
        >>> format_value("5")
        "'5'"
        >>> format_value(TimeoutError("stale element"))
        'stale element'
        >>> format_value(["a", 1])
        "['a', 1]"
    """
    if isinstance(value, BaseException):
        return str(value) or type(value).__name__
    if isinstance(value, str):
        return repr(value)
    if isinstance(value, list):
        return "[" + ", ".join(format_value(item) for item in value) + "]"
    if isinstance(value, tuple):
        inner = ", ".join(format_value(item) for item in value)
        return "(" + inner + ("," if len(value) == 1 else "") + ")"
    return repr(value)
