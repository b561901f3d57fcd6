"""JavaScript literal rendering for default values and flow arguments."""

import math
from typing import Any

from manifest_compiler.core.json import safe_json_dumps

_STRING_ESCAPES = str.maketrans({
    "\\": "\\\\",
    "'": "\\'",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
})


def format_string(value: str) -> str:
    """Single-quoted JS string literal."""
    return "'" + value.translate(_STRING_ESCAPES) + "'"


def format_json_string(value: str) -> str:
    """Double-quoted JS string literal, as `JSON.stringify` writes it."""
    return safe_json_dumps(value)


def format_number(value: int | float) -> str:
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(int(value))


def format_boolean(value: Any) -> str:
    return "true" if value else "false"


def value_type(value: Any) -> str | None:
    """Manifest data type a Python value naturally has."""
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    return None


def format_value(value: Any, json_strings: bool = False) -> str:
    """
    Render a manifest value as a JavaScript literal.

    The value's own type picks the rendering; callers report a declared type
    that disagrees with it.

    Args:
        value: Literal value from the manifest
        json_strings: Emit double-quoted strings instead of single-quoted

    Returns:
        JavaScript source for the literal
    """
    if value is None:
        return "null"

    kind = value_type(value)

    if kind == "string":
        return format_json_string(value) if json_strings else format_string(value)
    if kind == "number":
        return format_number(value)
    if kind == "boolean":
        return format_boolean(value)
    if kind in ("object", "array"):
        return safe_json_dumps(value)

    text = str(value)
    return format_json_string(text) if json_strings else format_string(text)


def format_flow_value(value: Any) -> str:
    """Literal for a flow action argument (`alert("Hi!")`)."""
    return format_value(value, json_strings=True)


def comment_text(value: str) -> str:
    """
    Manifest text safe to place inside a `//` or `/* */` comment.

    Line breaks (including U+2028/U+2029) collapse to single spaces and `*/`
    is broken up, so the text can neither end the comment nor start a new
    line of code.
    """
    return " ".join(value.split()).replace("*/", "*\\/")
