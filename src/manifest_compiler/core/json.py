"""Fast JSON decoding/encoding with multiple backends."""

from typing import Any
import json

import msgspec
import orjson
from json_repair import repair_json


class JSONParseError(Exception):
    """JSON parsing failed."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


def extract_json(text: str | bytes, repair: bool = False) -> dict[str, Any]:
    """
    Parse a JSON object with msgspec, falling back to the stdlib and json_repair.

    Args:
        text: JSON document (a leading BOM and surrounding whitespace are ignored)
        repair: Attempt to repair invalid JSON with json_repair

    Returns:
        Parsed JSON dictionary

    Raises:
        JSONParseError: If parsing fails or the document is not an object
    """
    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError as e:
            raise JSONParseError(f"Invalid UTF-8: {e}", e) from e
    json_str = text.lstrip("﻿").strip()
    if not json_str:
        raise JSONParseError("Empty JSON document")

    # msgspec first (fastest)
    try:
        result = msgspec.json.decode(json_str.encode("utf-8"))
        return _expect_object(result)
    except msgspec.DecodeError as e:
        if not repair:
            raise JSONParseError(f"Invalid JSON: {e}", e) from e

    # Last resort: json_repair
    try:
        repaired = repair_json(json_str)
        result = json.loads(repaired)
    except (ValueError, TypeError) as repair_error:
        raise JSONParseError(f"JSON repair failed: {repair_error}", repair_error) from repair_error
    return _expect_object(result)


def _expect_object(result: Any) -> dict[str, Any]:
    if not isinstance(result, dict):
        raise JSONParseError(f"Expected object, got {type(result).__name__}")
    return result


def safe_json_dumps(obj: Any, **kwargs: Any) -> str:
    """
    Encode object to a JSON string using the fastest available library.

    Compact output matches JavaScript's `JSON.stringify(value)`, which is what
    generated code embeds for object and array literals.

    Args:
        obj: Object to encode
        **kwargs: Additional arguments (indent)

    Returns:
        JSON string
    """
    indent = kwargs.get("indent", 0)

    if indent == 0:
        try:
            return orjson.dumps(obj).decode("utf-8")
        except (TypeError, orjson.JSONEncodeError):
            # Integers outside 64-bit range and other edge cases
            pass

        try:
            return msgspec.json.encode(obj).decode("utf-8")
        except (TypeError, ValueError):
            pass

    # stdlib for pretty-printed output or as fallback
    if indent > 0:
        return json.dumps(obj, indent=indent, ensure_ascii=False)
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False)
