"""Manifest ingestion limits."""

from dataclasses import dataclass
from typing import Any


MAX_MANIFEST_SIZE = 512 * 1024
MAX_JSON_DEPTH = 32


class ValidationError(Exception):
    """Input rejected before or during schema validation."""


@dataclass(frozen=True)
class ValidationResult:
    """Failure value for Result-returning validators."""

    message: str
    field: str | None = None
    value: Any | None = None


def validate_json_size(data: str | bytes, max_size: int, name: str = "Manifest") -> None:
    """
    Reject documents larger than `max_size` bytes (UTF-8 encoded length).

    Raises:
        ValidationError: If the document is too large
    """
    size = len(data) if isinstance(data, bytes) else len(data.encode("utf-8"))
    if size > max_size:
        raise ValidationError(f"{name} size {size} bytes exceeds maximum {max_size} bytes")


def validate_json_depth(obj: Any, max_depth: int = MAX_JSON_DEPTH) -> None:
    """
    Reject decoded JSON nested deeper than `max_depth` containers.

    Walks with an explicit stack so hostile input cannot exhaust the
    interpreter's recursion limit before the check fires.

    Raises:
        ValidationError: If any value sits below `max_depth`; the message
            names the path of the first offending value
    """
    stack: list[tuple[Any, int, str]] = [(obj, 0, "$")]
    while stack:
        value, depth, path = stack.pop()
        if depth > max_depth:
            raise ValidationError(
                f"JSON nesting depth {depth} exceeds maximum {max_depth} at {path}"
            )
        if isinstance(value, dict):
            stack.extend((child, depth + 1, f"{path}.{key}") for key, child in value.items())
        elif isinstance(value, list):
            stack.extend((child, depth + 1, f"{path}[{i}]") for i, child in enumerate(value))
