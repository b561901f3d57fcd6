"""Digests for change detection.

Component fingerprints hash a canonical JSON rendering (sorted keys, compact
separators), so two manifests that differ only in key order fingerprint the
same.
"""

import hashlib
from enum import Enum
from typing import Any, Callable

import xxhash

from .json import safe_json_dumps


class Algorithm(str, Enum):
    """Supported hash algorithms."""

    XXHASH64 = "xxhash64"  # default fingerprint
    SHA256 = "sha256"


_DIGESTS: dict[Algorithm, Callable[[bytes], str]] = {
    Algorithm.XXHASH64: lambda data: xxhash.xxh64(data).hexdigest(),
    Algorithm.SHA256: lambda data: hashlib.sha256(data).hexdigest(),
}


def hash_bytes(data: bytes, algorithm: Algorithm = Algorithm.XXHASH64) -> str:
    """Hex digest of raw bytes."""
    return _DIGESTS[Algorithm(algorithm)](data)


def hash_string(
    text: str,
    algorithm: Algorithm = Algorithm.XXHASH64,
    truncate: int | None = None,
) -> str:
    """
    Hash UTF-8 text.

    Examples:
        >>> len(hash_string("test"))
        16
        >>> len(hash_string("test", Algorithm.SHA256, truncate=12))
        12
    """
    digest = hash_bytes(text.encode("utf-8"), algorithm)
    return digest[:truncate] if truncate else digest


def canonicalize(value: Any) -> Any:
    """Recursively sort mapping keys so equal data serializes identically."""
    if isinstance(value, dict):
        return {key: canonicalize(value[key]) for key in sorted(value)}
    if isinstance(value, (list, tuple)):
        return [canonicalize(item) for item in value]
    return value


def hash_json(value: Any, algorithm: Algorithm = Algorithm.XXHASH64) -> str:
    """Digest of the canonical JSON form of `value`."""
    return hash_string(safe_json_dumps(canonicalize(value)), algorithm)


__all__ = [
    "Algorithm",
    "canonicalize",
    "hash_bytes",
    "hash_json",
    "hash_string",
]
