"""ID Generation.

Prefixed ULIDs: sortable by creation time and readable in logs
(`gen_01J...`, `batch_01J...`, `span_01J...`).
"""

from typing import NewType
from ulid import ULID

GenerationID = NewType("GenerationID", str)
"""One `generate_component` call"""

BatchID = NewType("BatchID", str)
"""One batch or incremental run"""


class Prefix:
    """ID prefix constants."""

    GENERATION = "gen"
    BATCH = "batch"
    TRACE = "trace"
    SPAN = "span"


def _prefixed(prefix: str) -> str:
    return f"{prefix}_{ULID()}"


def new_generation_id() -> GenerationID:
    return GenerationID(_prefixed(Prefix.GENERATION))


def new_batch_id() -> BatchID:
    return BatchID(_prefixed(Prefix.BATCH))


def new_trace_id() -> str:
    return _prefixed(Prefix.TRACE)


def new_span_id() -> str:
    return _prefixed(Prefix.SPAN)
