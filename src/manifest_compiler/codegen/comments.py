"""Provenance comment header written at the top of every generated file."""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from .literals import comment_text
from .models import SCHEMA_LEVEL
from .types import BuilderContext, CommentHeaderBuildResult, CommentMarkers

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and a `Z` suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def generate_comment_header(component_id: str, timestamp: str | None = None) -> str:
    """Render the header block for a component id."""
    ts = timestamp or format_timestamp(utc_now())
    lines = [
        "/**",
        f" * {CommentMarkers.GENERATED}",
        f" * {CommentMarkers.COMPONENT_ID}: {comment_text(component_id)}",
        f" * {CommentMarkers.LEVEL}: {SCHEMA_LEVEL}",
        f" * {CommentMarkers.LAST_GENERATED}: {ts}",
        f" * {CommentMarkers.DO_NOT_EDIT}",
        " */",
    ]
    return "\n".join(lines)


@dataclass(frozen=True)
class CommentHeader:
    """Fields recovered from a generated file's header."""

    component_id: str
    level: int
    last_generated: str


_COMPONENT_ID = re.compile(re.escape(CommentMarkers.COMPONENT_ID) + r":\s*(\S+)")
_LEVEL = re.compile(re.escape(CommentMarkers.LEVEL) + r":\s*(\d+)")
_LAST_GENERATED = re.compile(re.escape(CommentMarkers.LAST_GENERATED) + r":\s*(\S+)")


def parse_comment_header(text: str) -> CommentHeader | None:
    """
    Read the provenance markers back out of generated source.

    Args:
        text: Comment block or whole file contents

    Returns:
        CommentHeader, or None when the text is not a generated file
    """
    if CommentMarkers.GENERATED not in text:
        return None

    component_id = _COMPONENT_ID.search(text)
    if component_id is None:
        return None

    level = _LEVEL.search(text)
    last_generated = _LAST_GENERATED.search(text)
    return CommentHeader(
        component_id=component_id.group(1),
        level=int(level.group(1)) if level else SCHEMA_LEVEL,
        last_generated=last_generated.group(1) if last_generated else "",
    )


class CommentHeaderBuilder:
    """Builds the header block; the clock is injectable for reproducible output"""

    def __init__(self, clock: Clock = utc_now):
        self._clock = clock

    def build(self, context: BuilderContext) -> CommentHeaderBuildResult:
        timestamp = format_timestamp(self._clock())
        return CommentHeaderBuildResult(
            code=generate_comment_header(context.component.id, timestamp),
            timestamp=timestamp,
        )
