"""
Lightweight tracing for generation runs.

A span covers one operation (a component, a batch). Nested spans share the
trace id of the outermost one. Finished spans are written as structured log
lines; with no tracer initialized every helper is a no-op.
"""

import contextvars
import time
from contextlib import asynccontextmanager, contextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Iterator

import structlog

from .id import new_span_id, new_trace_id

logger = structlog.get_logger(__name__)

_current_trace: contextvars.ContextVar[str] = contextvars.ContextVar("trace_id", default="")
_current_span: contextvars.ContextVar[str] = contextvars.ContextVar("span_id", default="")


@dataclass
class Span:
    name: str
    trace_id: str
    span_id: str
    parent_id: str = ""
    tags: dict[str, str] = field(default_factory=dict)
    started: float = field(default_factory=time.perf_counter)
    duration_ms: float | None = None
    error: Exception | None = None


class Tracer:
    """Opens spans for one service and logs them once they close."""

    def __init__(self, service: str) -> None:
        self.service = service

    def submit(self, span: Span) -> None:
        fields: dict[str, Any] = {
            "service": self.service,
            "operation": span.name,
            "trace_id": span.trace_id,
            "span_id": span.span_id,
            "duration_ms": round(span.duration_ms or 0.0, 3),
            **span.tags,
        }
        if span.parent_id:
            fields["parent_id"] = span.parent_id

        if span.error is not None:
            logger.warning("span_failed", error=str(span.error), **fields)
        else:
            logger.debug("span_finished", **fields)


_tracer: Tracer | None = None


def init_tracer(service: str) -> Tracer:
    """Install the process-wide tracer."""
    global _tracer
    _tracer = Tracer(service)
    return _tracer


@contextmanager
def _traced(tracer: Tracer, operation: str, tags: dict[str, Any]) -> Iterator[Span]:
    span = Span(
        name=operation,
        trace_id=_current_trace.get() or new_trace_id(),
        span_id=new_span_id(),
        parent_id=_current_span.get(),
        tags={key: str(value) for key, value in tags.items()},
    )
    trace_token = _current_trace.set(span.trace_id)
    span_token = _current_span.set(span.span_id)
    try:
        yield span
    except Exception as e:
        span.error = e
        raise
    finally:
        span.duration_ms = (time.perf_counter() - span.started) * 1000
        _current_span.reset(span_token)
        _current_trace.reset(trace_token)
        tracer.submit(span)


@contextmanager
def trace_operation(operation: str, **tags: Any) -> Iterator[Span | None]:
    """Trace a block of synchronous code."""
    if _tracer is None:
        yield None
        return
    with _traced(_tracer, operation, tags) as span:
        yield span


@asynccontextmanager
async def trace_operation_async(operation: str, **tags: Any) -> AsyncIterator[Span | None]:
    """Trace a block that awaits; same span semantics as `trace_operation`."""
    if _tracer is None:
        yield None
        return
    with _traced(_tracer, operation, tags) as span:
        yield span


def get_trace_id() -> str:
    """Trace id of the innermost open span, or ``""``."""
    return _current_trace.get()
