"""
Performance Monitoring
Prometheus metrics and spans for generation runs
"""

from manifest_compiler.core.tracing import trace_operation, trace_operation_async, init_tracer
from .metrics import MetricsCollector, metrics_collector

__all__ = [
    "MetricsCollector",
    "metrics_collector",
    "trace_operation",
    "trace_operation_async",
    "init_tracer",
]
