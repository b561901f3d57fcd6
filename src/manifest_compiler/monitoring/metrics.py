"""
Metrics Collection
Prometheus metrics for code generation runs
"""

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest


class MetricsCollector:
    """
    Collects Prometheus metrics for the compiler.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry or CollectorRegistry()

        # Component generation
        self.components_total = Counter(
            "codegen_components_total",
            "Total number of component generations",
            ["status"],
            registry=self.registry,
        )
        self.component_duration = Histogram(
            "codegen_component_duration_seconds",
            "Component generation duration in seconds",
            ["phase"],
            buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0],
            registry=self.registry,
        )

        # Flow compilation
        self.flow_handlers_total = Counter(
            "codegen_flow_handlers_total",
            "Total number of flow handler compilations",
            ["status"],
            registry=self.registry,
        )

        # Diagnostics and degraded paths
        self.diagnostics_total = Counter(
            "codegen_diagnostics_total",
            "Non-fatal diagnostics reported during generation",
            ["code"],
            registry=self.registry,
        )
        self.format_failures_total = Counter(
            "codegen_format_failures_total",
            "Formatter failures recovered by returning unformatted code",
            registry=self.registry,
        )

    def record_component(self, status: str, duration: float, phase: str = "total") -> None:
        """Record a component generation outcome."""
        self.components_total.labels(status=status).inc()
        self.component_duration.labels(phase=phase).observe(duration)

    def record_flow_handler(self, status: str) -> None:
        self.flow_handlers_total.labels(status=status).inc()

    def record_diagnostic(self, code: str) -> None:
        self.diagnostics_total.labels(code=code).inc()

    def record_format_failure(self) -> None:
        self.format_failures_total.inc()

    def get_metrics(self) -> bytes:
        """Get metrics in Prometheus exposition format."""
        return generate_latest(self.registry)


# Global metrics collector instance
metrics_collector = MetricsCollector()
