"""
Metrics Collection
Prometheus metrics for stream decoding and message handling
"""

from prometheus_client import CollectorRegistry, Counter, Histogram, REGISTRY, generate_latest


class MetricsCollector:
    """
    Collects and exposes Prometheus metrics for the protocol engine.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry if registry is not None else REGISTRY

        # Decoder metrics
        self.lines_total = Counter(
            "a2ui_lines_total",
            "Candidate lines seen by the decoder",
            ["outcome"],
            registry=self.registry,
        )
        self.time_to_first_line = Histogram(
            "a2ui_time_to_first_line_seconds",
            "Time from stream start to the first candidate line",
            buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
            registry=self.registry,
        )
        self.streams_total = Counter(
            "a2ui_streams_total",
            "Streams processed",
            ["outcome"],
            registry=self.registry,
        )

        # Message metrics
        self.messages_total = Counter(
            "a2ui_messages_total",
            "Messages by type and status",
            ["type", "status"],
            registry=self.registry,
        )
        self.rejections_total = Counter(
            "a2ui_rejections_total",
            "Rejected candidate lines by failure kind",
            ["kind"],
            registry=self.registry,
        )
        self.warnings_total = Counter(
            "a2ui_warnings_total",
            "Schema warnings attached to accepted messages",
            registry=self.registry,
        )

    def record_lines(self, decoded: int, fences: int = 0, blanks: int = 0) -> None:
        """Record decoder line counts for one stream."""
        self.lines_total.labels(outcome="decoded").inc(decoded)
        self.lines_total.labels(outcome="fence").inc(fences)
        self.lines_total.labels(outcome="blank").inc(blanks)

    def record_first_line(self, elapsed: float) -> None:
        self.time_to_first_line.observe(elapsed)

    def record_message(self, message_type: str, status: str, warnings: int = 0) -> None:
        """Record one accepted message."""
        self.messages_total.labels(type=message_type, status=status).inc()
        if warnings:
            self.warnings_total.inc(warnings)

    def record_rejection(self, kind: str) -> None:
        self.rejections_total.labels(kind=kind).inc()
        self.messages_total.labels(type="unknown", status="rejected").inc()

    def record_stream(self, outcome: str) -> None:
        self.streams_total.labels(outcome=outcome).inc()

    def get_metrics(self) -> bytes:
        """Get metrics in Prometheus format."""
        return generate_latest(self.registry)


# Global metrics collector instance
metrics_collector = MetricsCollector()
