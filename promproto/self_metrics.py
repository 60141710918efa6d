"""Self-monitoring metrics for the exposition endpoint."""
from prometheus_client import CollectorRegistry, Counter, Histogram


class SelfMetrics:
    """Counters and timings about the protobuf exposition itself."""

    def __init__(self, registry=None, prefix=""):
        if registry is None:
            registry = CollectorRegistry()
        self.registry = registry

        self.scrapes_total = Counter(
            f"{prefix}exposition_scrapes_total",
            "Total number of protobuf scrapes served",
            registry=registry
        )

        self.records_total = Counter(
            f"{prefix}exposition_records_total",
            "Total number of metric records written",
            registry=registry
        )

        self.format_errors_total = Counter(
            f"{prefix}exposition_format_errors_total",
            "Total number of scrapes aborted by a format error",
            registry=registry
        )

        self.scrape_duration_seconds = Histogram(
            f"{prefix}exposition_scrape_duration_seconds",
            "Duration of each protobuf scrape in seconds",
            buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
            registry=registry
        )

    def record_scrape(self, records: int, duration: float):
        """Record a completed scrape."""
        self.scrapes_total.inc()
        self.records_total.inc(records)
        self.scrape_duration_seconds.observe(duration)

    def record_format_error(self):
        """Record a scrape aborted by a format error."""
        self.format_errors_total.inc()
