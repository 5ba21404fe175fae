"""Prometheus metrics for the FixWatch API.

Operational metrics (request latency, error counts, uptime) plus counters
for lifecycle events: submissions, votes, judgments and golden-key use.

Labels: service, environment on every metric.
"""

import os
import threading
import time

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

from fixwatch.config.lifecycle_config import get_environment

METRICS_CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"

_collector_lock = threading.Lock()

# Request duration buckets, 10ms to 10s
DEFAULT_HISTOGRAM_BUCKETS = (0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0)


class MetricsCollector:
    """Collects and manages Prometheus metrics.

    Attributes:
        uptime_seconds: Gauge tracking seconds since service start.
        http_request_duration_seconds: Histogram for request latency.
        http_requests_total: Counter for all HTTP requests.
        http_requests_failed_total: Counter for 4xx/5xx responses.
        reports_submitted_total: Counter for new reports.
        votes_cast_total: Counter for votes, labelled by vote kind.
        judgments_total: Counter for judge invocations, labelled by outcome.
        golden_keys_minted_total: Counter for minted golden keys.
        golden_key_actions_total: Counter for sponsor/veto actions.
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics collector.

        Args:
            registry: Optional custom registry for testing isolation.
        """
        self._registry = registry or CollectorRegistry()
        self.histogram_buckets = DEFAULT_HISTOGRAM_BUCKETS
        self.startup_times: dict[str, float] = {}

        self._environment = get_environment()
        self._service_name = os.environ.get("SERVICE_NAME", "fixwatch-api")

        self.uptime_seconds = Gauge(
            name="uptime_seconds",
            documentation="Seconds since service start",
            labelnames=["service", "environment"],
            registry=self._registry,
        )

        self.http_request_duration_seconds = Histogram(
            name="http_request_duration_seconds",
            documentation="HTTP request duration in seconds",
            labelnames=["service", "environment", "method", "endpoint"],
            buckets=self.histogram_buckets,
            registry=self._registry,
        )

        self.http_requests_total = Counter(
            name="http_requests_total",
            documentation="Total HTTP requests",
            labelnames=["service", "environment", "method", "endpoint", "status"],
            registry=self._registry,
        )

        self.http_requests_failed_total = Counter(
            name="http_requests_failed_total",
            documentation="Total failed HTTP requests (4xx, 5xx)",
            labelnames=[
                "service",
                "environment",
                "method",
                "endpoint",
                "status",
                "error_type",
            ],
            registry=self._registry,
        )

        self.reports_submitted_total = Counter(
            name="reports_submitted_total",
            documentation="Total reports submitted",
            labelnames=["service", "environment"],
            registry=self._registry,
        )

        self.votes_cast_total = Counter(
            name="votes_cast_total",
            documentation="Total votes counted",
            labelnames=["service", "environment", "vote"],
            registry=self._registry,
        )

        self.judgments_total = Counter(
            name="judgments_total",
            documentation="Total threshold judge invocations by outcome",
            labelnames=["service", "environment", "outcome"],
            registry=self._registry,
        )

        self.golden_keys_minted_total = Counter(
            name="golden_keys_minted_total",
            documentation="Total golden keys minted",
            labelnames=["service", "environment"],
            registry=self._registry,
        )

        self.golden_key_actions_total = Counter(
            name="golden_key_actions_total",
            documentation="Total sponsor/veto actions performed with golden keys",
            labelnames=["service", "environment", "action"],
            registry=self._registry,
        )

    def _labels(self) -> dict[str, str]:
        return {"service": self._service_name, "environment": self._environment}

    def observe_request_duration(
        self, method: str, endpoint: str, duration: float
    ) -> None:
        """Record a request duration observation.

        Args:
            method: HTTP method (GET, POST, etc.).
            endpoint: Request endpoint path.
            duration: Request duration in seconds.
        """
        self.http_request_duration_seconds.labels(
            method=method, endpoint=endpoint, **self._labels()
        ).observe(duration)

    def increment_requests(self, method: str, endpoint: str, status: str) -> None:
        """Increment total requests counter."""
        self.http_requests_total.labels(
            method=method, endpoint=endpoint, status=status, **self._labels()
        ).inc()

    def increment_failed_requests(
        self, method: str, endpoint: str, status: str, error_type: str = "http_error"
    ) -> None:
        """Increment failed requests counter."""
        self.http_requests_failed_total.labels(
            method=method,
            endpoint=endpoint,
            status=status,
            error_type=error_type,
            **self._labels(),
        ).inc()

    def increment_reports_submitted(self) -> None:
        """Count one submitted report."""
        self.reports_submitted_total.labels(**self._labels()).inc()

    def increment_votes_cast(self, vote: str) -> None:
        """Count one vote of the given kind."""
        self.votes_cast_total.labels(vote=vote, **self._labels()).inc()

    def increment_judgments(self, outcome: str) -> None:
        """Count one judge invocation with the given outcome."""
        self.judgments_total.labels(outcome=outcome, **self._labels()).inc()

    def increment_golden_keys_minted(self) -> None:
        """Count one minted golden key."""
        self.golden_keys_minted_total.labels(**self._labels()).inc()

    def increment_golden_key_actions(self, action: str) -> None:
        """Count one sponsor or veto."""
        self.golden_key_actions_total.labels(action=action, **self._labels()).inc()

    def record_startup(self, service: str) -> None:
        """Record service startup time."""
        self.startup_times[service] = time.time()

    def get_uptime_seconds(self, service: str) -> float:
        """Get uptime in seconds for a service, 0.0 if not registered."""
        if service not in self.startup_times:
            return 0.0
        return time.time() - self.startup_times[service]

    def update_uptime_gauges(self) -> None:
        """Update uptime gauges for all registered services."""
        for service in self.startup_times:
            self.uptime_seconds.labels(
                service=service, environment=self._environment
            ).set(self.get_uptime_seconds(service))

    def get_registry(self) -> CollectorRegistry:
        """Get the collector registry."""
        return self._registry


_metrics_collector: MetricsCollector | None = None


def get_metrics_collector() -> MetricsCollector:
    """Get the singleton MetricsCollector instance (thread-safe)."""
    global _metrics_collector
    if _metrics_collector is None:
        with _collector_lock:
            if _metrics_collector is None:
                _metrics_collector = MetricsCollector()
    return _metrics_collector


def generate_metrics() -> bytes:
    """Generate Prometheus metrics in exposition format."""
    collector = get_metrics_collector()
    collector.update_uptime_gauges()
    return generate_latest(collector.get_registry())


def reset_metrics_collector() -> None:
    """Reset the singleton collector (for testing only)."""
    global _metrics_collector
    with _collector_lock:
        _metrics_collector = None
