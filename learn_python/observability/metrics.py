from __future__ import annotations

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    GCCollector,
    Histogram,
    PlatformCollector,
    ProcessCollector,
    generate_latest,
)

METRICS_CONTENT_TYPE = CONTENT_TYPE_LATEST

_LATENCY_BUCKETS = (0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0)


class PrometheusMetrics:
    """Process-local HTTP metrics on a private registry (resets on restart).

    prometheus_client guards each labelled child with its own lock, so requests
    to different routes never contend on a shared lock.
    """

    def __init__(self) -> None:
        self.registry = CollectorRegistry(auto_describe=True)
        self.http_requests_total = Counter(
            "http_requests_total",
            "Total number of HTTP requests",
            ["method", "route", "status"],
            registry=self.registry,
        )
        self.http_request_duration_seconds = Histogram(
            "http_request_duration_seconds",
            "HTTP request duration in seconds",
            ["method", "route"],
            buckets=_LATENCY_BUCKETS,
            registry=self.registry,
        )
        ProcessCollector(registry=self.registry)
        PlatformCollector(registry=self.registry)
        GCCollector(registry=self.registry)

    def record(self, method: str, route: str, status_code: int, duration_seconds: float) -> None:
        self.http_requests_total.labels(method=method, route=route, status=str(status_code)).inc()
        self.http_request_duration_seconds.labels(method=method, route=route).observe(
            max(0.0, float(duration_seconds))
        )

    def render(self) -> bytes:
        return generate_latest(self.registry)


_METRICS: PrometheusMetrics | None = None


def get_metrics() -> PrometheusMetrics:
    global _METRICS
    if _METRICS is None:
        _METRICS = PrometheusMetrics()
    return _METRICS


def reset_metrics() -> None:
    """Swap in a fresh registry (used by tests)."""

    global _METRICS
    _METRICS = PrometheusMetrics()
