"""Prometheus metric definitions shared by both handlers."""

from prometheus_client import Counter, Histogram, generate_latest
from starlette.responses import Response


http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["service", "route", "method", "status_code"],
)
http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration seconds",
    ["service", "route", "method"],
)
upstream_requests_total = Counter(
    "payevo_requests_total",
    "Calls made to PayEvo by operation and outcome",
    ["service", "operation", "outcome"],
)
upstream_latency_seconds = Histogram(
    "payevo_latency_seconds",
    "PayEvo call latency seconds",
    ["service", "operation"],
)


def metrics_response() -> Response:
    """Expose all registered Prometheus metrics in text format."""

    return Response(content=generate_latest(), media_type="text/plain")
