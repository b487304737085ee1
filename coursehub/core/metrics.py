"""Application metrics using the Prometheus client library.

Every metric the service exports is declared here, so this module is the
inventory.  Other modules import a metric and increment/observe it at the
point of action.  Prometheus scrapes GET /metrics.

Counters only go up and cannot be reset between tests; tests assert on
before/after deltas instead of absolute values.
"""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

# ---------------------------------------------------------------------------
# HTTP metrics (populated by the MetricsMiddleware)
# ---------------------------------------------------------------------------

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests by method, endpoint, and status code",
    ["method", "endpoint", "status_code"],
)

REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    # Course-wide performance is the slowest read; it still belongs well
    # under a second, so the buckets stop being interesting past 2.5s.
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

ACTIVE_REQUESTS = Gauge(
    "http_active_requests",
    "Number of HTTP requests currently being processed",
)

# ---------------------------------------------------------------------------
# Domain metrics
# ---------------------------------------------------------------------------

DOMAIN_ERRORS = Counter(
    "domain_errors_total",
    "Requests rejected with a domain error, by error kind",
    ["kind"],  # validation|auth|not_found|conflict|internal
)

NOTIFICATIONS_CREATED = Counter(
    "notifications_created_total",
    "Notification records persisted, by notification type",
    ["type"],
)

NOTIFICATION_FAILURES = Counter(
    "notification_failures_total",
    "Notification deliveries that failed and were dropped",
    ["type"],
)

QUEUE_DEPTH = Gauge(
    "task_queue_depth",
    "Number of tasks waiting in a queue",
    ["queue_name"],
)
