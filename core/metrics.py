"""
Prometheus metrics for the license service.

Custom metrics for business logic and performance monitoring.
"""

from prometheus_client import Counter, Histogram

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# License metrics
licenses_created_total = Counter(
    "licenses_created_total",
    "Total licenses created",
    ["tier"],
)

license_validations_total = Counter(
    "license_validations_total",
    "Total license validations by outcome",
    ["outcome"],
)

hardware_bindings_total = Counter(
    "hardware_bindings_total",
    "Total first-use hardware bindings",
)

license_admin_actions_total = Counter(
    "license_admin_actions_total",
    "Total administrator license actions",
    ["action"],
)

# Order metrics
orders_created_total = Counter(
    "orders_created_total",
    "Total orders created",
    ["tier", "test_mode"],
)

orders_completed_total = Counter(
    "orders_completed_total",
    "Total orders completed",
    ["tier"],
)

payment_failures_total = Counter(
    "payment_failures_total",
    "Total failed payment gateway calls",
    ["operation"],
)

notifications_total = Counter(
    "notifications_total",
    "Total license notifications by outcome",
    ["outcome"],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
