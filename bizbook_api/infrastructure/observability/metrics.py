"""Prometheus metrics for payment activity, snapshots, and identity checks"""

from prometheus_client import Counter, Histogram

# Payment metrics
payments_marked_paid_counter = Counter(
    "bizbook_payments_marked_paid_total",
    "Payments transitioned to paid",
    ["account_type"],  # credit_card | loan | monthly_payment
)

payment_mark_failures_counter = Counter(
    "bizbook_payment_mark_failures_total",
    "Mark-as-paid calls that left a pending payment behind",
)

# Net worth metrics
snapshot_counter = Counter(
    "bizbook_net_worth_snapshots_total",
    "Net worth snapshots recorded",
)

# Identity provider metrics
identity_failures_counter = Counter(
    "bizbook_identity_failures_total",
    "Failed bearer credential verifications",
    ["reason"],  # missing | rejected | provider_error
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_payment_marked_paid(account_type: str) -> None:
    payments_marked_paid_counter.labels(account_type=account_type).inc()


def record_identity_failure(reason: str) -> None:
    identity_failures_counter.labels(reason=reason).inc()
