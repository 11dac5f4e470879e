"""Prometheus metrics for monitoring transfer outcomes and ledger store performance"""

from prometheus_client import Counter, Histogram

# Transfer metrics
transfer_counter = Counter(
    "mt_transfer_total",
    "Total MT transfers processed",
    ["status"],  # Success | Failure
)

transfer_failure_reason_counter = Counter(
    "mt_transfer_failure_reason_total",
    "Failed MT transfers by reason",
    ["reason"],
)

# Ledger store metrics
ledger_latency_histogram = Histogram(
    "ledger_request_latency_seconds",
    "Ledger store call latency",
    ["backend", "operation"],  # sql | http, get | put
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

ledger_failure_counter = Counter(
    "ledger_failures_total",
    "Failed ledger store calls",
    ["operation"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)

FAILURE_REASONS = {
    "Unable to get sender account": "sender_account_missing",
    "Unable to get user by the token": "user_missing",
    "User doesn't have the permission for the action": "permission_denied",
    "Unable to transfer the requested amount": "insufficient_funds",
}


def record_transfer(status: str, comment: str) -> None:
    """Record transfer outcome, bucketing failures by their comment"""
    transfer_counter.labels(status=status).inc()

    if status != "Success":
        reason = FAILURE_REASONS.get(comment, "other")
        transfer_failure_reason_counter.labels(reason=reason).inc()
