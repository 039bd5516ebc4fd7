"""Prometheus metrics definitions for the Order Signer Gateway.

Usage:
    from apps.order_signer import metrics

    metrics.requests_total.labels(operation="sign", outcome="success").inc()
    with metrics.sign_duration_seconds.time():
        ...
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram

requests_total = Counter(
    "order_signer_requests_total",
    "Order requests handled, by operation and outcome",
    # operation: sign, place
    # outcome: success, invalid_input, sign_failed, not_configured, place_failed, relayed
    ["operation", "outcome"],
)

auth_failures_total = Counter(
    "order_signer_auth_failures_total",
    "Requests rejected by the bearer-token gate",
)

sign_duration_seconds = Histogram(
    "order_signer_sign_duration_seconds",
    "Time spent in the signing provider",
)

relay_duration_seconds = Histogram(
    "order_signer_relay_duration_seconds",
    "Time spent waiting on the relay target",
)

relay_responses_total = Counter(
    "order_signer_relay_responses_total",
    "Responses received from the relay target, by status class",
    ["status_class"],  # 2xx, 3xx, 4xx, 5xx
)


def status_class(status_code: int) -> str:
    """Bucket an HTTP status code into its class label (e.g. 503 -> "5xx")."""
    return f"{status_code // 100}xx"
