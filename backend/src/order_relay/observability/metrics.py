"""Prometheus metrics for the relay.

Defines and exposes operational metrics for monitoring and alerting.
"""

from prometheus_client import Counter, Histogram

from ..errors import RelayError, UpstreamRejectedError

# Relay outcomes
draft_orders_relayed_total = Counter(
    "order_relay_draft_orders_total",
    "Draft order relay requests by outcome",
    ["result"]  # success|bad_request|upstream_error|server_error
)

auth_rejections_total = Counter(
    "order_relay_auth_rejections_total",
    "Requests rejected for a missing or invalid API key",
    ["path"]
)

# Credential exchange
token_exchanges_total = Counter(
    "order_relay_token_exchanges_total",
    "Client-credentials token exchanges against the shop",
    ["status"]  # success|error
)

upstream_latency_seconds = Histogram(
    "order_relay_upstream_latency_seconds",
    "Latency of outbound Shopify calls in seconds",
    ["operation"],  # token|draft_order_create
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
)


def outcome_for_error(exc: Exception) -> str:
    """Map a relay failure to its outcome label."""
    if isinstance(exc, UpstreamRejectedError):
        return "upstream_error"
    if isinstance(exc, RelayError) and exc.status_code < 500:
        return "bad_request"
    return "server_error"
