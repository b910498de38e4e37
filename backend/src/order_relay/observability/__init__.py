"""Observability module for the relay.

Provides structured logging, request correlation, metrics and probes.
"""

from .logging_config import configure_logging, get_logger
from .metrics import (
    draft_orders_relayed_total,
    auth_rejections_total,
    token_exchanges_total,
    upstream_latency_seconds,
    outcome_for_error,
)
from .request_id import (
    request_id_var,
    get_request_id,
    resolve_request_id,
    outbound_headers,
)
from .middleware import RequestIDMiddleware

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    # Metrics
    "draft_orders_relayed_total",
    "auth_rejections_total",
    "token_exchanges_total",
    "upstream_latency_seconds",
    "outcome_for_error",
    # Request ID
    "request_id_var",
    "get_request_id",
    "resolve_request_id",
    "outbound_headers",
    # Middleware
    "RequestIDMiddleware",
]
