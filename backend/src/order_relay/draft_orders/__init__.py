"""Draft order relay: request schemas, field mapping, service and endpoint."""

from .mapping import build_draft_order_input, validate_order_payload
from .schemas import DraftOrderCreated, DraftOrderRequest
from .service import DraftOrderService

__all__ = [
    "build_draft_order_input",
    "validate_order_payload",
    "DraftOrderCreated",
    "DraftOrderRequest",
    "DraftOrderService",
]
