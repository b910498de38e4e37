"""Outbound Shopify Admin API access."""

from .client import DRAFT_ORDER_CREATE, DraftOrderResult, ShopifyAdminClient
from .decoding import DecodedResponse, decode_response

__all__ = [
    "DRAFT_ORDER_CREATE",
    "DraftOrderResult",
    "ShopifyAdminClient",
    "DecodedResponse",
    "decode_response",
]
