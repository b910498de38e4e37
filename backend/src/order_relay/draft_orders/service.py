"""Draft order relay service.

Runs the two outbound calls of a relay in sequence: token exchange, then
draftOrderCreate. Nothing is kept between calls.
"""

from ..observability.logging_config import get_logger
from ..shopify.client import DraftOrderResult, ShopifyAdminClient
from .mapping import build_draft_order_input
from .schemas import DraftOrderRequest

logger = get_logger(__name__)


class DraftOrderService:
    """Relays validated orders to Shopify as draft orders."""

    def __init__(self, shopify: ShopifyAdminClient, default_country: str = "US"):
        self.shopify = shopify
        self.default_country = default_country

    async def create(self, order: DraftOrderRequest) -> DraftOrderResult:
        """Create a draft order for a validated request.

        Raises:
            TokenExchangeError: If no access token could be obtained
            UpstreamRejectedError: If Shopify refused the draft order
            UpstreamResponseError: If Shopify's answer could not be read
        """
        draft_input = build_draft_order_input(order, self.default_country)

        access_token = await self.shopify.fetch_access_token()
        result = await self.shopify.create_draft_order(access_token, draft_input)

        logger.info(
            "Draft order created",
            extra={"draft_order_id": result.id, "line_items": len(draft_input["lineItems"])},
        )
        return result
