"""Shopify Admin API client.

Two outbound operations, always performed in sequence by the relay:

1. ``fetch_access_token`` - client-credentials exchange against the shop's
   OAuth endpoint. A fresh token is requested for every relay call; tokens
   are never cached.
2. ``create_draft_order`` - the ``draftOrderCreate`` GraphQL mutation,
   authenticated with the token from step 1.

The client wraps an ``httpx.AsyncClient`` owned by the application lifespan.
No timeouts or retries are layered on top of the httpx defaults.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from ..config import Settings
from ..errors import (
    TokenExchangeError,
    UpstreamRejectedError,
    UpstreamResponseError,
    UpstreamUnavailableError,
)
from ..observability.logging_config import get_logger
from ..observability.metrics import token_exchanges_total, upstream_latency_seconds
from ..observability.request_id import outbound_headers
from .decoding import decode_response

logger = get_logger(__name__)


DRAFT_ORDER_CREATE = """
mutation draftOrderCreate($input: DraftOrderInput!) {
  draftOrderCreate(input: $input) {
    draftOrder { id invoiceUrl }
    userErrors { field message }
  }
}
"""


@dataclass
class DraftOrderResult:
    """Identifier and invoice URL of the created draft order, verbatim from Shopify."""
    id: str
    invoice_url: Optional[str]


def _dig(data: Any, *keys: str) -> Any:
    """Walk nested dicts, returning None as soon as a level is missing."""
    for key in keys:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


class ShopifyAdminClient:
    """Outbound client for one shop, configured from Settings."""

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient):
        self.settings = settings
        self.http = http_client
        domain = (settings.SHOPIFY_SHOP_DOMAIN or "").strip()
        domain = domain.removeprefix("https://").removeprefix("http://").rstrip("/")
        self.shop_domain = domain

    @property
    def token_url(self) -> str:
        return f"https://{self.shop_domain}/admin/oauth/access_token"

    @property
    def graphql_url(self) -> str:
        return f"https://{self.shop_domain}/admin/api/{self.settings.SHOPIFY_API_VERSION}/graphql.json"

    async def _post(self, operation: str, url: str, **kwargs) -> httpx.Response:
        kwargs["headers"] = {**outbound_headers(), **kwargs.get("headers", {})}
        try:
            with upstream_latency_seconds.labels(operation=operation).time():
                return await self.http.post(url, **kwargs)
        except httpx.HTTPError as e:
            logger.error(
                f"Shopify {operation} request failed: {e!r}",
                extra={"operation": operation, "error_type": type(e).__name__},
            )
            raise UpstreamUnavailableError(
                f"Shopify {operation} request failed: {type(e).__name__}: {e}"
            )

    async def fetch_access_token(self) -> str:
        """Exchange the app's client id/secret for an Admin API access token.

        Returns:
            The access token string

        Raises:
            TokenExchangeError: On a non-2xx answer, an unparseable JSON body,
                or a body without ``access_token``
            UpstreamUnavailableError: On network failure
        """
        form = {
            "grant_type": "client_credentials",
            "client_id": self.settings.SHOPIFY_CLIENT_ID,
            "client_secret": self.settings.SHOPIFY_CLIENT_SECRET,
        }

        try:
            response = await self._post("token", self.token_url, data=form)
            decoded = decode_response(response)

            logger.info(
                "Token response received",
                extra={
                    "status_code": decoded.status_code,
                    "content_type": decoded.content_type,
                    "preview": decoded.preview,
                },
            )

            if not decoded.ok:
                raise TokenExchangeError(
                    f"Token request failed: {decoded.status_code} "
                    f"({decoded.content_type or 'no content-type'}) {decoded.preview}"
                )
            if decoded.json_error:
                raise TokenExchangeError(
                    f"Token response is not valid JSON: {decoded.status_code} "
                    f"({decoded.content_type}) {decoded.json_error}: {decoded.preview}"
                )

            access_token = _dig(decoded.data, "access_token")
            if not access_token:
                raise TokenExchangeError(
                    f"Token missing access_token: {decoded.status_code} "
                    f"({decoded.content_type or 'no content-type'}) {decoded.preview}"
                )
        except Exception:
            token_exchanges_total.labels(status="error").inc()
            raise

        token_exchanges_total.labels(status="success").inc()
        return access_token

    async def create_draft_order(self, access_token: str, draft_input: Dict[str, Any]) -> DraftOrderResult:
        """Run the draftOrderCreate mutation.

        Args:
            access_token: Token from fetch_access_token
            draft_input: DraftOrderInput variables (see draft_orders.mapping)

        Returns:
            DraftOrderResult with the new draft order's id and invoice URL

        Raises:
            UpstreamRejectedError: Non-2xx status, userErrors, or GraphQL errors
            UpstreamResponseError: Body is not JSON or lacks the draft order
            UpstreamUnavailableError: On network failure
        """
        response = await self._post(
            "draft_order_create",
            self.graphql_url,
            json={"query": DRAFT_ORDER_CREATE, "variables": {"input": draft_input}},
            headers={"X-Shopify-Access-Token": access_token},
        )
        decoded = decode_response(response)
        data = decoded.data

        if data is None:
            if not decoded.ok:
                raise UpstreamRejectedError(details=decoded.preview)
            raise UpstreamResponseError(
                f"Unexpected draftOrderCreate response: {decoded.status_code} "
                f"({decoded.content_type or 'no content-type'}) {decoded.preview}"
            )

        user_errors = _dig(data, "data", "draftOrderCreate", "userErrors")
        if not decoded.ok or user_errors:
            logger.warning(
                "Shopify rejected draft order",
                extra={"status_code": decoded.status_code, "user_errors": user_errors},
            )
            raise UpstreamRejectedError(details=user_errors if user_errors is not None else data)

        if _dig(data, "errors"):
            logger.warning("Shopify returned GraphQL errors", extra={"errors": data["errors"]})
            raise UpstreamRejectedError(details=data)

        draft = _dig(data, "data", "draftOrderCreate", "draftOrder")
        if not isinstance(draft, dict) or not draft.get("id"):
            raise UpstreamResponseError(f"draftOrderCreate returned no draft order: {decoded.preview}")

        return DraftOrderResult(id=draft["id"], invoice_url=draft.get("invoiceUrl"))
