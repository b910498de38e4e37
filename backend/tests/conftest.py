"""Pytest fixtures for relay testing.

Provides reusable test fixtures for:
- Complete relay settings (no .env file is read)
- A fake Shopify upstream served through httpx.MockTransport, recording
  every outbound request
- The relay application and a TestClient driving it

Usage:
    def test_relay(client, fake_shopify, auth_headers, order_payload):
        response = client.post("/create-draft-order", json=order_payload, headers=auth_headers)
        assert response.status_code == 200
        assert len(fake_shopify.requests) == 2
"""

import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

backend_src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(backend_src))

from order_relay.config import Settings
from order_relay.main import create_app


TEST_API_KEY = "test-inbound-key"
TEST_SHOP_DOMAIN = "test-shop.myshopify.com"
TEST_ACCESS_TOKEN = "shpat_test_token"
TEST_DRAFT_ORDER_ID = "gid://shopify/DraftOrder/1234567890"
TEST_INVOICE_URL = "https://test-shop.myshopify.com/12345/invoices/abcdef"


def draft_order_created_body(
    draft_id: str = TEST_DRAFT_ORDER_ID,
    invoice_url: str = TEST_INVOICE_URL,
) -> Dict[str, Any]:
    """Successful draftOrderCreate GraphQL response body."""
    return {
        "data": {
            "draftOrderCreate": {
                "draftOrder": {"id": draft_id, "invoiceUrl": invoice_url},
                "userErrors": [],
            }
        },
        "extensions": {"cost": {"requestedQueryCost": 10}},
    }


class FakeShopify:
    """In-process stand-in for a shop's OAuth and Admin GraphQL endpoints.

    Responses are built per request from factories so each test can swap
    in failures. Every request the relay sends is kept in ``requests``.
    """

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.token_response: Callable[[], httpx.Response] = lambda: httpx.Response(
            200, json={"access_token": TEST_ACCESS_TOKEN, "scope": "write_draft_orders"}
        )
        self.graphql_response: Callable[[], httpx.Response] = lambda: httpx.Response(
            200, json=draft_order_created_body()
        )
        self.error: Optional[Exception] = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if request.url.path == "/admin/oauth/access_token":
            return self.token_response()
        if request.url.path.endswith("/graphql.json"):
            return self.graphql_response()
        return httpx.Response(404, text="Not Found")

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def graphql_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith("/graphql.json")]


@pytest.fixture
def settings() -> Settings:
    """Complete relay settings independent of the process environment."""
    return Settings(
        _env_file=None,
        INBOUND_API_KEY=TEST_API_KEY,
        SHOPIFY_SHOP_DOMAIN=TEST_SHOP_DOMAIN,
        SHOPIFY_CLIENT_ID="test-client-id",
        SHOPIFY_CLIENT_SECRET="test-client-secret",
        SHOPIFY_API_VERSION="2025-10",
        LOG_JSON=False,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def fake_shopify() -> FakeShopify:
    return FakeShopify()


@pytest.fixture
def app(settings, fake_shopify):
    return create_app(settings, transport=fake_shopify.transport)


@pytest.fixture
def client(app):
    """TestClient with the application lifespan running."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers() -> Dict[str, str]:
    return {"X-Api-Key": TEST_API_KEY}


@pytest.fixture
def order_payload() -> Dict[str, Any]:
    """A complete, valid inbound order."""
    return {
        "customer": {"email": "jane.doe@example.com"},
        "shipping_address": {
            "firstName": "Jane",
            "lastName": "Doe",
            "address1": "1 Main Street",
            "address2": "Apt 4",
            "city": "Springfield",
            "province": "IL",
            "country": "US",
            "zip": "62701",
            "phone": "+1 555 0100",
        },
        "items": [
            {"title": "Custom mug", "price": 19.99, "quantity": 2},
            {"title": "Gift wrap", "price": "4.50"},
        ],
        "tags": ["web", "custom"],
        "note": "Leave at the door",
    }
