"""Inbound order validation and Shopify DraftOrderInput mapping.

Mapping is a straight pass-through with defaulting: absent or null optional
address fields become "", a missing country becomes the configured default,
and a missing quantity becomes 1. Present-but-falsy values (quantity 0, an
empty country) are passed through unchanged.
"""

from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ..errors import RequestValidationFailed
from .schemas import DraftOrderRequest, LineItem, ShippingAddress

ADDRESS_FIELDS = (
    "firstName",
    "lastName",
    "address1",
    "address2",
    "city",
    "province",
    "country",
    "zip",
    "phone",
)


def validate_order_payload(payload: Any) -> DraftOrderRequest:
    """Check required fields in order, then parse into DraftOrderRequest.

    Required-field checks run on the raw JSON so the caller gets the first
    missing field by name rather than a list of schema errors.

    Raises:
        RequestValidationFailed: Naming the first missing field, or with the
            schema errors as details when a field has the wrong type
    """
    body = payload if isinstance(payload, dict) else {}

    customer = body.get("customer")
    if not isinstance(customer, dict) or not customer.get("email"):
        raise RequestValidationFailed("Missing customer.email")

    shipping_address = body.get("shipping_address")
    if not isinstance(shipping_address, dict) or not shipping_address.get("address1"):
        raise RequestValidationFailed("Missing shipping_address.address1")

    items = body.get("items")
    if not isinstance(items, list) or len(items) == 0:
        raise RequestValidationFailed("Missing items[]")

    try:
        return DraftOrderRequest.model_validate(body)
    except ValidationError as e:
        raise RequestValidationFailed(
            "Invalid request body",
            details=e.errors(include_url=False, include_context=False),
        )


def format_price(price: Any) -> str:
    """Render a price as Shopify's originalUnitPrice string.

    Integral floats drop the trailing ".0" so 20.0 and 20 both send "20".
    """
    if isinstance(price, float) and price.is_integer():
        return str(int(price))
    return str(price)


def _with_default(value: Optional[str], default: str) -> str:
    return default if value is None else value


def map_shipping_address(address: ShippingAddress, default_country: str) -> Dict[str, str]:
    mapped = {
        field: _with_default(getattr(address, field), "")
        for field in ADDRESS_FIELDS
    }
    mapped["country"] = _with_default(address.country, default_country)
    return mapped


def map_line_items(items: List[LineItem]) -> List[Dict[str, Any]]:
    line_items = []
    for item in items:
        line_item = {
            "quantity": 1 if item.quantity is None else item.quantity,
            "originalUnitPrice": format_price(item.price),
        }
        # An absent title is omitted rather than sent as null
        if item.title is not None:
            line_item = {"title": item.title, **line_item}
        line_items.append(line_item)
    return line_items


def build_draft_order_input(order: DraftOrderRequest, default_country: str = "US") -> Dict[str, Any]:
    """Build the ``input`` variable of the draftOrderCreate mutation.

    Args:
        order: Validated inbound request
        default_country: Country used when the address has none

    Returns:
        dict: DraftOrderInput with email, shippingAddress, note, tags, lineItems
    """
    return {
        "email": order.customer.email,
        "shippingAddress": map_shipping_address(order.shipping_address, default_country),
        "note": order.note,
        "tags": order.tags,
        "lineItems": map_line_items(order.items),
    }
