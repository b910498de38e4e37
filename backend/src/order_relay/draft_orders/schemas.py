"""Pydantic schemas for the draft order relay.

Field names follow the inbound wire format (``shipping_address`` uses the
camelCase names Shopify expects for ``firstName``/``lastName``).
"""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ============================================================================
# Inbound request
# ============================================================================

class Customer(BaseModel):
    email: str

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class ShippingAddress(BaseModel):
    """Shipping address; only address1 is required."""
    address1: str
    address2: Optional[str] = None
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    country: Optional[str] = None
    zip: Optional[str] = None
    phone: Optional[str] = None

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class LineItem(BaseModel):
    """One purchasable entry; quantity defaults to 1 when mapped."""
    title: Optional[str] = None
    price: Union[int, float, str]
    quantity: Optional[int] = None

    model_config = ConfigDict(extra="ignore")


class DraftOrderRequest(BaseModel):
    """Body of POST /create-draft-order."""
    customer: Customer
    shipping_address: ShippingAddress
    items: List[LineItem] = Field(..., min_length=1)
    tags: List[str] = Field(default_factory=list)
    note: str = ""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    @field_validator("tags", mode="before")
    @classmethod
    def _null_tags(cls, value):
        return [] if value is None else value

    @field_validator("note", mode="before")
    @classmethod
    def _null_note(cls, value):
        return "" if value is None else value


# ============================================================================
# Response
# ============================================================================

class DraftOrderCreated(BaseModel):
    """Successful relay response."""
    draft_order_id: str
    invoice_url: Optional[str] = None
