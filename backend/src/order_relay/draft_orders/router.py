"""Draft order relay endpoint.

POST /create-draft-order authenticates the caller, validates the order,
and relays it to Shopify. All failures are raised as RelayError subclasses
and rendered by the handler registered in main.
"""

import json
import math

from fastapi import APIRouter, Depends, Request

from ..auth.api_key import require_api_key
from ..errors import PayloadTooLarge, RequestValidationFailed
from ..observability.logging_config import get_logger
from ..observability.metrics import draft_orders_relayed_total, outcome_for_error
from .mapping import validate_order_payload
from .schemas import DraftOrderCreated
from .service import DraftOrderService

logger = get_logger(__name__)

router = APIRouter(tags=["Draft Orders"])


def log_draft_order_hit(request: Request) -> None:
    # Runs before authentication so rejected calls are visible too
    logger.info(
        "Create draft order request received",
        extra={
            "has_x_api_key": bool(request.headers.get("X-Api-Key")),
            "has_authorization": bool(request.headers.get("Authorization")),
        },
    )


def get_draft_order_service(request: Request) -> DraftOrderService:
    return DraftOrderService(
        request.app.state.shopify,
        default_country=request.app.state.settings.DEFAULT_COUNTRY,
    )


def _reject_constant(name: str):
    raise ValueError(f"Invalid JSON literal: {name}")


def _finite_float(text: str) -> float:
    value = float(text)
    if math.isinf(value):
        raise ValueError(f"Number out of range: {text}")
    return value


async def read_json_body(request: Request, limit: int):
    """Read and decode the request body, stopping once it passes ``limit`` bytes."""
    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > limit:
        raise PayloadTooLarge(details=f"Request body exceeds {limit} bytes")

    chunks = []
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > limit:
            raise PayloadTooLarge(details=f"Request body exceeds {limit} bytes")
        chunks.append(chunk)
    body = b"".join(chunks)

    if not body.strip():
        return {}
    try:
        # NaN, Infinity and overflowing numbers are not valid prices upstream
        return json.loads(
            body, parse_constant=_reject_constant, parse_float=_finite_float
        )
    except ValueError as e:
        raise RequestValidationFailed("Invalid JSON body", details=str(e))


@router.post(
    "/create-draft-order",
    response_model=DraftOrderCreated,
    summary="Create a Shopify draft order",
    dependencies=[Depends(log_draft_order_hit), Depends(require_api_key)],
)
async def create_draft_order(
    request: Request,
    service: DraftOrderService = Depends(get_draft_order_service),
) -> DraftOrderCreated:
    """Relay an order to Shopify as a draft order.

    Returns 200 with the draft order id and invoice URL. Errors:
    400 missing field or Shopify rejection, 401 bad key, 413 oversized body,
    500 token exchange or unexpected failure.
    """
    try:
        payload = await read_json_body(request, request.app.state.settings.MAX_BODY_BYTES)
        order = validate_order_payload(payload)
        result = await service.create(order)
    except Exception as e:
        draft_orders_relayed_total.labels(result=outcome_for_error(e)).inc()
        raise

    draft_orders_relayed_total.labels(result="success").inc()
    return DraftOrderCreated(draft_order_id=result.id, invoice_url=result.invoice_url)
