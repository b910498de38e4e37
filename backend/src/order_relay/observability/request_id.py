"""Request correlation ids.

A caller-supplied ``X-Request-ID`` is reused when it is a short token, so a
browser tool can follow its own id through the relay logs and the Shopify
calls made on its behalf. Anything else is replaced by a fresh UUID4 so
arbitrary header content never reaches log lines or outbound headers.
"""

import re
import uuid
from contextvars import ContextVar, Token
from typing import Dict, Optional

REQUEST_ID_HEADER = "X-Request-ID"

_ACCEPTED_REQUEST_ID = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def resolve_request_id(header_value: Optional[str]) -> str:
    """Return the caller's id if acceptable, otherwise a new UUID4."""
    if header_value and _ACCEPTED_REQUEST_ID.match(header_value):
        return header_value
    return str(uuid.uuid4())


def bind_request_id(request_id: str) -> Token:
    return request_id_var.set(request_id)


def reset_request_id(token: Token) -> None:
    request_id_var.reset(token)


def get_request_id() -> str:
    return request_id_var.get() or "no-request-id"


def outbound_headers() -> Dict[str, str]:
    """Headers that carry the current request id to Shopify.

    Empty outside a request, e.g. when the client is used directly.
    """
    request_id = request_id_var.get()
    return {REQUEST_ID_HEADER: request_id} if request_id else {}
