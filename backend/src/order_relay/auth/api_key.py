"""FastAPI dependency for shared-secret authentication.

Callers present the configured INBOUND_API_KEY either as ``X-Api-Key`` or as
``Authorization: Bearer <key>``. ``X-Api-Key`` wins when both are sent.

Usage:
    @router.post("/create-draft-order", dependencies=[Depends(require_api_key)])
    async def create_draft_order(request: Request):
        ...
"""

import re
import secrets

from fastapi import Request

from ..errors import UnauthorizedError
from ..observability.logging_config import get_logger
from ..observability.metrics import auth_rejections_total

logger = get_logger(__name__)

_BEARER_PREFIX = re.compile(r"^Bearer\s+", re.IGNORECASE)


def get_provided_key(request: Request) -> str:
    """Return the API key supplied by the caller, or "" if none.

    A non-Bearer Authorization value is taken as the key itself.
    """
    api_key_header = request.headers.get("X-Api-Key")
    if api_key_header:
        return api_key_header

    auth_header = request.headers.get("Authorization") or ""
    return _BEARER_PREFIX.sub("", auth_header).strip()


def require_api_key(request: Request) -> None:
    """Reject the request unless it carries the configured inbound key.

    Raises:
        UnauthorizedError: If the key is missing, not configured or mismatched
    """
    expected = request.app.state.settings.INBOUND_API_KEY or ""
    provided = get_provided_key(request)

    if not expected or not provided or not secrets.compare_digest(
        provided.encode("utf-8"), expected.encode("utf-8")
    ):
        logger.warning(
            "Rejected request with missing or invalid API key",
            extra={"path": request.url.path, "key_provided": bool(provided)},
        )
        auth_rejections_total.labels(path=request.url.path).inc()
        raise UnauthorizedError()
