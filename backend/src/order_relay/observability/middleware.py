"""Request correlation middleware.

Binds a request id for every call, logs start and completion, and renders
unexpected failures as the relay's 500 body. Rendering happens here rather
than in a FastAPI ``Exception`` handler because Starlette runs that handler
outside all user middleware, where neither CORS nor the request id header
would be applied.
"""

import time
from typing import Callable

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from .logging_config import get_logger
from .request_id import (
    REQUEST_ID_HEADER,
    bind_request_id,
    reset_request_id,
    resolve_request_id,
)

logger = get_logger(__name__)


def server_error_response(exc: Exception) -> JSONResponse:
    """500 body for failures that are not RelayErrors."""
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Server error", "details": str(exc)},
    )


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Correlate, log and contain every HTTP request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = bind_request_id(request_id)

        start_time = time.time()
        logger.info(
            f"{request.method} {request.url.path}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "client_ip": request.client.host if request.client else None,
            }
        )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                f"Unhandled exception on {request.method} {request.url.path}",
                extra={
                    "error_type": type(e).__name__,
                    "duration_ms": round((time.time() - start_time) * 1000, 2),
                },
                exc_info=e,
            )
            response = server_error_response(e)
        else:
            logger.info(
                f"Request completed: {response.status_code}",
                extra={
                    "status_code": response.status_code,
                    "duration_ms": round((time.time() - start_time) * 1000, 2),
                }
            )
        finally:
            reset_request_id(token)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
