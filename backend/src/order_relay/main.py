"""Order Relay - Main FastAPI Application

Authenticated relay that turns an inbound order into a Shopify draft order.

This module creates and configures the FastAPI application, including:
- Routers (draft order relay, health/ping/metrics)
- Middleware (request ID correlation, CORS)
- Exception handler rendering {"error": ..., "details": ...}
- The shared httpx client used for outbound Shopify calls
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .config import Settings, get_settings
from .errors import RelayError
from .observability.logging_config import configure_logging
from .observability.middleware import RequestIDMiddleware
from .observability.router import router as observability_router
from .draft_orders.router import router as draft_orders_router
from .shopify.client import ShopifyAdminClient

logger = logging.getLogger(__name__)

CORS_ALLOW_METHODS = ["GET", "POST", "OPTIONS"]
CORS_ALLOW_HEADERS = ["Content-Type", "X-Api-Key", "Authorization", "X-Request-ID"]


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

async def relay_exception_handler(request: Request, exc: RelayError) -> JSONResponse:
    """Render relay errors with their own status and body."""
    if exc.status_code >= 500:
        logger.error(
            f"Relay error on {request.method} {request.url.path}: {exc}",
            extra={"error_type": type(exc).__name__},
        )
    else:
        logger.warning(
            f"{exc.error} on {request.method} {request.url.path}",
            extra={"status_code": exc.status_code},
        )
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


# =============================================================================
# APPLICATION FACTORY
# =============================================================================

def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """Build the relay application.

    Args:
        settings: Validated settings; loaded from the environment when omitted
        transport: Optional httpx transport for outbound calls (tests pass a
            MockTransport)

    Returns:
        FastAPI: Configured application

    Raises:
        ConfigurationError: If required settings are missing
    """
    settings = (settings or get_settings()).require_complete()

    configure_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Own the outbound HTTP client for the application's lifetime."""
        logger.info(
            "Order relay starting up",
            extra={
                "environment": settings.ENV,
                "shop_domain": settings.SHOPIFY_SHOP_DOMAIN,
                "api_version": settings.SHOPIFY_API_VERSION,
            },
        )
        async with httpx.AsyncClient(transport=transport) as http_client:
            app.state.shopify = ShopifyAdminClient(settings, http_client)
            yield
        logger.info("Order relay shutting down")

    docs_enabled = settings.ENV != "production"
    app = FastAPI(
        title="Order Relay",
        description="Relays authenticated orders to Shopify as draft orders",
        version=__version__,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Request ID Middleware also renders unexpected failures as 500s, inside CORS
    app.add_middleware(RequestIDMiddleware)

    # CORS is added last so it wraps everything and answers preflights itself
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=CORS_ALLOW_METHODS,
        allow_headers=CORS_ALLOW_HEADERS,
        expose_headers=["X-Request-ID"],
    )

    app.add_exception_handler(RelayError, relay_exception_handler)

    app.include_router(observability_router)
    app.include_router(draft_orders_router)

    @app.options("/{path:path}", include_in_schema=False)
    async def answer_options(path: str) -> Response:
        """Answer any OPTIONS that is not a CORS preflight with an empty 204."""
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return app


def run() -> None:
    """Start the relay with uvicorn (console script entry point)."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
