"""Observability API endpoints.

Provides metrics and liveness probes for monitoring.
"""

from fastapi import APIRouter, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from .logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Observability"])


@router.get(
    "/metrics",
    summary="Prometheus metrics endpoint",
    include_in_schema=False,  # Hide from OpenAPI docs
)
def metrics():
    """Expose Prometheus metrics in text exposition format."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


@router.get("/health", summary="Liveness probe")
def health_check():
    return {"ok": True}


@router.get("/ping", summary="Ping probe")
def ping():
    logger.info("Ping received")
    return {"ok": True, "ping": True}
