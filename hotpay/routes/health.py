"""
Health check route.

Public, database-free liveness check mounted at the root (GET /health).
"""

from fastapi import APIRouter

from hotpay.schemas.health import HealthResponse
from hotpay.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["system"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check endpoint",
    status_code=200,
)
async def health_check() -> HealthResponse:
    """
    Liveness check.

    Example response:
        {"status": "ok", "service": "hotpay-anychain"}
    """
    logger.debug("Health check endpoint called")

    return HealthResponse()
