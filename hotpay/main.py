"""
FastAPI application entry point for the HotPay AnyChain backend.

This module creates the FastAPI app instance, maps errors to the JSON bodies
the dashboard expects, and registers all routers.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from hotpay.config import settings
from hotpay.db.client import get_supabase_client
from hotpay.routes.health import router as health_router
from hotpay.routes.invoices import router as invoices_router
from hotpay.routes.merchants import router as merchants_router
from hotpay.routes.payment_options import router as payment_options_router
from hotpay.routes.payments import router as payments_router
from hotpay.services.seed_service import seed_demo_data
from hotpay.utils.errors import HotPayError

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)

# Location prefixes FastAPI adds in front of the field path
_LOCATION_PREFIXES = ("body", "query", "path", "header", "cookie")


def _get_cors_origins() -> list[str]:
    """
    Get allowed CORS origins based on environment.

    - ENVIRONMENT=production: Uses CORS_ALLOWED_ORIGINS (no origins if unset)
    - ENVIRONMENT=testing/development: Allows all origins for the local dashboard

    Returns:
        List of allowed origin URLs, or ["*"] for development.
    """
    environment = settings.ENVIRONMENT

    if settings.is_production():
        origins = settings.CORS_ALLOWED_ORIGINS
        if origins:
            logger.info(f"CORS configured for production with {len(origins)} allowed origins")
            return origins
        logger.warning(
            "CORS_ALLOWED_ORIGINS not set in production. "
            "No web origins allowed. Set CORS_ALLOWED_ORIGINS for the dashboard."
        )
        return []

    logger.info(f"CORS configured for {environment}: allowing all origins")
    return ["*"]


def _error_field(loc: tuple) -> Optional[str]:
    """Dotted field path of a validation error, without the location prefix."""
    parts = [str(part) for part in loc]
    if parts and parts[0] in _LOCATION_PREFIXES:
        parts = parts[1:]
    return ".".join(parts) or None


def _error_message(error: Dict[str, Any], field: Optional[str]) -> str:
    """Human-readable message for the first failing field."""
    if error.get("type") == "missing":
        return f"{field} is required" if field else "Request body is required"
    if error.get("type") == "json_invalid":
        return "Request body is not valid JSON"

    message = str(error.get("msg", "Invalid request"))
    # Pydantic prefixes messages raised from validators
    for prefix in ("Value error, ", "Assertion failed, "):
        if message.startswith(prefix):
            return message[len(prefix):]
    if field and not message.startswith(field):
        return f"{field}: {message}"
    return message


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Seed demo data on startup when SEED_DEMO_DATA is enabled."""
    if settings.SEED_DEMO_DATA:
        try:
            seeded = await seed_demo_data(get_supabase_client())
            if seeded:
                logger.info("Demo data seeded")
        except Exception as e:
            logger.error(f"Demo seeding failed: {e}", exc_info=True)
    yield


# Create FastAPI app
app = FastAPI(
    title="HotPay AnyChain API",
    description="Backend service for the HotPay AnyChain merchant dashboard",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Turn the first Pydantic error into a 400 {message, field} body.

    The full error list is logged for debugging.
    """
    errors = exc.errors()
    logger.warning(
        f"Validation error on {request.method} {request.url.path}: {errors}"
    )

    first = errors[0] if errors else {}
    field = _error_field(tuple(first.get("loc", ())))

    content: Dict[str, Any] = {"message": _error_message(first, field)}
    if field:
        content["field"] = field

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=content,
    )


@app.exception_handler(HotPayError)
async def hotpay_exception_handler(request: Request, exc: HotPayError):
    """Render domain errors with their status code and body."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        logger.warning(f"{request.method} {request.url.path}: {exc.message}")

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_body(),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Last resort: never leak a traceback to the client."""
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}: {exc}",
        exc_info=True,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )


# Configure CORS with environment-based origins
cors_origins = _get_cors_origins()
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(health_router)
app.include_router(merchants_router)
app.include_router(invoices_router)
app.include_router(payments_router)
app.include_router(payment_options_router)

logger.info("FastAPI app initialized successfully")
