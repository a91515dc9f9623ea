"""
Payment API endpoints.

Endpoints:
- GET /api/payments?invoiceId - List payments (most recently detected first)
- POST /api/payments - Record a payment against an existing invoice
"""

import logging
from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Query, status
from supabase import Client

from hotpay.db.client import get_supabase_client
from hotpay.schemas.common import (
    InternalErrorResponse,
    NotFoundErrorResponse,
    ValidationErrorResponse,
)
from hotpay.schemas.payments import PaymentCreateRequest, PaymentResponse
from hotpay.services.payment_service import create_payment, get_payments
from hotpay.utils.errors import HotPayError, InternalError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/payments",
    tags=["payments"],
    responses={500: {"model": InternalErrorResponse}},
)


@router.get(
    "",
    response_model=List[PaymentResponse],
    status_code=status.HTTP_200_OK,
    summary="List payments",
)
async def list_payments(
    supabase_client: Annotated[Client, Depends(get_supabase_client)],
    invoice_id: Optional[str] = Query(None, alias="invoiceId", description="Filter by invoice"),
) -> List[PaymentResponse]:
    """List payments, optionally for one invoice."""
    try:
        payments = await get_payments(supabase_client, invoice_id=invoice_id)
    except Exception as e:
        logger.error(f"Failed to fetch payments: {e}", exc_info=True)
        raise InternalError("Failed to retrieve payments")

    return [PaymentResponse.model_validate(p) for p in payments]


@router.post(
    "",
    response_model=PaymentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record payment",
    description="""
    Record a manually observed payment.

    - The body is validated first (400 on failure)
    - Then the invoice is looked up; a missing invoice is 404 "Invoice not found"
    - detectedAt is stamped by the server
    """,
    responses={
        400: {"model": ValidationErrorResponse},
        404: {"model": NotFoundErrorResponse},
    },
)
async def create_new_payment(
    request: PaymentCreateRequest,
    supabase_client: Annotated[Client, Depends(get_supabase_client)],
) -> PaymentResponse:
    """Create a payment for an existing invoice."""
    try:
        created = await create_payment(
            supabase_client,
            invoice_id=request.invoice_id,
            chain=request.chain,
            asset_symbol=request.asset_symbol,
            to_address=request.to_address,
            amount=request.amount,
            from_address=request.from_address,
            tx_hash=request.tx_hash,
            status=request.status,
        )
    except HotPayError:
        raise
    except Exception as e:
        logger.error(f"Failed to create payment: {e}", exc_info=True)
        raise InternalError("Failed to create payment")

    logger.info(f"Payment {created.get('id')} recorded for invoice {request.invoice_id}")

    return PaymentResponse.model_validate(created)
