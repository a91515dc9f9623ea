"""
Invoice API endpoints.

Endpoints:
- GET /api/invoices?merchantId&status&q - List/filter invoices (newest first)
- GET /api/invoices/{invoice_id} - Get single invoice
- POST /api/invoices - Create invoice
- PATCH /api/invoices/{invoice_id} - Partial update (any status change allowed)
- POST /api/invoices/{invoice_id}/mark-paid - Set status=paid and stamp paidAt
- DELETE /api/invoices/{invoice_id} - Delete invoice and its payments
"""

import logging
from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Path, Query, Response, status
from supabase import Client

from hotpay.db.client import get_supabase_client
from hotpay.schemas.common import (
    InternalErrorResponse,
    NotFoundErrorResponse,
    ValidationErrorResponse,
)
from hotpay.schemas.invoices import (
    InvoiceCreateRequest,
    InvoiceMarkPaidRequest,
    InvoiceResponse,
    InvoiceUpdateRequest,
)
from hotpay.services.invoice_service import (
    create_invoice,
    delete_invoice,
    get_invoice_by_id,
    get_invoices,
    mark_invoice_paid,
    update_invoice,
)
from hotpay.utils.errors import HotPayError, InternalError, NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/invoices",
    tags=["invoices"],
    responses={500: {"model": InternalErrorResponse}},
)

INVOICE_NOT_FOUND = "Invoice not found"


@router.get(
    "",
    response_model=List[InvoiceResponse],
    status_code=status.HTTP_200_OK,
    summary="List invoices",
    description="""
    Retrieve invoices, newest first.

    Filters (all optional, combined with AND):
    - merchantId: exact match on the owning merchant
    - status: exact match; not checked against the vocabulary
    - q: case-insensitive substring of title or description
    """,
)
async def list_invoices(
    supabase_client: Annotated[Client, Depends(get_supabase_client)],
    merchant_id: Optional[str] = Query(None, alias="merchantId", description="Filter by merchant"),
    invoice_status: Optional[str] = Query(None, alias="status", description="Filter by status"),
    q: Optional[str] = Query(None, description="Search title/description"),
) -> List[InvoiceResponse]:
    """List invoices with optional filters."""
    try:
        invoices = await get_invoices(
            supabase_client,
            merchant_id=merchant_id,
            status=invoice_status,
            q=q,
        )
    except Exception as e:
        logger.error(f"Failed to fetch invoices: {e}", exc_info=True)
        raise InternalError("Failed to retrieve invoices")

    return [InvoiceResponse.model_validate(inv) for inv in invoices]


@router.get(
    "/{invoice_id}",
    response_model=InvoiceResponse,
    status_code=status.HTTP_200_OK,
    summary="Get invoice",
    responses={404: {"model": NotFoundErrorResponse}},
)
async def get_invoice(
    invoice_id: Annotated[str, Path(description="Invoice UUID")],
    supabase_client: Annotated[Client, Depends(get_supabase_client)],
) -> InvoiceResponse:
    """Get a single invoice or 404."""
    try:
        invoice = await get_invoice_by_id(supabase_client, invoice_id)
    except Exception as e:
        logger.error(f"Failed to fetch invoice {invoice_id}: {e}", exc_info=True)
        raise InternalError("Failed to retrieve invoice")

    if not invoice:
        raise NotFoundError(INVOICE_NOT_FOUND)

    return InvoiceResponse.model_validate(invoice)


@router.post(
    "",
    response_model=InvoiceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create invoice",
    description="""
    Create an invoice for a merchant.

    - status defaults to "unpaid", currency to "USD", metadata to {}
    - amount is a decimal string normalized to 2 fractional digits
    - createdAt is stamped by the server; paidAt starts null
    """,
    responses={
        400: {"model": ValidationErrorResponse},
        404: {"model": NotFoundErrorResponse},
    },
)
async def create_new_invoice(
    request: InvoiceCreateRequest,
    supabase_client: Annotated[Client, Depends(get_supabase_client)],
) -> InvoiceResponse:
    """
    Create an invoice.

    Parse/Validate Request
    - InvoiceCreateRequest checks required fields, status vocabulary and amount

    Persistence
    - invoice_service.create_invoice generates id/createdAt and inserts
    - A merchantId the store does not know surfaces as 404 "Merchant not found"
    """
    logger.info(f"Creating invoice for merchant {request.merchant_id}")

    try:
        created = await create_invoice(
            supabase_client,
            merchant_id=request.merchant_id,
            title=request.title,
            amount=request.amount,
            status=request.status,
            currency=request.currency,
            description=request.description,
            memo=request.memo,
            metadata=request.metadata,
            expires_at=request.expires_at,
        )
    except HotPayError:
        raise
    except Exception as e:
        logger.error(f"Failed to create invoice: {e}", exc_info=True)
        raise InternalError("Failed to create invoice")

    return InvoiceResponse.model_validate(created)


@router.patch(
    "/{invoice_id}",
    response_model=InvoiceResponse,
    status_code=status.HTTP_200_OK,
    summary="Update invoice",
    description="""
    Partially update an invoice.

    - Only fields present in the body are changed
    - status may be set to any value of the vocabulary; no transition rules
    - paidAt cannot be set here (see mark-paid)
    """,
    responses={
        400: {"model": ValidationErrorResponse},
        404: {"model": NotFoundErrorResponse},
    },
)
async def update_existing_invoice(
    invoice_id: Annotated[str, Path(description="Invoice UUID")],
    request: InvoiceUpdateRequest,
    supabase_client: Annotated[Client, Depends(get_supabase_client)],
) -> InvoiceResponse:
    """Update invoice fields."""
    updates = request.model_dump(exclude_unset=True)

    try:
        updated = await update_invoice(supabase_client, invoice_id, **updates)
    except HotPayError:
        raise
    except Exception as e:
        logger.error(f"Failed to update invoice {invoice_id}: {e}", exc_info=True)
        raise InternalError("Failed to update invoice")

    if not updated:
        raise NotFoundError(INVOICE_NOT_FOUND)

    return InvoiceResponse.model_validate(updated)


@router.post(
    "/{invoice_id}/mark-paid",
    response_model=InvoiceResponse,
    status_code=status.HTTP_200_OK,
    summary="Mark invoice paid",
    description="""
    Set status to "paid" and stamp paidAt (now, or the paidAt given in the body).

    Calling it again on a paid invoice refreshes paidAt.
    """,
    responses={404: {"model": NotFoundErrorResponse}},
)
async def mark_paid(
    invoice_id: Annotated[str, Path(description="Invoice UUID")],
    supabase_client: Annotated[Client, Depends(get_supabase_client)],
    request: Optional[InvoiceMarkPaidRequest] = None,
) -> InvoiceResponse:
    """Privileged status transition to paid."""
    paid_at = request.paid_at if request else None
    payment_id = request.payment_id if request else None

    if payment_id:
        logger.info(f"Invoice {invoice_id} mark-paid references payment {payment_id}")

    try:
        updated = await mark_invoice_paid(supabase_client, invoice_id, paid_at=paid_at)
    except Exception as e:
        logger.error(f"Failed to mark invoice {invoice_id} paid: {e}", exc_info=True)
        raise InternalError("Failed to mark invoice paid")

    if not updated:
        raise NotFoundError(INVOICE_NOT_FOUND)

    return InvoiceResponse.model_validate(updated)


@router.delete(
    "/{invoice_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete invoice",
    description="Permanently delete an invoice and all of its payments.",
    responses={404: {"model": NotFoundErrorResponse}},
)
async def delete_invoice_record(
    invoice_id: Annotated[str, Path(description="Invoice UUID")],
    supabase_client: Annotated[Client, Depends(get_supabase_client)],
) -> Response:
    """Delete an invoice with cascade to payments."""
    try:
        deleted = await delete_invoice(supabase_client, invoice_id)
    except Exception as e:
        logger.error(f"Failed to delete invoice {invoice_id}: {e}", exc_info=True)
        raise InternalError("Failed to delete invoice")

    if not deleted:
        raise NotFoundError(INVOICE_NOT_FOUND)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
