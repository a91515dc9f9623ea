"""
Supported payment option API endpoints.

Endpoints:
- GET /api/payment-options?merchantId - List options in display order
- POST /api/payment-options - Create option
- PATCH /api/payment-options/{option_id} - Partial update
- DELETE /api/payment-options/{option_id} - Delete option
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
from hotpay.schemas.payment_options import (
    PaymentOptionCreateRequest,
    PaymentOptionResponse,
    PaymentOptionUpdateRequest,
)
from hotpay.services.payment_option_service import (
    create_payment_option,
    delete_payment_option,
    get_payment_options,
    update_payment_option,
)
from hotpay.utils.errors import HotPayError, InternalError, NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/payment-options",
    tags=["payment-options"],
    responses={500: {"model": InternalErrorResponse}},
)

PAYMENT_OPTION_NOT_FOUND = "Payment option not found"


@router.get(
    "",
    response_model=List[PaymentOptionResponse],
    status_code=status.HTTP_200_OK,
    summary="List payment options",
    description="Ordered by sortOrder, then chain, then assetSymbol (all ascending).",
)
async def list_payment_options(
    supabase_client: Annotated[Client, Depends(get_supabase_client)],
    merchant_id: Optional[str] = Query(None, alias="merchantId", description="Filter by merchant"),
) -> List[PaymentOptionResponse]:
    """List payment options, optionally for one merchant."""
    try:
        options = await get_payment_options(supabase_client, merchant_id=merchant_id)
    except Exception as e:
        logger.error(f"Failed to fetch payment options: {e}", exc_info=True)
        raise InternalError("Failed to retrieve payment options")

    return [PaymentOptionResponse.model_validate(o) for o in options]


@router.post(
    "",
    response_model=PaymentOptionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create payment option",
    responses={
        400: {"model": ValidationErrorResponse},
        404: {"model": NotFoundErrorResponse},
    },
)
async def create_new_payment_option(
    request: PaymentOptionCreateRequest,
    supabase_client: Annotated[Client, Depends(get_supabase_client)],
) -> PaymentOptionResponse:
    """Add a (chain, asset, address) option to a merchant."""
    try:
        created = await create_payment_option(
            supabase_client,
            merchant_id=request.merchant_id,
            chain=request.chain,
            asset_symbol=request.asset_symbol,
            receive_address=request.receive_address,
            enabled=request.enabled,
            sort_order=request.sort_order,
        )
    except HotPayError:
        raise
    except Exception as e:
        logger.error(f"Failed to create payment option: {e}", exc_info=True)
        raise InternalError("Failed to create payment option")

    return PaymentOptionResponse.model_validate(created)


@router.patch(
    "/{option_id}",
    response_model=PaymentOptionResponse,
    status_code=status.HTTP_200_OK,
    summary="Update payment option",
    responses={
        400: {"model": ValidationErrorResponse},
        404: {"model": NotFoundErrorResponse},
    },
)
async def update_existing_payment_option(
    option_id: Annotated[str, Path(description="Payment option UUID")],
    request: PaymentOptionUpdateRequest,
    supabase_client: Annotated[Client, Depends(get_supabase_client)],
) -> PaymentOptionResponse:
    """Partially update a payment option."""
    updates = request.model_dump(exclude_unset=True)

    try:
        updated = await update_payment_option(supabase_client, option_id, **updates)
    except HotPayError:
        raise
    except Exception as e:
        logger.error(f"Failed to update payment option {option_id}: {e}", exc_info=True)
        raise InternalError("Failed to update payment option")

    if not updated:
        raise NotFoundError(PAYMENT_OPTION_NOT_FOUND)

    return PaymentOptionResponse.model_validate(updated)


@router.delete(
    "/{option_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete payment option",
    responses={404: {"model": NotFoundErrorResponse}},
)
async def delete_payment_option_record(
    option_id: Annotated[str, Path(description="Payment option UUID")],
    supabase_client: Annotated[Client, Depends(get_supabase_client)],
) -> Response:
    """Delete a payment option."""
    try:
        deleted = await delete_payment_option(supabase_client, option_id)
    except Exception as e:
        logger.error(f"Failed to delete payment option {option_id}: {e}", exc_info=True)
        raise InternalError("Failed to delete payment option")

    if not deleted:
        raise NotFoundError(PAYMENT_OPTION_NOT_FOUND)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
