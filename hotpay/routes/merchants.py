"""
Merchant CRUD API endpoints.

Endpoints:
- GET /api/merchants - List merchants (by name)
- GET /api/merchants/{merchant_id} - Get single merchant
- POST /api/merchants - Create merchant
- PATCH /api/merchants/{merchant_id} - Partial update
- DELETE /api/merchants/{merchant_id} - Delete merchant and everything it owns
"""

import logging
from typing import Annotated, List

from fastapi import APIRouter, Depends, Path, Response, status
from supabase import Client

from hotpay.db.client import get_supabase_client
from hotpay.schemas.common import (
    InternalErrorResponse,
    NotFoundErrorResponse,
    ValidationErrorResponse,
)
from hotpay.schemas.merchants import (
    MerchantCreateRequest,
    MerchantResponse,
    MerchantUpdateRequest,
)
from hotpay.services.merchant_service import (
    create_merchant,
    delete_merchant,
    get_merchant_by_id,
    get_merchants,
    update_merchant,
)
from hotpay.utils.errors import HotPayError, InternalError, NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/merchants",
    tags=["merchants"],
    responses={500: {"model": InternalErrorResponse}},
)

MERCHANT_NOT_FOUND = "Merchant not found"


@router.get(
    "",
    response_model=List[MerchantResponse],
    status_code=status.HTTP_200_OK,
    summary="List merchants",
    description="Return every merchant ordered by name (ascending).",
)
async def list_merchants(
    supabase_client: Annotated[Client, Depends(get_supabase_client)],
) -> List[MerchantResponse]:
    """List all merchants."""
    try:
        merchants = await get_merchants(supabase_client)
    except Exception as e:
        logger.error(f"Failed to fetch merchants: {e}", exc_info=True)
        raise InternalError("Failed to retrieve merchants")

    return [MerchantResponse.model_validate(m) for m in merchants]


@router.get(
    "/{merchant_id}",
    response_model=MerchantResponse,
    status_code=status.HTTP_200_OK,
    summary="Get merchant",
    responses={404: {"model": NotFoundErrorResponse}},
)
async def get_merchant(
    merchant_id: Annotated[str, Path(description="Merchant UUID")],
    supabase_client: Annotated[Client, Depends(get_supabase_client)],
) -> MerchantResponse:
    """Get a single merchant or 404."""
    try:
        merchant = await get_merchant_by_id(supabase_client, merchant_id)
    except Exception as e:
        logger.error(f"Failed to fetch merchant {merchant_id}: {e}", exc_info=True)
        raise InternalError("Failed to retrieve merchant")

    if not merchant:
        raise NotFoundError(MERCHANT_NOT_FOUND)

    return MerchantResponse.model_validate(merchant)


@router.post(
    "",
    response_model=MerchantResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create merchant",
    responses={400: {"model": ValidationErrorResponse}},
)
async def create_new_merchant(
    request: MerchantCreateRequest,
    supabase_client: Annotated[Client, Depends(get_supabase_client)],
) -> MerchantResponse:
    """
    Create a merchant.

    The body is validated by MerchantCreateRequest before anything touches
    the database; failures surface as 400 {message, field}.
    """
    logger.info("Creating merchant")

    try:
        created = await create_merchant(
            supabase_client,
            name=request.name,
            website_url=request.website_url,
            contact_email=request.contact_email,
        )
    except HotPayError:
        raise
    except Exception as e:
        logger.error(f"Failed to create merchant: {e}", exc_info=True)
        raise InternalError("Failed to create merchant")

    return MerchantResponse.model_validate(created)


@router.patch(
    "/{merchant_id}",
    response_model=MerchantResponse,
    status_code=status.HTTP_200_OK,
    summary="Update merchant",
    description="""
    Partially update a merchant.

    - Only fields present in the body are changed
    - An empty body returns the current record unchanged
    """,
    responses={
        400: {"model": ValidationErrorResponse},
        404: {"model": NotFoundErrorResponse},
    },
)
async def update_existing_merchant(
    merchant_id: Annotated[str, Path(description="Merchant UUID")],
    request: MerchantUpdateRequest,
    supabase_client: Annotated[Client, Depends(get_supabase_client)],
) -> MerchantResponse:
    """Update merchant details."""
    updates = request.model_dump(exclude_unset=True)

    try:
        updated = await update_merchant(supabase_client, merchant_id, **updates)
    except HotPayError:
        raise
    except Exception as e:
        logger.error(f"Failed to update merchant {merchant_id}: {e}", exc_info=True)
        raise InternalError("Failed to update merchant")

    if not updated:
        raise NotFoundError(MERCHANT_NOT_FOUND)

    return MerchantResponse.model_validate(updated)


@router.delete(
    "/{merchant_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete merchant",
    description="""
    Permanently delete a merchant.

    Cascades to the merchant's invoices (and their payments) and its
    supported payment options.
    """,
    responses={404: {"model": NotFoundErrorResponse}},
)
async def delete_merchant_record(
    merchant_id: Annotated[str, Path(description="Merchant UUID")],
    supabase_client: Annotated[Client, Depends(get_supabase_client)],
) -> Response:
    """Delete a merchant with cascade."""
    try:
        deleted = await delete_merchant(supabase_client, merchant_id)
    except Exception as e:
        logger.error(f"Failed to delete merchant {merchant_id}: {e}", exc_info=True)
        raise InternalError("Failed to delete merchant")

    if not deleted:
        raise NotFoundError(MERCHANT_NOT_FOUND)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
