"""
Supported payment option persistence service.

Options are always ordered by sort_order, then chain, then asset_symbol
(all ascending) so the dashboard and checkout show a stable list.
"""

import logging
from typing import Any, Dict, List, Optional, cast

from postgrest.exceptions import APIError
from supabase import Client

from hotpay.services.helpers import is_foreign_key_violation, new_id
from hotpay.utils.constants import TABLES
from hotpay.utils.errors import ReferenceNotFoundError

logger = logging.getLogger(__name__)

PAYMENT_OPTION_COLUMNS = "id,merchant_id,chain,asset_symbol,receive_address,enabled,sort_order"


async def get_payment_options(
    supabase_client: Client,
    merchant_id: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    List payment options in display order.

    Args:
        supabase_client: Supabase client
        merchant_id: Optional filter on the owning merchant

    Returns:
        Options sorted by (sort_order, chain, asset_symbol)
    """
    logger.debug(f"Fetching payment options (merchant_id={merchant_id})")

    query = supabase_client.table(TABLES["PAYMENT_OPTIONS"]).select(PAYMENT_OPTION_COLUMNS)
    if merchant_id:
        query = query.eq("merchant_id", merchant_id)

    result = (
        query.order("sort_order")
        .order("chain")
        .order("asset_symbol")
        .execute()
    )

    options = cast(List[Dict[str, Any]], result.data or [])
    logger.info(f"Fetched {len(options)} payment options")

    return options


async def get_payment_option_by_id(
    supabase_client: Client,
    option_id: str,
) -> Optional[Dict[str, Any]]:
    """Fetch a single payment option, or None if it does not exist."""
    result = (
        supabase_client.table(TABLES["PAYMENT_OPTIONS"])
        .select(PAYMENT_OPTION_COLUMNS)
        .eq("id", option_id)
        .execute()
    )

    if not result.data or len(result.data) == 0:
        logger.warning(f"Payment option {option_id} not found")
        return None

    return cast(Dict[str, Any], result.data[0])


async def create_payment_option(
    supabase_client: Client,
    merchant_id: str,
    chain: str,
    asset_symbol: str,
    receive_address: str,
    enabled: bool = True,
    sort_order: int = 0,
) -> Dict[str, Any]:
    """
    Add a payment option to a merchant.

    Raises:
        ReferenceNotFoundError: If merchant_id does not reference a merchant
        Exception: If the insert returns no data
    """
    option_data = {
        "id": new_id(),
        "merchant_id": merchant_id,
        "chain": chain,
        "asset_symbol": asset_symbol,
        "receive_address": receive_address,
        "enabled": enabled,
        "sort_order": sort_order,
    }

    logger.info(
        f"Creating payment option {option_data['id']} for merchant {merchant_id}: "
        f"{asset_symbol} on {chain}"
    )

    try:
        result = supabase_client.table(TABLES["PAYMENT_OPTIONS"]).insert(option_data).execute()
    except APIError as e:
        if is_foreign_key_violation(e):
            raise ReferenceNotFoundError("Merchant not found", field="merchantId") from e
        raise

    if not result.data or len(result.data) == 0:
        raise Exception("Failed to create payment option: no data returned")

    created = await get_payment_option_by_id(supabase_client, option_data["id"])
    if not created:
        raise Exception("Failed to create payment option: record not readable after insert")

    return created


async def update_payment_option(
    supabase_client: Client,
    option_id: str,
    **updates: Any,
) -> Optional[Dict[str, Any]]:
    """
    Apply a partial update to a payment option.

    Returns:
        Updated option, or None if it does not exist
    """
    if not updates:
        return await get_payment_option_by_id(supabase_client, option_id)

    logger.info(f"Updating payment option {option_id}: {list(updates.keys())}")

    try:
        result = (
            supabase_client.table(TABLES["PAYMENT_OPTIONS"])
            .update(updates)
            .eq("id", option_id)
            .execute()
        )
    except APIError as e:
        if is_foreign_key_violation(e):
            raise ReferenceNotFoundError("Merchant not found", field="merchantId") from e
        raise

    if not result.data or len(result.data) == 0:
        logger.warning(f"Payment option {option_id} not found for update")
        return None

    return await get_payment_option_by_id(supabase_client, option_id)


async def delete_payment_option(
    supabase_client: Client,
    option_id: str,
) -> bool:
    """
    Permanently delete a payment option.

    Returns:
        True if a row was removed, False if none matched
    """
    result = (
        supabase_client.table(TABLES["PAYMENT_OPTIONS"])
        .delete()
        .eq("id", option_id)
        .execute()
    )

    deleted = bool(result.data)
    if deleted:
        logger.info(f"Payment option {option_id} deleted")
    else:
        logger.warning(f"Payment option {option_id} not found for delete")

    return deleted
