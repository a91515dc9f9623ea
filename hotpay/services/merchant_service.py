"""
Merchant persistence service.

CRITICAL RULES:
1. Merchants are listed by name ascending
2. When deleting a merchant:
   - First delete the payments of every invoice the merchant owns
   - Then delete its invoices and its supported payment options
   - Then delete the merchant
   Cascades are explicit here and never rely on ON DELETE CASCADE
3. Deletion is permanent (no soft-delete)
"""

import logging
from typing import Any, Dict, List, Optional, cast

from supabase import Client

from hotpay.services.helpers import new_id
from hotpay.utils.constants import TABLES

logger = logging.getLogger(__name__)

MERCHANT_COLUMNS = "id,name,website_url,contact_email"


async def get_merchants(supabase_client: Client) -> List[Dict[str, Any]]:
    """
    Fetch all merchants ordered by name.

    Args:
        supabase_client: Supabase client

    Returns:
        List of merchant records
    """
    logger.debug("Fetching merchants")

    result = (
        supabase_client.table(TABLES["MERCHANTS"])
        .select(MERCHANT_COLUMNS)
        .order("name")
        .execute()
    )

    merchants = cast(List[Dict[str, Any]], result.data or [])
    logger.info(f"Fetched {len(merchants)} merchants")

    return merchants


async def get_merchant_by_id(
    supabase_client: Client,
    merchant_id: str,
) -> Optional[Dict[str, Any]]:
    """
    Fetch a single merchant.

    Returns:
        Merchant record, or None if it does not exist
    """
    logger.debug(f"Fetching merchant {merchant_id}")

    result = (
        supabase_client.table(TABLES["MERCHANTS"])
        .select(MERCHANT_COLUMNS)
        .eq("id", merchant_id)
        .execute()
    )

    if not result.data or len(result.data) == 0:
        logger.warning(f"Merchant {merchant_id} not found")
        return None

    return cast(Dict[str, Any], result.data[0])


async def create_merchant(
    supabase_client: Client,
    name: str,
    website_url: Optional[str] = None,
    contact_email: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Create a merchant.

    Args:
        supabase_client: Supabase client
        name: Display name
        website_url: Optional public website
        contact_email: Optional billing contact

    Returns:
        The stored merchant record, including its generated id

    Raises:
        Exception: If the insert returns no data
    """
    merchant_data = {
        "id": new_id(),
        "name": name,
        "website_url": website_url,
        "contact_email": contact_email,
    }

    logger.info(f"Creating merchant {merchant_data['id']}")

    result = supabase_client.table(TABLES["MERCHANTS"]).insert(merchant_data).execute()

    if not result.data or len(result.data) == 0:
        raise Exception("Failed to create merchant: no data returned")

    created = await get_merchant_by_id(supabase_client, merchant_data["id"])
    if not created:
        raise Exception("Failed to create merchant: record not readable after insert")

    logger.info(f"Merchant created successfully: id={created['id']}")

    return created


async def update_merchant(
    supabase_client: Client,
    merchant_id: str,
    **updates: Any,
) -> Optional[Dict[str, Any]]:
    """
    Apply a partial update to a merchant.

    Only the keys present in `updates` are written. An empty update is a
    no-op that returns the current record.

    Returns:
        Updated merchant record, or None if the merchant does not exist
    """
    if not updates:
        return await get_merchant_by_id(supabase_client, merchant_id)

    logger.info(f"Updating merchant {merchant_id}: {list(updates.keys())}")

    result = (
        supabase_client.table(TABLES["MERCHANTS"])
        .update(updates)
        .eq("id", merchant_id)
        .execute()
    )

    if not result.data or len(result.data) == 0:
        logger.warning(f"Merchant {merchant_id} not found for update")
        return None

    return await get_merchant_by_id(supabase_client, merchant_id)


async def delete_merchant(
    supabase_client: Client,
    merchant_id: str,
) -> bool:
    """
    Delete a merchant and everything it owns.

    Order matters: payments -> invoices -> payment options -> merchant, so
    no foreign key is ever left dangling mid-cascade.

    Returns:
        True if the merchant row was removed, False if it did not exist
        (deleting twice is safe)
    """
    logger.info(f"Preparing to delete merchant {merchant_id}")

    invoice_rows = (
        supabase_client.table(TABLES["INVOICES"])
        .select("id")
        .eq("merchant_id", merchant_id)
        .execute()
    )
    invoice_ids = [str(row["id"]) for row in cast(List[Dict[str, Any]], invoice_rows.data or [])]

    if invoice_ids:
        payments_result = (
            supabase_client.table(TABLES["PAYMENTS"])
            .delete()
            .in_("invoice_id", invoice_ids)
            .execute()
        )
        logger.info(
            f"Deleted {len(payments_result.data or [])} payments of "
            f"{len(invoice_ids)} invoices for merchant {merchant_id}"
        )

        (
            supabase_client.table(TABLES["INVOICES"])
            .delete()
            .eq("merchant_id", merchant_id)
            .execute()
        )

    options_result = (
        supabase_client.table(TABLES["PAYMENT_OPTIONS"])
        .delete()
        .eq("merchant_id", merchant_id)
        .execute()
    )
    logger.debug(f"Deleted {len(options_result.data or [])} payment options for merchant {merchant_id}")

    result = (
        supabase_client.table(TABLES["MERCHANTS"])
        .delete()
        .eq("id", merchant_id)
        .execute()
    )

    deleted = bool(result.data)
    if deleted:
        logger.info(f"Merchant {merchant_id} deleted")
    else:
        logger.warning(f"Merchant {merchant_id} not found for delete")

    return deleted
