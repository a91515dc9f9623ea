"""
Invoice persistence service and lifecycle rules.

CRITICAL RULES:
1. amount is stored as numeric(18, 2) and always read back with a ::text cast,
   so "199.00" round-trips as "199.00"
2. Status is validated against the vocabulary at the schema layer only; no
   transition table is enforced (paid -> draft is a legal update)
3. mark_invoice_paid is the only path that sets paid_at. It does not check the
   current status: calling it twice simply refreshes paid_at (last write wins)
4. Deleting an invoice deletes its payments first
5. Listing filters (merchant, status, free text) combine with AND and results
   are ordered newest first
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, cast

from postgrest.exceptions import APIError
from supabase import Client

from hotpay.services.helpers import is_foreign_key_violation, new_id, to_iso, utc_now
from hotpay.utils.amounts import format_amount
from hotpay.utils.constants import INVOICE_AMOUNT_DIGITS, TABLES
from hotpay.utils.errors import ReferenceNotFoundError

logger = logging.getLogger(__name__)

INVOICE_COLUMNS = (
    "id,merchant_id,status,title,description,currency,amount::text,"
    "memo,metadata,expires_at,created_at,paid_at"
)


def _normalize_invoice(row: Dict[str, Any]) -> Dict[str, Any]:
    invoice = dict(row)
    if invoice.get("amount") is not None:
        invoice["amount"] = format_amount(invoice["amount"], INVOICE_AMOUNT_DIGITS[1])
    if invoice.get("metadata") is None:
        invoice["metadata"] = {}
    return invoice


def _quote_filter_value(value: str) -> str:
    """Double-quote a PostgREST filter value so , . : ( ) are taken literally."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def build_search_filter(q: str) -> str:
    """
    Build the PostgREST `or` filter for free-text invoice search.

    Matches `q` as a case-insensitive substring of title OR description.
    LIKE wildcards in `q` are escaped so they match literally. PostgREST
    turns every `*` into `%` and offers no escape for it, so `*` is sent as
    the single-character wildcard `_`; get_invoices then keeps only rows
    that contain the literal text (see _contains_search_text).

    Example:
        >>> build_search_filter("sub")
        'title.ilike."%sub%",description.ilike."%sub%"'
    """
    literal = q.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_").replace("*", "_")
    pattern = _quote_filter_value(f"%{literal}%")
    return f"title.ilike.{pattern},description.ilike.{pattern}"


def _contains_search_text(invoice: Dict[str, Any], q: str) -> bool:
    """Case-insensitive literal substring check over title/description."""
    needle = q.lower()
    return any(
        needle in (invoice.get(column) or "").lower()
        for column in ("title", "description")
    )


async def get_invoices(
    supabase_client: Client,
    merchant_id: Optional[str] = None,
    status: Optional[str] = None,
    q: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    List invoices, newest first.

    Args:
        supabase_client: Supabase client
        merchant_id: Optional exact-match filter on the owning merchant
        status: Optional exact-match filter on status; passed through as-is,
            so an unknown status simply matches nothing
        q: Optional case-insensitive substring search over title/description

    Returns:
        List of invoice records
    """
    logger.debug(f"Fetching invoices (filters: merchant_id={merchant_id}, status={status}, q={q!r})")

    query = supabase_client.table(TABLES["INVOICES"]).select(INVOICE_COLUMNS)

    # Apply filters
    if merchant_id:
        query = query.eq("merchant_id", merchant_id)
    if status:
        query = query.eq("status", status)
    if q:
        query = query.or_(build_search_filter(q))

    result = query.order("created_at", desc=True).execute()

    invoices = [_normalize_invoice(row) for row in cast(List[Dict[str, Any]], result.data or [])]
    if q and "*" in q:
        invoices = [inv for inv in invoices if _contains_search_text(inv, q)]
    logger.info(f"Fetched {len(invoices)} invoices")

    return invoices


async def get_invoice_by_id(
    supabase_client: Client,
    invoice_id: str,
) -> Optional[Dict[str, Any]]:
    """
    Fetch a single invoice by its ID.

    Returns:
        Invoice record, or None if it does not exist
    """
    logger.debug(f"Fetching invoice {invoice_id}")

    result = (
        supabase_client.table(TABLES["INVOICES"])
        .select(INVOICE_COLUMNS)
        .eq("id", invoice_id)
        .execute()
    )

    if not result.data or len(result.data) == 0:
        logger.warning(f"Invoice {invoice_id} not found")
        return None

    return _normalize_invoice(cast(Dict[str, Any], result.data[0]))


async def create_invoice(
    supabase_client: Client,
    merchant_id: str,
    title: str,
    amount: Decimal,
    status: str = "unpaid",
    currency: str = "USD",
    description: Optional[str] = None,
    memo: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
    expires_at: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Create an invoice record.

    The server generates the id and created_at; paid_at starts empty.

    Args:
        supabase_client: Supabase client
        merchant_id: Owning merchant UUID
        title: Invoice title
        amount: Validated amount (2 fractional digits)
        status: Initial status (default "unpaid")
        currency: Currency code (default "USD")
        description: Optional description
        memo: Optional payer-facing memo
        metadata: Arbitrary key-value mapping (default empty)
        expires_at: Optional expiry

    Returns:
        The stored invoice record

    Raises:
        ReferenceNotFoundError: If merchant_id does not reference a merchant
        Exception: If the insert returns no data
    """
    invoice_data = {
        "id": new_id(),
        "merchant_id": merchant_id,
        "status": status,
        "title": title,
        "description": description,
        "currency": currency,
        "amount": format_amount(amount, INVOICE_AMOUNT_DIGITS[1]),
        "memo": memo,
        "metadata": metadata or {},
        "expires_at": to_iso(expires_at),
        "created_at": to_iso(utc_now()),
        "paid_at": None,
    }

    logger.info(
        f"Creating invoice {invoice_data['id']} for merchant {merchant_id}: "
        f"amount={invoice_data['amount']} {currency}, status={status}"
    )

    try:
        result = supabase_client.table(TABLES["INVOICES"]).insert(invoice_data).execute()
    except APIError as e:
        if is_foreign_key_violation(e):
            logger.warning(f"Invoice insert rejected: merchant {merchant_id} does not exist")
            raise ReferenceNotFoundError("Merchant not found", field="merchantId") from e
        raise

    if not result.data or len(result.data) == 0:
        raise Exception("Failed to create invoice: no data returned")

    created = await get_invoice_by_id(supabase_client, invoice_data["id"])
    if not created:
        raise Exception("Failed to create invoice: record not readable after insert")

    logger.info(f"Invoice created successfully: id={created['id']}")

    return created


async def update_invoice(
    supabase_client: Client,
    invoice_id: str,
    **updates: Any,
) -> Optional[Dict[str, Any]]:
    """
    Apply a partial update to an invoice.

    Any subset of fields, status included, may change. No transition rules
    are applied. An empty update returns the current record untouched.

    Returns:
        Updated invoice record, or None if the invoice does not exist

    Raises:
        ReferenceNotFoundError: If merchant_id is moved to a missing merchant
    """
    if not updates:
        return await get_invoice_by_id(supabase_client, invoice_id)

    if isinstance(updates.get("amount"), Decimal):
        updates["amount"] = format_amount(updates["amount"], INVOICE_AMOUNT_DIGITS[1])
    if isinstance(updates.get("expires_at"), datetime):
        updates["expires_at"] = to_iso(updates["expires_at"])

    logger.info(f"Updating invoice {invoice_id}: {list(updates.keys())}")

    try:
        result = (
            supabase_client.table(TABLES["INVOICES"])
            .update(updates)
            .eq("id", invoice_id)
            .execute()
        )
    except APIError as e:
        if is_foreign_key_violation(e):
            raise ReferenceNotFoundError("Merchant not found", field="merchantId") from e
        raise

    if not result.data or len(result.data) == 0:
        logger.warning(f"Invoice {invoice_id} not found for update")
        return None

    return await get_invoice_by_id(supabase_client, invoice_id)


async def mark_invoice_paid(
    supabase_client: Client,
    invoice_id: str,
    paid_at: Optional[datetime] = None,
) -> Optional[Dict[str, Any]]:
    """
    Set status=paid and stamp paid_at.

    Unconditional: an invoice that is already paid gets a fresh paid_at.
    Concurrent calls are last-write-wins.

    Args:
        supabase_client: Supabase client
        invoice_id: UUID of the invoice
        paid_at: Explicit payment time; defaults to now (UTC)

    Returns:
        Updated invoice record, or None if the invoice does not exist
        (nothing is created in that case)
    """
    stamped_at = to_iso(paid_at or utc_now())

    logger.info(f"Marking invoice {invoice_id} paid at {stamped_at}")

    result = (
        supabase_client.table(TABLES["INVOICES"])
        .update({"status": "paid", "paid_at": stamped_at})
        .eq("id", invoice_id)
        .execute()
    )

    if not result.data or len(result.data) == 0:
        logger.warning(f"Invoice {invoice_id} not found for mark-paid")
        return None

    return await get_invoice_by_id(supabase_client, invoice_id)


async def delete_invoice(
    supabase_client: Client,
    invoice_id: str,
) -> bool:
    """
    Permanently delete an invoice and its payments.

    Returns:
        True if the invoice row was removed, False if it did not exist
    """
    logger.info(f"Preparing to delete invoice {invoice_id}")

    payments_result = (
        supabase_client.table(TABLES["PAYMENTS"])
        .delete()
        .eq("invoice_id", invoice_id)
        .execute()
    )
    logger.debug(f"Deleted {len(payments_result.data or [])} payments of invoice {invoice_id}")

    result = (
        supabase_client.table(TABLES["INVOICES"])
        .delete()
        .eq("id", invoice_id)
        .execute()
    )

    deleted = bool(result.data)
    if deleted:
        logger.info(f"Invoice {invoice_id} deleted")
    else:
        logger.warning(f"Invoice {invoice_id} not found for delete")

    return deleted
