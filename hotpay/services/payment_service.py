"""
Payment persistence service.

Payments are manual records of funds sent toward an invoice. A payment can
only be created for an existing invoice: the invoice is read first and a
missing invoice raises ReferenceNotFoundError("Invoice not found").
"""

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional, cast

from postgrest.exceptions import APIError
from supabase import Client

from hotpay.services.helpers import is_foreign_key_violation, new_id, to_iso, utc_now
from hotpay.services.invoice_service import get_invoice_by_id
from hotpay.utils.amounts import format_amount
from hotpay.utils.constants import PAYMENT_AMOUNT_DIGITS, TABLES
from hotpay.utils.errors import ReferenceNotFoundError

logger = logging.getLogger(__name__)

PAYMENT_COLUMNS = (
    "id,invoice_id,chain,asset_symbol,to_address,from_address,amount::text,"
    "tx_hash,status,detected_at,confirmed_at"
)


def _normalize_payment(row: Dict[str, Any]) -> Dict[str, Any]:
    payment = dict(row)
    if payment.get("amount") is not None:
        payment["amount"] = format_amount(payment["amount"], PAYMENT_AMOUNT_DIGITS[1])
    return payment


async def get_payments(
    supabase_client: Client,
    invoice_id: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    List payments, most recently detected first.

    Args:
        supabase_client: Supabase client
        invoice_id: Optional filter on the owning invoice

    Returns:
        List of payment records
    """
    logger.debug(f"Fetching payments (invoice_id={invoice_id})")

    query = supabase_client.table(TABLES["PAYMENTS"]).select(PAYMENT_COLUMNS)
    if invoice_id:
        query = query.eq("invoice_id", invoice_id)

    result = query.order("detected_at", desc=True).execute()

    payments = [_normalize_payment(row) for row in cast(List[Dict[str, Any]], result.data or [])]
    logger.info(f"Fetched {len(payments)} payments")

    return payments


async def get_payment_by_id(
    supabase_client: Client,
    payment_id: str,
) -> Optional[Dict[str, Any]]:
    """Fetch a single payment, or None if it does not exist."""
    result = (
        supabase_client.table(TABLES["PAYMENTS"])
        .select(PAYMENT_COLUMNS)
        .eq("id", payment_id)
        .execute()
    )

    if not result.data or len(result.data) == 0:
        logger.warning(f"Payment {payment_id} not found")
        return None

    return _normalize_payment(cast(Dict[str, Any], result.data[0]))


async def create_payment(
    supabase_client: Client,
    invoice_id: str,
    chain: str,
    asset_symbol: str,
    to_address: str,
    amount: Decimal,
    from_address: Optional[str] = None,
    tx_hash: Optional[str] = None,
    status: str = "detected",
) -> Dict[str, Any]:
    """
    Record a payment against an invoice.

    Steps:
    1. Read the parent invoice; missing -> ReferenceNotFoundError
    2. Insert the payment with a generated id and detected_at = now

    Returns:
        The stored payment record

    Raises:
        ReferenceNotFoundError: If the invoice does not exist (also when it is
            deleted between the read and the insert)
        Exception: If the insert returns no data
    """
    invoice = await get_invoice_by_id(supabase_client, invoice_id)
    if not invoice:
        logger.warning(f"Payment rejected: invoice {invoice_id} not found")
        raise ReferenceNotFoundError("Invoice not found", field="invoiceId")

    payment_data = {
        "id": new_id(),
        "invoice_id": invoice_id,
        "chain": chain,
        "asset_symbol": asset_symbol,
        "to_address": to_address,
        "from_address": from_address,
        "amount": format_amount(amount, PAYMENT_AMOUNT_DIGITS[1]),
        "tx_hash": tx_hash,
        "status": status,
        "detected_at": to_iso(utc_now()),
        "confirmed_at": None,
    }

    logger.info(
        f"Recording payment {payment_data['id']} for invoice {invoice_id}: "
        f"{payment_data['amount']} {asset_symbol} on {chain}, status={status}"
    )

    try:
        result = supabase_client.table(TABLES["PAYMENTS"]).insert(payment_data).execute()
    except APIError as e:
        if is_foreign_key_violation(e):
            raise ReferenceNotFoundError("Invoice not found", field="invoiceId") from e
        raise

    if not result.data or len(result.data) == 0:
        raise Exception("Failed to create payment: no data returned")

    created = await get_payment_by_id(supabase_client, payment_data["id"])
    if not created:
        raise Exception("Failed to create payment: record not readable after insert")

    return created
