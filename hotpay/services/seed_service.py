"""
Demo data for a fresh dashboard.

Creates one merchant with three payment options and two unpaid invoices,
but only when the merchants table is empty.
"""

import logging
from decimal import Decimal

from supabase import Client

from hotpay.services.invoice_service import create_invoice
from hotpay.services.merchant_service import create_merchant, get_merchants
from hotpay.services.payment_option_service import create_payment_option

logger = logging.getLogger(__name__)

DEMO_PAYMENT_OPTIONS = [
    ("Ethereum", "USDC", "0x6B175474E89094C44Da98b954EedeAC495271d0F"),
    ("Solana", "USDC", "9xQeWvG816bUx9EPf8Q7zv1QH3pE6GmYcRUpZJ2xvYp"),
    ("Polygon", "USDT", "0x2791Bca1f2de4661ED88A30C99A7a9449Aa84174"),
]


async def seed_demo_data(supabase_client: Client) -> bool:
    """
    Insert the demo merchant and its records if no merchant exists yet.

    Returns:
        True if data was inserted, False if the store was already populated
    """
    existing = await get_merchants(supabase_client)
    if existing:
        logger.info(f"Skipping demo seed: {len(existing)} merchants already present")
        return False

    merchant = await create_merchant(
        supabase_client,
        name="HotPay Demo Store",
        website_url="https://hotpay.example",
        contact_email="billing@hotpay.example",
    )

    for position, (chain, asset_symbol, address) in enumerate(DEMO_PAYMENT_OPTIONS, start=1):
        await create_payment_option(
            supabase_client,
            merchant_id=merchant["id"],
            chain=chain,
            asset_symbol=asset_symbol,
            receive_address=address,
            enabled=True,
            sort_order=position,
        )

    await create_invoice(
        supabase_client,
        merchant_id=merchant["id"],
        status="unpaid",
        title="Order #1042",
        description="Premium subscription (monthly) - AnyChain checkout",
        currency="USD",
        amount=Decimal("49.00"),
        memo="SUB-1042",
        metadata={"customer": "Acme Co"},
    )

    await create_invoice(
        supabase_client,
        merchant_id=merchant["id"],
        status="unpaid",
        title="Invoice INV-00018",
        description="Hardware shipment - payment on supported chains",
        currency="USD",
        amount=Decimal("219.99"),
        memo="SHIP-18",
        metadata={"po": "PO-8871"},
    )

    logger.info(f"Seeded demo merchant {merchant['id']}")
    return True
