#!/usr/bin/env python3
"""
Demo Data Seeding Script

Creates the "HotPay Demo Store" merchant with three payment options and two
unpaid invoices in the configured Supabase project. Nothing is written when
at least one merchant already exists.

Usage:
    python scripts/seed_demo_data.py
    python scripts/seed_demo_data.py --list
    python scripts/seed_demo_data.py --debug

Requires SUPABASE_URL and SUPABASE_KEY (environment or .env file).
"""

import argparse
import asyncio
import logging
import os
import sys

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from hotpay.db.client import get_supabase_client
from hotpay.services.invoice_service import get_invoices
from hotpay.services.merchant_service import get_merchants
from hotpay.services.payment_option_service import get_payment_options
from hotpay.services.seed_service import seed_demo_data


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


async def run_seed(list_after: bool = False) -> int:
    """Seed the store and optionally print what it now contains."""
    client = get_supabase_client()

    seeded = await seed_demo_data(client)
    if seeded:
        print("\nDemo merchant, payment options and invoices created.")
    else:
        print("\nMerchants already exist; nothing was seeded.")

    if list_after:
        for merchant in await get_merchants(client):
            print(f"\n{merchant['name']} ({merchant['id']})")

            options = await get_payment_options(client, merchant_id=merchant["id"])
            for option in options:
                state = "on" if option["enabled"] else "off"
                print(
                    f"  option #{option['sort_order']}: {option['chain']}/"
                    f"{option['asset_symbol']} -> {option['receive_address']} [{state}]"
                )

            invoices = await get_invoices(client, merchant_id=merchant["id"])
            for invoice in invoices:
                print(
                    f"  invoice: {invoice['title']} {invoice['amount']} "
                    f"{invoice['currency']} [{invoice['status']}]"
                )

    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Seed the HotPay AnyChain demo merchant"
    )
    parser.add_argument(
        "--list", "-l",
        action="store_true",
        help="Print merchants, payment options and invoices after seeding"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        sys.exit(asyncio.run(run_seed(list_after=args.list)))
    except ValueError as e:
        print(f"\nERROR: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
