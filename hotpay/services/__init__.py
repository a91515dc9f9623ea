"""
Service layer for the HotPay AnyChain backend.

Contains the persistence gateway and the domain rules that sit on it:
- CRUD per record kind (merchants, invoices, payments, payment options)
- Invoice lifecycle (mark-paid stamping, cascade deletes)
- List filtering and ordering

Services act as the glue between routes (HTTP layer) and Supabase.
"""

from .invoice_service import (
    create_invoice,
    delete_invoice,
    get_invoice_by_id,
    get_invoices,
    mark_invoice_paid,
    update_invoice,
)
from .merchant_service import (
    create_merchant,
    delete_merchant,
    get_merchant_by_id,
    get_merchants,
    update_merchant,
)
from .payment_option_service import (
    create_payment_option,
    delete_payment_option,
    get_payment_option_by_id,
    get_payment_options,
    update_payment_option,
)
from .payment_service import create_payment, get_payment_by_id, get_payments
from .seed_service import seed_demo_data

__all__ = [
    "get_merchants",
    "get_merchant_by_id",
    "create_merchant",
    "update_merchant",
    "delete_merchant",
    "get_invoices",
    "get_invoice_by_id",
    "create_invoice",
    "update_invoice",
    "mark_invoice_paid",
    "delete_invoice",
    "get_payments",
    "get_payment_by_id",
    "create_payment",
    "get_payment_options",
    "get_payment_option_by_id",
    "create_payment_option",
    "update_payment_option",
    "delete_payment_option",
    "seed_demo_data",
]
