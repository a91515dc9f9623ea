"""
Table names and value vocabularies shared by schemas and services.

See sql/hotpay_schema.sql for the matching DDL.
"""

TABLES = {
    'MERCHANTS': 'merchants',
    'INVOICES': 'invoices',
    'PAYMENTS': 'payments',
    'PAYMENT_OPTIONS': 'supported_payment_options',
}

DEFAULT_INVOICE_STATUS = 'unpaid'
DEFAULT_INVOICE_CURRENCY = 'USD'

DEFAULT_PAYMENT_STATUS = 'detected'

# (precision, scale) of the numeric amount columns
INVOICE_AMOUNT_DIGITS = (18, 2)
PAYMENT_AMOUNT_DIGITS = (36, 18)

# PostgreSQL SQLSTATE reported by PostgREST for foreign key violations
FOREIGN_KEY_VIOLATION = '23503'

# Range of a PostgreSQL integer column (supported_payment_options.sort_order)
SORT_ORDER_MIN = -2**31
SORT_ORDER_MAX = 2**31 - 1
