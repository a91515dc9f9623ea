"""
Database access layer for the HotPay AnyChain backend.

DO NOT define table schemas or migrations here; the DDL lives in
sql/hotpay_schema.sql. Query code belongs to the service layer.
"""

from .client import get_supabase_client

__all__ = ["get_supabase_client"]
