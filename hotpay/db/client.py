"""
Supabase client factory.

The dashboard API talks to Supabase with a single server-side key. The client
is created lazily on first use and reused across requests; routes receive it
through the `get_supabase_client` FastAPI dependency so tests can override it.
"""

import logging

from hotpay.config import settings
from supabase import Client, create_client

logger = logging.getLogger(__name__)

_supabase_client: Client | None = None


def get_supabase_client() -> Client:
    """
    Get or create the shared Supabase client.

    Returns:
        A Supabase client bound to SUPABASE_URL / SUPABASE_KEY.

    Raises:
        ValueError: If SUPABASE_URL or SUPABASE_KEY is not configured.
    """
    global _supabase_client

    if _supabase_client is None:
        if not settings.SUPABASE_URL or not settings.SUPABASE_KEY:
            raise ValueError(
                "SUPABASE_URL and SUPABASE_KEY must be configured "
                "before the database can be used."
            )

        logger.info(f"Initializing Supabase client for {settings.SUPABASE_URL}")
        _supabase_client = create_client(
            supabase_url=settings.SUPABASE_URL,
            supabase_key=settings.SUPABASE_KEY,
        )

    return _supabase_client
