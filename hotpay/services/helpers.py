"""
Small helpers shared by the persistence services.

Ids and default timestamps are generated here rather than by database
defaults so every backend produces the same records.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from postgrest.exceptions import APIError

from hotpay.utils.constants import FOREIGN_KEY_VIOLATION


def new_id() -> str:
    """Generate a record id."""
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(value: Optional[datetime]) -> Optional[str]:
    """
    Serialize a datetime for storage.

    Naive datetimes are taken to be UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def is_foreign_key_violation(error: APIError) -> bool:
    """True when PostgREST reports SQLSTATE 23503."""
    return getattr(error, "code", None) == FOREIGN_KEY_VIOLATION
