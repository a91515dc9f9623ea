"""
Pydantic schemas for invoice endpoints.

Status is an open string on read but validated against the fixed vocabulary
(draft|unpaid|paid|expired|cancelled) on every write. No transition table
is enforced: any status may be set through a partial update.

Amounts are decimal strings with two fractional digits; see
hotpay.utils.amounts.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Literal, Optional

from pydantic import Field, ValidationInfo, field_validator

from hotpay.schemas.common import CamelModel, reject_null, required_text
from hotpay.utils.amounts import parse_amount
from hotpay.utils.constants import (
    DEFAULT_INVOICE_CURRENCY,
    DEFAULT_INVOICE_STATUS,
    INVOICE_AMOUNT_DIGITS,
)

# Invoice status vocabulary (mirrors the check constraint on invoices.status)
InvoiceStatus = Literal["draft", "unpaid", "paid", "expired", "cancelled"]


def _invoice_amount(v: Any) -> Decimal:
    precision, scale = INVOICE_AMOUNT_DIGITS
    return parse_amount(v, precision, scale)


# --- Invoice response models ---

class InvoiceResponse(CamelModel):
    """Invoice record as stored."""
    id: str = Field(..., description="Invoice UUID")
    merchant_id: str = Field(..., description="Owning merchant UUID")
    status: str = Field(..., description="draft|unpaid|paid|expired|cancelled")
    title: str = Field(..., description="Invoice title shown to payers")
    description: Optional[str] = Field(None, description="Longer description")
    currency: str = Field(..., description="Currency code of the amount")
    amount: str = Field(..., description="Decimal string with 2 fractional digits", examples=["199.00"])
    memo: Optional[str] = Field(None, description="Payer-facing memo / reference")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Arbitrary key-value data")
    expires_at: Optional[str] = Field(None, description="ISO-8601 expiry timestamp")
    created_at: str = Field(..., description="ISO-8601 timestamp when created")
    paid_at: Optional[str] = Field(None, description="ISO-8601 timestamp set by mark-paid")


# --- Invoice create/update models ---

class InvoiceCreateRequest(CamelModel):
    """
    Request to create an invoice.

    `paidAt` and `createdAt` are server-stamped and ignored if sent.
    """
    merchant_id: str = Field(..., min_length=1, description="Owning merchant UUID")
    status: InvoiceStatus = Field(
        default=DEFAULT_INVOICE_STATUS,
        description="Initial status"
    )
    title: str = Field(..., min_length=1, description="Invoice title", examples=["Order #1042"])
    description: Optional[str] = Field(
        None,
        description="Longer description",
        examples=["Premium subscription (monthly) - AnyChain checkout"]
    )
    currency: str = Field(
        default=DEFAULT_INVOICE_CURRENCY,
        min_length=1,
        description="Currency code"
    )
    amount: Decimal = Field(
        ...,
        description="Decimal string (numbers are accepted and converted via their text form)",
        examples=["49.00"]
    )
    memo: Optional[str] = Field(None, description="Payer-facing memo", examples=["SUB-1042"])
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Arbitrary key-value data")
    expires_at: Optional[datetime] = Field(None, description="Optional expiry (ISO-8601)")

    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount(cls, v: Any) -> Decimal:
        return _invoice_amount(v)

    @field_validator("merchant_id", "title", "currency")
    @classmethod
    def validate_required_text(cls, v: str, info: ValidationInfo) -> str:
        return required_text(v, info.field_name)


class InvoiceUpdateRequest(CamelModel):
    """
    Partial update of an invoice.

    Every field is optional and only supplied fields change. Status may be
    moved to any value in the vocabulary (e.g. paid -> draft is allowed).
    `paidAt` is not accepted here; use POST /api/invoices/{id}/mark-paid.
    """
    merchant_id: Optional[str] = Field(None, min_length=1)
    status: Optional[InvoiceStatus] = None
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    currency: Optional[str] = Field(None, min_length=1)
    amount: Optional[Decimal] = None
    memo: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    expires_at: Optional[datetime] = None

    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount(cls, v: Any) -> Decimal:
        reject_null(v, "amount")
        return _invoice_amount(v)

    @field_validator("merchant_id", "status", "title", "currency", "metadata")
    @classmethod
    def validate_not_null(cls, v: Any, info: ValidationInfo) -> Any:
        reject_null(v, info.field_name)
        if isinstance(v, str):
            return required_text(v, info.field_name)
        return v


class InvoiceMarkPaidRequest(CamelModel):
    """
    Optional body for POST /api/invoices/{id}/mark-paid.

    When paidAt is omitted the server stamps the current time.
    """
    paid_at: Optional[datetime] = Field(None, description="Explicit payment time (ISO-8601)")
    payment_id: Optional[str] = Field(None, description="Recorded payment this settles (audit reference)")
