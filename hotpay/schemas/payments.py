"""
Pydantic schemas for payment endpoints.

Payments are recorded manually from the dashboard; nothing here observes a
chain. Amounts keep 18 fractional digits to cover token-level granularity.
"""

from decimal import Decimal
from typing import Any, Literal, Optional

from pydantic import Field, ValidationInfo, field_validator

from hotpay.schemas.common import CamelModel, required_text
from hotpay.utils.amounts import parse_amount
from hotpay.utils.constants import DEFAULT_PAYMENT_STATUS, PAYMENT_AMOUNT_DIGITS

# Payment status vocabulary (mirrors the check constraint on payments.status)
PaymentStatus = Literal["detected", "confirmed", "failed"]


class PaymentResponse(CamelModel):
    """Payment record as stored."""
    id: str = Field(..., description="Payment UUID")
    invoice_id: str = Field(..., description="Invoice this payment belongs to")
    chain: str = Field(..., description="Chain name, e.g. Ethereum")
    asset_symbol: str = Field(..., description="Asset ticker, e.g. USDC")
    to_address: str = Field(..., description="Receiving address")
    from_address: Optional[str] = Field(None, description="Sending address, if known")
    amount: str = Field(..., description="Decimal string with 18 fractional digits")
    tx_hash: Optional[str] = Field(None, description="Transaction hash, if known")
    status: str = Field(..., description="detected|confirmed|failed")
    detected_at: str = Field(..., description="ISO-8601 timestamp when recorded")
    confirmed_at: Optional[str] = Field(None, description="ISO-8601 confirmation timestamp")


class PaymentCreateRequest(CamelModel):
    """
    Request to record a payment against an invoice.

    The invoice must exist; otherwise the request fails with 404
    "Invoice not found" after the body itself validated.
    """
    invoice_id: str = Field(..., min_length=1, description="Invoice UUID")
    chain: str = Field(..., min_length=1, examples=["Ethereum"])
    asset_symbol: str = Field(..., min_length=1, examples=["USDC"])
    to_address: str = Field(..., min_length=1, description="Receiving address")
    from_address: Optional[str] = Field(None, description="Sending address")
    amount: Decimal = Field(..., description="Decimal string", examples=["49.000000000000000000"])
    tx_hash: Optional[str] = Field(None, description="Transaction hash")
    status: PaymentStatus = Field(default=DEFAULT_PAYMENT_STATUS)

    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount(cls, v: Any) -> Decimal:
        precision, scale = PAYMENT_AMOUNT_DIGITS
        return parse_amount(v, precision, scale)

    @field_validator("invoice_id", "chain", "asset_symbol", "to_address")
    @classmethod
    def validate_required_text(cls, v: str, info: ValidationInfo) -> str:
        return required_text(v, info.field_name)
