"""
Pydantic schemas for merchant CRUD endpoints.

A merchant owns invoices and supported payment options. Deleting a merchant
removes everything it owns (see merchant_service.delete_merchant).
"""

from typing import Optional

from pydantic import Field, field_validator

from hotpay.schemas.common import CamelModel, reject_null, required_text


class MerchantResponse(CamelModel):
    """Merchant record as stored."""
    id: str = Field(..., description="Merchant UUID")
    name: str = Field(..., description="Display name")
    website_url: Optional[str] = Field(None, description="Public website")
    contact_email: Optional[str] = Field(None, description="Billing contact address")


class MerchantCreateRequest(CamelModel):
    """
    Request to create a merchant.

    Only `name` is required.
    """
    name: str = Field(
        ...,
        min_length=1,
        description="Display name",
        examples=["Acme", "HotPay Demo Store"]
    )
    website_url: Optional[str] = Field(
        None,
        description="Public website",
        examples=["https://hotpay.example"]
    )
    contact_email: Optional[str] = Field(
        None,
        description="Billing contact address",
        examples=["billing@hotpay.example"]
    )

    @field_validator("name")
    @classmethod
    def validate_name_not_blank(cls, v: str) -> str:
        return required_text(v, "name")


class MerchantUpdateRequest(CamelModel):
    """
    Partial update of a merchant.

    Only fields present in the body are changed. An empty body is a no-op
    that returns the current record.
    """
    name: Optional[str] = Field(None, min_length=1, description="Display name")
    website_url: Optional[str] = Field(None, description="Public website (null clears it)")
    contact_email: Optional[str] = Field(None, description="Billing contact (null clears it)")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        return required_text(reject_null(v, "name"), "name")
