"""
Pydantic schemas for supported payment option endpoints.

A payment option is a (chain, asset, receive address) tuple a merchant
offers to payers. Options are displayed by sortOrder, then chain, then
asset symbol.
"""

from typing import Any, Optional

from pydantic import Field, ValidationInfo, field_validator

from hotpay.schemas.common import CamelModel, reject_null, required_text
from hotpay.utils.constants import SORT_ORDER_MAX, SORT_ORDER_MIN


class PaymentOptionResponse(CamelModel):
    """Supported payment option as stored."""
    id: str = Field(..., description="Payment option UUID")
    merchant_id: str = Field(..., description="Owning merchant UUID")
    chain: str = Field(..., description="Chain name")
    asset_symbol: str = Field(..., description="Asset ticker")
    receive_address: str = Field(..., description="Merchant receive address")
    enabled: bool = Field(..., description="Whether payers are offered this option")
    sort_order: int = Field(..., description="Display position (ascending)")


class PaymentOptionCreateRequest(CamelModel):
    """Request to add a payment option to a merchant."""
    merchant_id: str = Field(..., min_length=1, description="Owning merchant UUID")
    chain: str = Field(..., min_length=1, examples=["Ethereum", "Solana"])
    asset_symbol: str = Field(..., min_length=1, examples=["USDC", "USDT"])
    receive_address: str = Field(
        ...,
        min_length=1,
        examples=["0x6B175474E89094C44Da98b954EedeAC495271d0F"]
    )
    enabled: bool = Field(default=True)
    sort_order: int = Field(default=0, ge=SORT_ORDER_MIN, le=SORT_ORDER_MAX)

    @field_validator("merchant_id", "chain", "asset_symbol", "receive_address")
    @classmethod
    def validate_required_text(cls, v: str, info: ValidationInfo) -> str:
        return required_text(v, info.field_name)


class PaymentOptionUpdateRequest(CamelModel):
    """
    Partial update of a payment option.

    Only supplied fields change; every column is NOT NULL, so explicit nulls
    are rejected.
    """
    merchant_id: Optional[str] = Field(None, min_length=1)
    chain: Optional[str] = Field(None, min_length=1)
    asset_symbol: Optional[str] = Field(None, min_length=1)
    receive_address: Optional[str] = Field(None, min_length=1)
    enabled: Optional[bool] = None
    sort_order: Optional[int] = Field(None, ge=SORT_ORDER_MIN, le=SORT_ORDER_MAX)

    @field_validator("merchant_id", "chain", "asset_symbol", "receive_address", "enabled", "sort_order")
    @classmethod
    def validate_not_null(cls, v: Any, info: ValidationInfo) -> Any:
        reject_null(v, info.field_name)
        if isinstance(v, str):
            return required_text(v, info.field_name)
        return v
