"""
Shared schema building blocks.

The dashboard speaks camelCase JSON while the database uses snake_case
columns. Every model here uses snake_case attribute names with camelCase
aliases, so `model_validate(row)` works on raw database rows and FastAPI
emits camelCase responses.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model: snake_case attributes, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


def reject_null(value: Any, field_name: str) -> Any:
    """
    Raise when a non-nullable column is explicitly set to null.

    Partial update models declare every field Optional so it can be omitted;
    this keeps an explicit null from reaching a NOT NULL column.
    """
    if value is None:
        raise ValueError(f"{to_camel(field_name)} cannot be null")
    return value


def required_text(value: Optional[str], field_name: str) -> Optional[str]:
    """Reject blank strings for required text columns."""
    if value is not None and value.strip() == "":
        raise ValueError(f"{to_camel(field_name)} cannot be empty")
    return value


# --- Error bodies (documentation only; produced by the exception handlers) ---

class ValidationErrorResponse(BaseModel):
    """400 body."""
    message: str = Field(..., description="Human-readable description of the first failing field")
    field: Optional[str] = Field(None, description="Name of the offending field, when determinable")


class NotFoundErrorResponse(BaseModel):
    """404 body."""
    message: str = Field(..., description="e.g. 'Invoice not found'")


class InternalErrorResponse(BaseModel):
    """500 body."""
    message: str = Field(..., description="Generic failure description")
