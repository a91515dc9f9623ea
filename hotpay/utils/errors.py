"""
Error taxonomy for the HotPay AnyChain backend.

Every error carries its HTTP status and renders the JSON body the dashboard
expects:
- ValidationError        -> 400 {"message", "field"?}
- NotFoundError          -> 404 {"message"}
- ReferenceNotFoundError -> 404 {"message"}  (a referenced parent row is missing)
- InternalError          -> 500 {"message"}

main.py registers a single exception handler for HotPayError.
"""

from typing import Any, Dict, Optional

from fastapi import status


class HotPayError(Exception):
    """Base class for errors that map to a structured API response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_body(self) -> Dict[str, Any]:
        return {"message": self.message}


class ValidationError(HotPayError):
    """Input failed the field contract of the entity."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field

    def to_body(self) -> Dict[str, Any]:
        body = super().to_body()
        if self.field:
            body["field"] = self.field
        return body


class NotFoundError(HotPayError):
    """The id addressed by get/update/delete/mark-paid does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ReferenceNotFoundError(NotFoundError):
    """
    A create referenced a parent row that does not exist.

    Raised for payments pointing at a missing invoice and for rows the store
    rejected with a foreign key violation.
    """

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class InternalError(HotPayError):
    """Unexpected storage failure; never retried."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
