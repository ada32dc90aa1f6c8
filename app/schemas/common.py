"""
Error envelope shared by every router.
"""
from typing import Any, Optional
from pydantic import BaseModel


class FieldError(BaseModel):
    """One request field that failed validation."""
    field: str
    message: str
    type: str


class ErrorResponse(BaseModel):
    """`{code, message, details}` body for all 4xx/5xx responses."""
    code: str
    message: str
    details: Optional[dict[str, Any]] = None


class ValidationErrorDetails(BaseModel):
    errors: list[FieldError]


class ValidationErrorResponse(ErrorResponse):
    """422 body: `details.errors` lists the offending fields."""
    details: ValidationErrorDetails
