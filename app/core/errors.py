"""
Custom exception hierarchy for the insights service.

Rule: every HTTP error has a machine-readable `code` string so clients
can branch on it without parsing English messages.
"""
from __future__ import annotations

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

from app.schemas.common import FieldError, ValidationErrorDetails, ValidationErrorResponse

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class InsightsException(Exception):
    """Base class for all application-level errors."""
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class DocumentNotFoundError(InsightsException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "DOCUMENT_NOT_FOUND"

    def __init__(self, collection: str, document_id: str):
        self.collection = collection
        self.document_id = document_id
        super().__init__(
            message=f"No document '{document_id}' in {collection}.",
            details={"collection": collection, "id": document_id},
        )


class EventNotFoundError(DocumentNotFoundError):
    code = "EVENT_NOT_FOUND"

    def __init__(self, event_id: str):
        super().__init__("events", event_id)


class JournalNotFoundError(DocumentNotFoundError):
    code = "JOURNAL_NOT_FOUND"

    def __init__(self, journal_id: str):
        super().__init__("journals", journal_id)


class UserNotFoundError(DocumentNotFoundError):
    code = "USER_NOT_FOUND"

    def __init__(self, user_id: str):
        super().__init__("users", user_id)


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

async def insights_exception_handler(request: Request, exc: InsightsException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_dict(),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return structured 422 with machine-readable field errors."""
    body = ValidationErrorResponse(
        code="VALIDATION_ERROR",
        message="Request validation failed.",
        details=ValidationErrorDetails(errors=[
            FieldError(
                field=".".join(str(loc) for loc in error["loc"] if loc != "body"),
                message=error["msg"],
                type=error["type"],
            )
            for error in exc.errors()
        ]),
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=body.model_dump(),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred.",
        },
    )
