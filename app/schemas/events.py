"""
Event schemas.

POST /events        → EventCreateRequest → EventResponse
GET  /events/{id}   → EventResponse
"""
from __future__ import annotations

import datetime as dt
from typing import Annotated, Any, Optional

from pydantic import BaseModel, Field, field_validator


class EventCreateRequest(BaseModel):
    """A community event as written by the event-creation workflow."""

    title: Annotated[str, Field(
        min_length=1,
        max_length=256,
        description="Event title. Stripped of leading/trailing whitespace.",
        examples=["Free counselling workshop"],
    )]
    description: Annotated[str, Field(
        default="",
        max_length=10_000,
        description="Free-text description.",
    )]
    date: dt.date = Field(description="Calendar date of the event.", examples=["2026-11-02"])
    approval_status: Optional[str] = Field(
        default=None,
        max_length=32,
        description='Moderation status, e.g. "Pending" or "Approved".',
    )

    @field_validator("title", mode="before")
    @classmethod
    def strip_and_check_empty(cls, v: str) -> str:
        stripped = v.strip() if isinstance(v, str) else v
        if not stripped:
            raise ValueError("title must not be empty after stripping whitespace")
        return stripped


class EventResponse(BaseModel):
    id: str
    title: str
    description: str
    date: str = Field(description="ISO date of the event.")
    approval_status: Optional[str] = None
    created_at: str
    ai: Optional[dict[str, Any]] = Field(
        default=None,
        description="Sentiment block; absent until the event has been analyzed.",
    )
