"""
Journal schemas.

POST  /journals        → JournalCreateRequest → JournalResponse
PATCH /journals/{id}   → JournalUpdateRequest → JournalResponse
"""
from __future__ import annotations

from typing import Annotated, Any, Optional

from pydantic import BaseModel, Field, model_validator


class JournalCreateRequest(BaseModel):
    user_id: Annotated[str, Field(min_length=1, max_length=128, description="Owning user.")]
    title: Annotated[str, Field(default="", max_length=256)]
    body: Annotated[str, Field(default="", max_length=10_000)]
    tags: Optional[list[str]] = Field(default=None, description="Free-form tags (not analyzed).")


class JournalUpdateRequest(BaseModel):
    """Partial update. Only title / body changes trigger re-analysis."""

    title: Optional[str] = Field(default=None, max_length=256)
    body: Optional[str] = Field(default=None, max_length=10_000)
    tags: Optional[list[str]] = None

    @model_validator(mode="after")
    def check_not_empty(self):
        if self.title is None and self.body is None and self.tags is None:
            raise ValueError("at least one of title, body or tags must be provided")
        return self


class JournalResponse(BaseModel):
    id: str
    user_id: Optional[str] = None
    title: str
    body: str
    tags: list[str] = Field(default_factory=list)
    created_at: str
    ai: Optional[dict[str, Any]] = None
