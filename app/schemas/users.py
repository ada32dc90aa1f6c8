"""
Per-user insight schemas.

GET  /users/{id}/insights             → InsightsResponse
POST /users/{id}/insights/recompute   → InsightsResponse
GET  /users/{id}/recommended-events   → RecommendedEventsResponse
"""
from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.events import EventResponse


class InsightsResponse(BaseModel):
    user_id: str
    journal_sentiment_avg_30d: float = Field(
        default=0.0, description="Mean journal sentiment over the trailing 30 days."
    )
    last_journal_sentiment: float = Field(
        default=0.0, description="Score of the newest analyzed journal in the window."
    )
    recommended_event_ids: list[str] = Field(
        default_factory=list, description="Up to 5 event ids, best first."
    )
    updated_at: Optional[str] = None


class RecommendedEventsResponse(BaseModel):
    user_id: str
    items: list[EventResponse]
