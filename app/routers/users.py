"""
User insights router.

GET  /users/{id}/insights              — stored journal aggregate + recommendations
POST /users/{id}/insights/recompute    — recompute both synchronously
GET  /users/{id}/recommended-events    — recommendations resolved to events
"""
from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Depends

from app.core.errors import UserNotFoundError
from app.db.store import DocumentStore
from app.routers.deps import get_store
from app.routers.events import event_to_response
from app.schemas.common import ErrorResponse
from app.schemas.users import InsightsResponse, RecommendedEventsResponse
from app.services.aggregation import (
    AVG_FIELD,
    LAST_FIELD,
    UPDATED_FIELD,
    as_score,
    update_user_journal_aggregate,
)
from app.services.recommendation import (
    RECOMMENDED_FIELD,
    get_recommended_events,
    recompute_recommendations,
)

router = APIRouter(prefix="/users", tags=["users"])


def _insights(user_id: str, ai: Optional[dict[str, Any]]) -> InsightsResponse:
    ai = ai or {}
    return InsightsResponse(
        user_id=user_id,
        journal_sentiment_avg_30d=as_score(ai.get(AVG_FIELD)) or 0.0,
        last_journal_sentiment=as_score(ai.get(LAST_FIELD)) or 0.0,
        recommended_event_ids=list(ai.get(RECOMMENDED_FIELD) or []),
        updated_at=ai.get(UPDATED_FIELD),
    )


@router.get(
    "/{user_id}/insights",
    response_model=InsightsResponse,
    summary="Get a user's journal sentiment aggregate",
    responses={404: {"model": ErrorResponse, "description": "No record for this user yet."}},
)
def get_insights(user_id: str, store: DocumentStore = Depends(get_store)):
    user = store.get_user(user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    return _insights(user_id, user.ai)


@router.post(
    "/{user_id}/insights/recompute",
    response_model=InsightsResponse,
    summary="Recompute a user's aggregate and recommendations now",
)
def recompute_insights(user_id: str, store: DocumentStore = Depends(get_store)):
    """
    Runs the journal aggregate and then the recommendation ranking, exactly
    as a journal write would. Creates the user record if it does not exist.
    """
    update_user_journal_aggregate(store, user_id)
    recompute_recommendations(store, user_id)
    user = store.get_user(user_id)
    return _insights(user_id, user.ai if user else None)


@router.get(
    "/{user_id}/recommended-events",
    response_model=RecommendedEventsResponse,
    summary="Get recommended events for a user",
)
def recommended_events(user_id: str, store: DocumentStore = Depends(get_store)):
    """
    Events in recommendation order. Falls back to the most recently created
    events when the user has no (resolvable) recommendations.
    """
    events = get_recommended_events(store, user_id)
    return RecommendedEventsResponse(
        user_id=user_id,
        items=[event_to_response(ev) for ev in events],
    )
