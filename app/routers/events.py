"""
Events router.

POST /events          — create an event (sentiment analyzed in the background)
GET  /events/{id}     — read an event, including its `ai` block
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, status

from app.core.errors import EventNotFoundError
from app.db.store import DocumentStore
from app.models.event import Event
from app.routers.deps import get_store
from app.schemas.common import ErrorResponse, ValidationErrorResponse
from app.schemas.events import EventCreateRequest, EventResponse

router = APIRouter(prefix="/events", tags=["events"])


def event_to_response(ev: Event) -> EventResponse:
    return EventResponse(
        id=ev.id,
        title=ev.title,
        description=ev.description,
        date=str(ev.date),
        approval_status=ev.approval_status,
        created_at=ev.created_at.isoformat() if ev.created_at else "",
        ai=ev.ai or None,
    )


@router.post(
    "",
    response_model=EventResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an event",
    responses={422: {"model": ValidationErrorResponse, "description": "Invalid payload."}},
)
def create_event(payload: EventCreateRequest, store: DocumentStore = Depends(get_store)):
    """
    Persist the event and publish `events/created`.

    The response never waits for sentiment analysis: the `ai` block is
    attached afterwards and is absent in this response.
    """
    ev = store.create_event(
        title=payload.title,
        description=payload.description,
        date=payload.date,
        approval_status=payload.approval_status,
    )
    return event_to_response(ev)


@router.get(
    "/{event_id}",
    response_model=EventResponse,
    summary="Get an event",
    responses={404: {"model": ErrorResponse, "description": "Unknown event id."}},
)
def get_event(event_id: str, store: DocumentStore = Depends(get_store)):
    ev = store.get_event(event_id)
    if ev is None:
        raise EventNotFoundError(event_id)
    return event_to_response(ev)
