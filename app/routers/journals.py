"""
Journals router.

POST  /journals          — create a journal entry
PATCH /journals/{id}     — partial update (re-analyzed only if title/body changed)
GET   /journals/{id}     — read a journal entry
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, status

from app.core.errors import JournalNotFoundError
from app.db.store import DocumentStore
from app.models.journal import Journal
from app.routers.deps import get_store
from app.schemas.common import ErrorResponse, ValidationErrorResponse
from app.schemas.journals import (
    JournalCreateRequest,
    JournalResponse,
    JournalUpdateRequest,
)

router = APIRouter(prefix="/journals", tags=["journals"])


def _journal_to_response(j: Journal) -> JournalResponse:
    return JournalResponse(
        id=j.id,
        user_id=j.user_id,
        title=j.title,
        body=j.body,
        tags=list(j.tags or []),
        created_at=j.created_at.isoformat() if j.created_at else "",
        ai=j.ai or None,
    )


@router.post(
    "",
    response_model=JournalResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a journal entry",
    responses={422: {"model": ValidationErrorResponse, "description": "Invalid payload."}},
)
def create_journal(payload: JournalCreateRequest, store: DocumentStore = Depends(get_store)):
    """
    Persist the entry and publish `journals/created`. Sentiment, the owner's
    30-day aggregate and their recommendations are refreshed afterwards;
    a failure there never fails this request.
    """
    journal = store.create_journal(
        user_id=payload.user_id,
        title=payload.title,
        body=payload.body,
        tags=payload.tags,
    )
    return _journal_to_response(journal)


@router.patch(
    "/{journal_id}",
    response_model=JournalResponse,
    summary="Update a journal entry",
    responses={
        404: {"model": ErrorResponse, "description": "Unknown journal id."},
        422: {"model": ValidationErrorResponse, "description": "Invalid payload."},
    },
)
def update_journal(
    journal_id: str,
    payload: JournalUpdateRequest,
    store: DocumentStore = Depends(get_store),
):
    journal = store.update_journal(
        journal_id,
        title=payload.title,
        body=payload.body,
        tags=payload.tags,
    )
    return _journal_to_response(journal)


@router.get(
    "/{journal_id}",
    response_model=JournalResponse,
    summary="Get a journal entry",
    responses={404: {"model": ErrorResponse, "description": "Unknown journal id."}},
)
def get_journal(journal_id: str, store: DocumentStore = Depends(get_store)):
    journal = store.get_journal(journal_id)
    if journal is None:
        raise JournalNotFoundError(journal_id)
    return _journal_to_response(journal)
