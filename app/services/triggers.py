"""
Change-event handlers for the sentiment / recommendation pipeline.

  events/created    → analyze title + description, merge ai block
  journals/created  → analyze title + body, merge ai block,
                      then aggregate + recommend for the owner
  journals/updated  → same as created, but only if title + body changed

Each handler is its own error boundary: failures are logged and swallowed,
the originating write stays committed, nothing is retried.
"""
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.orm import sessionmaker

from app.db.base import utcnow
from app.db.changes import ChangeEvent, ChangeFeed, ChangeKind
from app.db.store import DocumentStore, EVENTS, JOURNALS
from app.services.aggregation import update_user_journal_aggregate
from app.services.recommendation import recompute_recommendations
from app.services.sentiment import SentimentResult, analyze

logger = logging.getLogger(__name__)

feed = ChangeFeed()


def _content(doc: Optional[dict], text_field: str) -> str:
    doc = doc or {}
    return f"{doc.get('title') or ''}\n\n{doc.get(text_field) or ''}".strip()


def _rollback(store: DocumentStore, change: ChangeEvent) -> None:
    try:
        store.db.rollback()
    except Exception:
        logger.exception(
            "rollback failed after %s/%s %s",
            change.collection, change.kind.value, change.document_id,
        )


def _refresh_journal(store: DocumentStore, change: ChangeEvent, text: str) -> Optional[SentimentResult]:
    """Analyze → merge → aggregate → recommend, in that order."""
    result = analyze(text)
    if result is not None:
        store.merge_journal_ai(change.document_id, result.to_document(utcnow()))

    user_id = change.after.get("userId")
    if user_id:
        update_user_journal_aggregate(store, user_id)
        recompute_recommendations(store, user_id)
    return result


@feed.subscribe(EVENTS, ChangeKind.created)
def on_event_created(store: DocumentStore, change: ChangeEvent) -> None:
    text = _content(change.after, "description")
    try:
        result = analyze(text)
        if result is not None:
            store.merge_event_ai(change.document_id, result.to_document(utcnow()))
            logger.info(
                "event %s analyzed: %s (%.3f)",
                change.document_id, result.label, result.score,
            )
    except Exception:
        logger.exception("on_event_created failed for %s", change.document_id)
        _rollback(store, change)


@feed.subscribe(JOURNALS, ChangeKind.created)
def on_journal_created(store: DocumentStore, change: ChangeEvent) -> None:
    text = _content(change.after, "body")
    try:
        _refresh_journal(store, change, text)
    except Exception:
        logger.exception("on_journal_created failed for %s", change.document_id)
        _rollback(store, change)


@feed.subscribe(JOURNALS, ChangeKind.updated)
def on_journal_updated(store: DocumentStore, change: ChangeEvent) -> None:
    before_text = _content(change.before, "body")
    after_text = _content(change.after, "body")
    if before_text == after_text:
        logger.debug("journal %s content unchanged, skipping", change.document_id)
        return
    try:
        _refresh_journal(store, change, after_text)
    except Exception:
        logger.exception("on_journal_updated failed for %s", change.document_id)
        _rollback(store, change)


def run_change(change: ChangeEvent, session_factory: sessionmaker) -> None:
    """Dispatch one change with a fresh session (background-task entry point)."""
    db = session_factory()
    try:
        feed.dispatch(change, DocumentStore(db))
    finally:
        db.close()
