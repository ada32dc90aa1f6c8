"""
Document store accessor over the `events`, `journals` and `users` tables.

Each record is exposed with document semantics:
  - the derived `ai` sub-object is only ever written through merge_*_ai
    (partial-field update, sibling keys untouched);
  - every committed create/update is published as a ChangeEvent to the
    optional `publish` callback given at construction.

Public API
----------
create_event / get_event / upcoming_events / latest_events
create_journal / get_journal / update_journal / recent_journals
get_user
merge_event_ai / merge_journal_ai / merge_user_ai
"""
from __future__ import annotations

import datetime as dt
from typing import Any, Callable, Iterable, Optional

from sqlalchemy.orm import Session

from app.core.errors import EventNotFoundError, JournalNotFoundError
from app.db.changes import ChangeEvent, ChangeKind
from app.models.event import Event, APPROVED
from app.models.journal import Journal
from app.models.user import User

EVENTS = "events"
JOURNALS = "journals"

Publisher = Callable[[ChangeEvent], None]


# ---------------------------------------------------------------------------
# Document snapshots (what change events carry)
# ---------------------------------------------------------------------------

def _iso(value: Optional[dt.date]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def event_document(ev: Event) -> dict[str, Any]:
    return {
        "id": ev.id,
        "title": ev.title,
        "description": ev.description,
        "date": _iso(ev.date),
        "approvalStatus": ev.approval_status,
        "createdAt": _iso(ev.created_at),
        "ai": dict(ev.ai or {}),
    }


def journal_document(j: Journal) -> dict[str, Any]:
    return {
        "id": j.id,
        "userId": j.user_id,
        "title": j.title,
        "body": j.body,
        "tags": list(j.tags or []),
        "createdAt": _iso(j.created_at),
        "ai": dict(j.ai or {}),
    }


def _merged(current: Optional[dict[str, Any]], fields: dict[str, Any]) -> dict[str, Any]:
    # Always a new dict so the JSON column is flagged dirty.
    merged = dict(current or {})
    merged.update(fields)
    return merged


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------

class DocumentStore:
    def __init__(self, db: Session, publish: Optional[Publisher] = None):
        self.db = db
        self._publish = publish

    def _emit(self, change: ChangeEvent) -> None:
        if self._publish is not None:
            self._publish(change)

    # --- events -----------------------------------------------------------

    def create_event(
        self,
        title: str,
        description: str,
        date: dt.date,
        approval_status: Optional[str] = None,
    ) -> Event:
        ev = Event(
            title=title or "",
            description=description or "",
            date=date,
            approval_status=approval_status,
        )
        self.db.add(ev)
        self.db.commit()
        self.db.refresh(ev)
        self._emit(ChangeEvent(
            collection=EVENTS,
            kind=ChangeKind.created,
            document_id=ev.id,
            after=event_document(ev),
        ))
        return ev

    def get_event(self, event_id: str) -> Optional[Event]:
        return self.db.get(Event, event_id)

    def upcoming_events(
        self, today: dt.date, limit: int, approved_only: bool = False
    ) -> list[Event]:
        """Events dated today or later, soonest first."""
        q = self.db.query(Event).filter(Event.date >= today)
        if approved_only:
            q = q.filter(Event.approval_status == APPROVED)
        return q.order_by(Event.date.asc(), Event.id.asc()).limit(limit).all()

    def latest_events(self, limit: int, approved_only: bool = False) -> list[Event]:
        """Most recently created events first."""
        q = self.db.query(Event)
        if approved_only:
            q = q.filter(Event.approval_status == APPROVED)
        return q.order_by(Event.created_at.desc(), Event.id.asc()).limit(limit).all()

    # --- journals ---------------------------------------------------------

    def create_journal(
        self,
        user_id: Optional[str],
        title: str,
        body: str,
        tags: Optional[Iterable[str]] = None,
        created_at: Optional[dt.datetime] = None,
    ) -> Journal:
        journal = Journal(
            user_id=user_id,
            title=title or "",
            body=body or "",
            tags=list(tags) if tags is not None else None,
        )
        if created_at is not None:
            journal.created_at = created_at
        self.db.add(journal)
        self.db.commit()
        self.db.refresh(journal)
        self._emit(ChangeEvent(
            collection=JOURNALS,
            kind=ChangeKind.created,
            document_id=journal.id,
            after=journal_document(journal),
        ))
        return journal

    def get_journal(self, journal_id: str) -> Optional[Journal]:
        return self.db.get(Journal, journal_id)

    def update_journal(self, journal_id: str, **changes: Any) -> Journal:
        """
        Apply a partial update to title / body / tags and publish
        journals/updated with before and after snapshots.
        """
        journal = self.get_journal(journal_id)
        if journal is None:
            raise JournalNotFoundError(journal_id)

        before = journal_document(journal)
        for key in ("title", "body", "tags"):
            if key in changes and changes[key] is not None:
                value = changes[key]
                setattr(journal, key, list(value) if key == "tags" else value)
        self.db.commit()
        self.db.refresh(journal)
        self._emit(ChangeEvent(
            collection=JOURNALS,
            kind=ChangeKind.updated,
            document_id=journal.id,
            before=before,
            after=journal_document(journal),
        ))
        return journal

    def recent_journals(
        self, user_id: str, since: dt.datetime, limit: int
    ) -> list[Journal]:
        """The user's journals created at or after `since`, newest first."""
        return (
            self.db.query(Journal)
            .filter(Journal.user_id == user_id, Journal.created_at >= since)
            .order_by(Journal.created_at.desc(), Journal.id.asc())
            .limit(limit)
            .all()
        )

    # --- users ------------------------------------------------------------

    def get_user(self, user_id: str) -> Optional[User]:
        return self.db.get(User, user_id)

    # --- ai merges --------------------------------------------------------

    def merge_event_ai(self, event_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        ev = self.get_event(event_id)
        if ev is None:
            raise EventNotFoundError(event_id)
        ev.ai = _merged(ev.ai, fields)
        self.db.commit()
        return dict(ev.ai)

    def merge_journal_ai(self, journal_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        journal = self.get_journal(journal_id)
        if journal is None:
            raise JournalNotFoundError(journal_id)
        journal.ai = _merged(journal.ai, fields)
        self.db.commit()
        return dict(journal.ai)

    def merge_user_ai(self, user_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        """Upsert: a missing user record is created holding only `ai`."""
        user = self.get_user(user_id)
        if user is None:
            user = User(id=user_id)
            self.db.add(user)
        user.ai = _merged(user.ai, fields)
        self.db.commit()
        return dict(user.ai)
