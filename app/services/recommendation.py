"""
Event recommendations driven by a user's journal sentiment.

Steering policy
---------------
  avg <= -0.3  → supportive  ranked by event score ascending
  avg >=  0.3  → prosocial   ranked by event score descending
  otherwise    → educational ranked by |event score| ascending

Pool
----
Candidates are upcoming events (date >= today), soonest first, at most
EVENT_CANDIDATE_LIMIT. Events without a score rank as 0.
Target-bucket candidates are ranked; if fewer than RECOMMENDATION_COUNT,
the rest is topped up with other-bucket candidates in fetch order.

Public API
----------
target_bucket(avg)                           -> Bucket
rank_candidates(candidates, avg, limit)      -> list[str]   (pure)
recompute_recommendations(store, user_id)    -> list[str]   (reads + writes)
get_recommended_events(store, user_id)       -> list[Event]
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Optional

from app.core.config import settings
from app.db.store import DocumentStore
from app.models.event import Event, APPROVED
from app.services.aggregation import AVG_FIELD, UPDATED_FIELD, as_score, score_of
from app.services.categorizer import Bucket, categorize_event

logger = logging.getLogger(__name__)

RECOMMENDED_FIELD = "recommendedEventIds"

_NEGATIVE_MOOD = -0.3
_POSITIVE_MOOD = 0.3


@dataclass(frozen=True)
class EventCandidate:
    id: str
    bucket: Bucket
    score: float


def target_bucket(avg: float) -> Bucket:
    if avg <= _NEGATIVE_MOOD:
        return Bucket.supportive
    if avg >= _POSITIVE_MOOD:
        return Bucket.prosocial
    return Bucket.educational


def _sort_key(avg: float):
    if avg <= _NEGATIVE_MOOD:
        return lambda c: c.score
    if avg >= _POSITIVE_MOOD:
        return lambda c: -c.score
    return lambda c: abs(c.score)


def build_candidate(ev: Event) -> EventCandidate:
    score = score_of(ev.ai)
    return EventCandidate(
        id=ev.id,
        bucket=categorize_event(ev.title, ev.description),
        score=score if score is not None else 0.0,
    )


def rank_candidates(
    candidates: list[EventCandidate],
    avg: float,
    limit: Optional[int] = None,
) -> list[str]:
    """
    Ids of the top `limit` candidates for a user with journal average `avg`.
    `candidates` must be in fetch order; ties keep that order.
    """
    limit = settings.RECOMMENDATION_COUNT if limit is None else limit
    target = target_bucket(avg)

    pool = sorted((c for c in candidates if c.bucket == target), key=_sort_key(avg))
    if len(pool) < limit:
        for c in candidates:
            if len(pool) >= limit:
                break
            if c.bucket != target:
                pool.append(c)

    return [c.id for c in pool[:limit]]


def _user_average(store: DocumentStore, user_id: str) -> float:
    user = store.get_user(user_id)
    value = as_score((user.ai or {}).get(AVG_FIELD)) if user is not None else None
    return value if value is not None else 0.0


def recompute_recommendations(
    store: DocumentStore,
    user_id: str,
    today: Optional[date] = None,
    now: Optional[datetime] = None,
) -> list[str]:
    """Re-rank upcoming events for the user and merge the ids onto them."""
    today = today or date.today()
    now = now or datetime.now(tz=timezone.utc)

    avg = _user_average(store, user_id)
    events = store.upcoming_events(
        today,
        limit=settings.EVENT_CANDIDATE_LIMIT,
        approved_only=settings.RECOMMEND_APPROVED_ONLY,
    )
    candidates = [build_candidate(ev) for ev in events]
    ids = rank_candidates(candidates, avg)

    store.merge_user_ai(user_id, {
        RECOMMENDED_FIELD: ids,
        UPDATED_FIELD: now.isoformat(),
    })
    logger.info(
        "recommendations user=%s avg=%.4f target=%s candidates=%d picked=%s",
        user_id, avg, target_bucket(avg).value, len(candidates), ids,
    )
    return ids


def _visible(ev: Optional[Event]) -> bool:
    if ev is None:
        return False
    if settings.RECOMMEND_APPROVED_ONLY:
        return ev.approval_status == APPROVED
    return True


def get_recommended_events(store: DocumentStore, user_id: str) -> list[Event]:
    """
    Resolve the stored recommendation ids to events, in stored order.
    When none resolve, fall back to the most recently created events.
    """
    user = store.get_user(user_id)
    ids = (user.ai or {}).get(RECOMMENDED_FIELD) if user is not None else None

    results: list[Event] = []
    for event_id in ids or []:
        ev = store.get_event(event_id)
        if _visible(ev):
            results.append(ev)
    if results:
        return results

    latest = store.latest_events(
        limit=settings.RECOMMENDATION_FALLBACK_LIMIT,
        approved_only=settings.RECOMMEND_APPROVED_ONLY,
    )
    return latest[:settings.RECOMMENDATION_COUNT]
