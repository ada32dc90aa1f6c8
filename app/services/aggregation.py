"""
Journal aggregation: a user's rolling journal sentiment.

  journalSentimentAvg30d = mean(ai.sentimentScore) over the user's journals
                           created in the trailing window (newest first,
                           capped at JOURNAL_WINDOW_LIMIT); 0 if none.
  lastJournalSentiment   = score of the newest analyzed journal; 0 if none.

Journals not yet analyzed are skipped, not counted as zero.
Pure function of store state and `now`: running it twice with the same
journals and the same `now` stores the same aggregate.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, Optional

from app.core.config import settings
from app.db.store import DocumentStore

logger = logging.getLogger(__name__)

AVG_FIELD = "journalSentimentAvg30d"
LAST_FIELD = "lastJournalSentiment"
UPDATED_FIELD = "updatedAt"


@dataclass
class JournalAggregate:
    user_id: str
    average: float
    last: float
    count: int        # analyzed journals that contributed
    updated_at: datetime

    def to_document(self) -> dict[str, Any]:
        return {
            AVG_FIELD: self.average,
            LAST_FIELD: self.last,
            UPDATED_FIELD: self.updated_at.isoformat(),
        }


def as_score(value: Any) -> Optional[float]:
    # bool is an int subclass; a stray True is not a score
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def score_of(ai: Optional[dict]) -> Optional[float]:
    """The numeric sentiment score on an `ai` block, or None."""
    return as_score(ai.get("sentimentScore")) if ai else None


def summarize_scores(ai_blocks: Iterable[Optional[dict]]) -> tuple[float, float, int]:
    """
    (average, last, count) over `ai_blocks` given newest first.
    Pure helper — no store access.
    """
    total = 0.0
    count = 0
    last: Optional[float] = None
    for ai in ai_blocks:
        score = score_of(ai)
        if score is None:
            continue
        total += score
        count += 1
        if last is None:
            last = score
    average = total / count if count > 0 else 0.0
    return average, (last if last is not None else 0.0), count


def update_user_journal_aggregate(
    store: DocumentStore,
    user_id: str,
    now: Optional[datetime] = None,
) -> JournalAggregate:
    """Recompute and merge the user's journal aggregate."""
    now = now or datetime.now(tz=timezone.utc)
    since = now - timedelta(days=settings.JOURNAL_WINDOW_DAYS)

    journals = store.recent_journals(
        user_id, since=since, limit=settings.JOURNAL_WINDOW_LIMIT
    )
    average, last, count = summarize_scores(j.ai for j in journals)

    aggregate = JournalAggregate(
        user_id=user_id,
        average=average,
        last=last,
        count=count,
        updated_at=now,
    )
    store.merge_user_ai(user_id, aggregate.to_document())
    logger.info(
        "journal aggregate user=%s avg=%.4f last=%.4f analyzed=%d/%d",
        user_id, average, last, count, len(journals),
    )
    return aggregate
