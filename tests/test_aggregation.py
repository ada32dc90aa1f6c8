"""
Tests for the rolling journal sentiment aggregate.

All tests pin `now` so the 30-day window is deterministic.
"""
from datetime import datetime, timedelta, timezone

import pytest

from app.services.aggregation import (
    AVG_FIELD,
    LAST_FIELD,
    UPDATED_FIELD,
    summarize_scores,
    update_user_journal_aggregate,
)

NOW = datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)


def _journal(store, user_id, days_ago, score=None, hours_ago=0):
    j = store.create_journal(
        user_id=user_id,
        title="entry",
        body="text",
        created_at=NOW - timedelta(days=days_ago, hours=hours_ago),
    )
    if score is not None:
        store.merge_journal_ai(j.id, {"sentimentScore": score})
    return j


# ---------------------------------------------------------------------------
# Pure helper
# ---------------------------------------------------------------------------

class TestSummarizeScores:
    def test_empty(self):
        assert summarize_scores([]) == (0.0, 0.0, 0)

    def test_skips_unanalyzed(self):
        blocks = [None, {}, {"sentimentScore": 0.4}, {"sentimentLabel": "neutral"}, {"sentimentScore": -0.2}]
        avg, last, count = summarize_scores(blocks)
        assert count == 2
        assert avg == pytest.approx(0.1)
        assert last == 0.4

    def test_non_numeric_scores_skipped(self):
        avg, last, count = summarize_scores([{"sentimentScore": "0.9"}, {"sentimentScore": True}])
        assert (avg, last, count) == (0.0, 0.0, 0)


# ---------------------------------------------------------------------------
# Store-backed
# ---------------------------------------------------------------------------

class TestUpdateUserJournalAggregate:
    def test_no_journals_writes_zeroes(self, store):
        agg = update_user_journal_aggregate(store, "u-empty", now=NOW)
        assert agg.average == 0.0
        assert agg.last == 0.0
        user = store.get_user("u-empty")
        assert user is not None
        assert user.ai[AVG_FIELD] == 0.0
        assert user.ai[LAST_FIELD] == 0.0
        assert user.ai[UPDATED_FIELD] == NOW.isoformat()

    def test_window_includes_29_days_excludes_31(self, store):
        _journal(store, "u1", days_ago=29, score=0.6)
        _journal(store, "u1", days_ago=31, score=-0.8)
        agg = update_user_journal_aggregate(store, "u1", now=NOW)
        assert agg.average == pytest.approx(0.6)
        assert agg.count == 1

    def test_average_and_last(self, store):
        _journal(store, "u2", days_ago=1, score=0.2)
        _journal(store, "u2", days_ago=3, score=-0.4)
        agg = update_user_journal_aggregate(store, "u2", now=NOW)
        assert agg.average == pytest.approx(-0.1)
        assert agg.last == pytest.approx(0.2)

    def test_unanalyzed_newest_is_skipped_for_last(self, store):
        _journal(store, "u3", days_ago=0, hours_ago=1)  # not analyzed yet
        _journal(store, "u3", days_ago=2, score=-0.5)
        agg = update_user_journal_aggregate(store, "u3", now=NOW)
        assert agg.last == pytest.approx(-0.5)
        assert agg.average == pytest.approx(-0.5)
        assert agg.count == 1

    def test_capped_at_fifty_newest(self, store):
        for i in range(5):
            _journal(store, "u4", days_ago=20, hours_ago=i, score=-1.0)
        for i in range(50):
            _journal(store, "u4", days_ago=1, hours_ago=i % 20, score=1.0)
        agg = update_user_journal_aggregate(store, "u4", now=NOW)
        assert agg.average == pytest.approx(1.0)
        assert agg.count == 50

    def test_other_users_ignored(self, store):
        _journal(store, "u5", days_ago=1, score=0.9)
        _journal(store, "someone-else", days_ago=1, score=-0.9)
        agg = update_user_journal_aggregate(store, "u5", now=NOW)
        assert agg.average == pytest.approx(0.9)

    def test_idempotent(self, store):
        _journal(store, "u6", days_ago=2, score=0.3)
        _journal(store, "u6", days_ago=5, score=-0.1)
        update_user_journal_aggregate(store, "u6", now=NOW)
        first = dict(store.get_user("u6").ai)
        update_user_journal_aggregate(store, "u6", now=NOW)
        second = dict(store.get_user("u6").ai)
        assert first == second

    def test_merge_keeps_sibling_fields(self, store):
        store.merge_user_ai("u7", {"recommendedEventIds": ["e1", "e2"]})
        _journal(store, "u7", days_ago=1, score=0.5)
        update_user_journal_aggregate(store, "u7", now=NOW)
        ai = store.get_user("u7").ai
        assert ai["recommendedEventIds"] == ["e1", "e2"]
        assert ai[AVG_FIELD] == pytest.approx(0.5)
