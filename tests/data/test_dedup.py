"""Tests for the per-run ingestion context."""

from mylocalguide.config import settings
from mylocalguide.data.dedup import IngestionContext


class TestIngestionContext:
    def test_defaults_from_settings(self):
        ctx = IngestionContext()
        assert ctx.budget == settings.daily_call_budget
        assert ctx.reserve == settings.call_budget_reserve

    def test_mark_seen(self):
        ctx = IngestionContext()
        assert ctx.mark_seen("yelp-1")
        assert not ctx.mark_seen("yelp-1")
        assert ctx.duplicates == 1

    def test_seed(self):
        ctx = IngestionContext()
        ctx.seed(["yelp-1", "yelp-2"])
        assert not ctx.mark_seen("yelp-2")
        assert ctx.mark_seen("yelp-3")

    def test_budget_keeps_reserve(self):
        ctx = IngestionContext(budget=102, reserve=100)
        assert ctx.calls_remaining == 2
        ctx.record_call()
        ctx.record_call()
        assert not ctx.can_call()
        assert ctx.calls_remaining == 0

    def test_contexts_are_independent(self):
        first, second = IngestionContext(), IngestionContext()
        first.mark_seen("yelp-1")
        first.per_query["bars"] += 3
        assert second.mark_seen("yelp-1")
        assert not second.per_query

    def test_summary(self):
        ctx = IngestionContext(budget=10, reserve=0)
        ctx.record_call()
        ctx.added = 4
        ctx.per_query["cafe"] = 4
        assert ctx.summary() == {
            "added": 4,
            "duplicates": 0,
            "failed": 0,
            "calls_made": 1,
            "calls_remaining": 9,
            "per_query": {"cafe": 4},
        }
