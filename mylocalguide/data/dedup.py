"""Per-run deduplication and API-call budget for ingestion."""

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field

from mylocalguide.config import settings


@dataclass
class IngestionContext:
    """State owned by a single ingestion run.

    Tracks which external IDs have been seen so the same venue returned by
    overlapping searches is only stored once, and how many API calls remain
    in the run's budget.
    """

    budget: int = field(default_factory=lambda: settings.daily_call_budget)
    reserve: int = field(default_factory=lambda: settings.call_budget_reserve)
    seen: set[str] = field(default_factory=set)
    calls_made: int = 0
    added: int = 0
    duplicates: int = 0
    failed: int = 0
    per_query: Counter = field(default_factory=Counter)

    def seed(self, external_ids: Iterable[str]) -> None:
        self.seen.update(external_ids)

    def mark_seen(self, external_id: str) -> bool:
        """Record an ID. Returns False if it was already seen this run."""
        if external_id in self.seen:
            self.duplicates += 1
            return False
        self.seen.add(external_id)
        return True

    @property
    def calls_remaining(self) -> int:
        return max(0, self.budget - self.reserve - self.calls_made)

    def can_call(self) -> bool:
        return self.calls_remaining > 0

    def record_call(self) -> None:
        self.calls_made += 1

    def summary(self) -> dict:
        return {
            "added": self.added,
            "duplicates": self.duplicates,
            "failed": self.failed,
            "calls_made": self.calls_made,
            "calls_remaining": self.calls_remaining,
            "per_query": dict(self.per_query),
        }
