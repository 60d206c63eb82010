"""Aggregate statistics for a batch of neighborhood resolutions."""

from collections import Counter
from dataclasses import dataclass, field

from mylocalguide.models.neighborhood import Confidence, ResolutionResult

MAX_SAMPLES = 10


@dataclass
class MappingReport:
    processed: int = 0
    newly_mapped: int = 0
    remapped: int = 0
    skipped: int = 0  # resolved name has no neighborhood row
    by_confidence: Counter = field(default_factory=Counter)
    by_method: Counter = field(default_factory=Counter)
    by_neighborhood: Counter = field(default_factory=Counter)
    samples: list[dict] = field(default_factory=list)

    def record(
        self,
        venue_name: str,
        address: str,
        result: ResolutionResult,
        previously_mapped: bool = False,
        persisted: bool = True,
    ) -> None:
        self.processed += 1
        if not persisted:
            self.skipped += 1
            return

        if previously_mapped:
            self.remapped += 1
        else:
            self.newly_mapped += 1

        self.by_confidence[result.confidence.value] += 1
        self.by_method[result.method.value] += 1
        self.by_neighborhood[result.neighborhood] += 1

        if len(self.samples) < MAX_SAMPLES:
            self.samples.append({"venue": venue_name, "address": address, **result.as_dict()})

    @property
    def low_confidence_share(self) -> float:
        mapped = self.newly_mapped + self.remapped
        if mapped == 0:
            return 0.0
        return self.by_confidence[Confidence.LOW.value] / mapped

    def as_dict(self) -> dict:
        return {
            "processed": self.processed,
            "newly_mapped": self.newly_mapped,
            "remapped": self.remapped,
            "skipped": self.skipped,
            "confidence_distribution": {c.value: self.by_confidence[c.value] for c in Confidence},
            "method_distribution": dict(self.by_method),
            "neighborhood_distribution": dict(self.by_neighborhood.most_common()),
            "low_confidence_share": round(self.low_confidence_share, 4),
            "sample_mappings": list(self.samples),
        }
