"""Re-classify stored venues that ingestion left as "Other".

Source tags are not stored, so only the name and address are available here.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field

from mylocalguide.data.repository import VenueRepository
from mylocalguide.engine.categorizer import OTHER, classify_venue
from mylocalguide.models.db import CityRecord

logger = logging.getLogger(__name__)

PROGRESS_EVERY = 50


@dataclass
class RecategorizeReport:
    processed: int = 0
    recategorized: int = 0
    failed: int = 0
    by_category: Counter = field(default_factory=Counter)

    @property
    def unchanged(self) -> int:
        return self.processed - self.recategorized - self.failed

    def as_dict(self) -> dict:
        return {
            "processed": self.processed,
            "recategorized": self.recategorized,
            "unchanged": self.unchanged,
            "failed": self.failed,
            "by_category": dict(self.by_category.most_common()),
        }


async def recategorize_venues(repository: VenueRepository, city: CityRecord) -> RecategorizeReport:
    city_id = city.id
    venues = [(v.id, v.name, v.address) for v in await repository.list_venues(city_id, category=OTHER)]
    logger.info("Re-classifying %d uncategorized venues", len(venues))

    report = RecategorizeReport()
    for venue_id, name, address in venues:
        report.processed += 1
        category = classify_venue((), name, address)
        if category == OTHER:
            continue

        try:
            await repository.set_category(venue_id, category)
        except Exception as e:
            logger.warning("Failed to re-classify %s: %s", name, e)
            await repository.session.rollback()
            report.failed += 1
            continue

        report.recategorized += 1
        report.by_category[category] += 1
        if report.recategorized % PROGRESS_EVERY == 0:
            logger.info("Re-classified %d venues", report.recategorized)

    logger.info(
        "Re-classification complete: %d of %d venues moved out of %s",
        report.recategorized, report.processed, OTHER,
    )
    return report
