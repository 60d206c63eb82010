"""Re-resolve the neighborhood of every stored venue."""

import logging

from mylocalguide.data.repository import VenueRepository
from mylocalguide.data.resolver import NeighborhoodResolver
from mylocalguide.engine.mapping_report import MappingReport
from mylocalguide.models.db import CityRecord

logger = logging.getLogger(__name__)

TEST_MODE_LIMIT = 10


async def remap_venues(
    repository: VenueRepository,
    resolver: NeighborhoodResolver,
    city: CityRecord,
    test_mode: bool = False,
) -> MappingReport:
    """Resolve every active venue in `city` again and store the new neighborhood.

    Reference neighborhoods are created first so every resolvable name has a
    row. In test mode only the first few venues are processed. A venue whose
    update fails is rolled back and counted as skipped.
    """
    city_id, city_name = city.id, city.name
    await repository.ensure_neighborhoods(city_id, resolver.rules.neighborhoods)
    hood_ids = await repository.neighborhood_ids(city_id)

    # Plain tuples: a rollback expires the ORM rows
    venues = [
        (v.id, v.name, v.address, v.neighborhood_id is not None)
        for v in await repository.list_venues(city_id, limit=TEST_MODE_LIMIT if test_mode else None)
    ]
    logger.info("Remapping %d venues in %s%s", len(venues), city_name, " (test mode)" if test_mode else "")

    report = MappingReport()
    for venue_id, name, address, previously_mapped in venues:
        result = await resolver.resolve(name, address)
        hood_id = hood_ids.get(result.neighborhood)
        if hood_id is None:
            logger.warning("No neighborhood row for %r (venue %s)", result.neighborhood, name)
            report.record(name, address, result, persisted=False)
            continue

        try:
            await repository.assign_neighborhood(
                venue_id, hood_id, confidence=result.confidence.value, method=result.method.value,
            )
        except Exception as e:
            logger.warning("Failed to remap %s: %s", name, e)
            await repository.session.rollback()
            report.record(name, address, result, persisted=False)
            continue
        report.record(name, address, result, previously_mapped=previously_mapped)

    logger.info(
        "Remap complete: %d processed, %d newly mapped, %d remapped, %d skipped",
        report.processed, report.newly_mapped, report.remapped, report.skipped,
    )
    return report
