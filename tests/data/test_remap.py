"""Tests for the neighborhood remapping job."""

from sqlalchemy import text, update

from mylocalguide.data.ingest import slugify
from mylocalguide.data.remap import TEST_MODE_LIMIT, remap_venues
from mylocalguide.data.resolver import NeighborhoodResolver
from mylocalguide.engine.reference_tables import SF_RULES
from mylocalguide.models.db import NeighborhoodRecord

VENUES = [
    ("Tartine Bakery", "600 Guerrero St, San Francisco, CA 94110"),
    ("Presidio Picnic", "1 Letterman Dr, San Francisco, CA 94129"),
    ("Mystery Spot", ""),
]


async def _add_venues(repository, city, venues=VENUES):
    for i, (name, address) in enumerate(venues):
        await repository.upsert_venue({
            "external_id": f"yelp-{i}",
            "source": "yelp",
            "name": name,
            "slug": slugify(name),
            "address": address,
            "city_id": city.id,
        })


class TestRemapVenues:
    async def test_maps_every_venue(self, repository, city):
        await _add_venues(repository, city)

        report = await remap_venues(repository, NeighborhoodResolver(), city)

        data = report.as_dict()
        assert data["processed"] == 3
        assert data["newly_mapped"] == 3
        assert data["neighborhood_distribution"] == {"The Mission": 1, "Presidio": 1, "SoMa": 1}
        assert data["confidence_distribution"] == {"high": 1, "medium": 1, "low": 1}
        stats = await repository.venue_stats(city.id)
        assert stats.unmapped == 0

    async def test_second_run_counts_remaps(self, repository, city):
        await _add_venues(repository, city)
        await remap_venues(repository, NeighborhoodResolver(), city)

        report = await remap_venues(repository, NeighborhoodResolver(), city)

        assert report.remapped == 3
        assert report.newly_mapped == 0

    async def test_test_mode_limits_batch(self, repository, city):
        venues = [(f"Venue {i}", "3599 24th St, San Francisco, CA 94110") for i in range(TEST_MODE_LIMIT + 2)]
        await _add_venues(repository, city, venues)

        report = await remap_venues(repository, NeighborhoodResolver(), city, test_mode=True)

        assert report.processed == TEST_MODE_LIMIT
        assert (await repository.venue_stats(city.id)).unmapped == 2

    async def test_creates_missing_neighborhoods(self, repository):
        city = await repository.ensure_city("San Francisco", "CA")
        await _add_venues(repository, city)

        await remap_venues(repository, NeighborhoodResolver(), city)

        assert set(await repository.neighborhood_ids(city.id)) == set(SF_RULES.neighborhood_names)

    async def test_name_without_row_is_skipped(self, repository, city):
        await _add_venues(repository, city, [("Somewhere", "1 Nowhere Ave")])
        # The SoMa row exists under another name, so the default has no row
        await repository.session.execute(
            update(NeighborhoodRecord).where(NeighborhoodRecord.name == "SoMa").values(name="South of Market")
        )
        await repository.session.commit()

        report = await remap_venues(repository, NeighborhoodResolver(), city)

        assert report.processed == 1
        assert report.skipped == 1
        assert (await repository.venue_stats(city.id)).unmapped == 1

    async def test_failed_update_rolls_back_and_continues(self, repository, city, monkeypatch):
        city_id = city.id
        await _add_venues(repository, city)
        real_assign = repository.assign_neighborhood
        calls = []

        async def flaky_assign(venue_id, hood_id, **kwargs):
            calls.append(venue_id)
            if len(calls) == 1:
                await repository.session.execute(text("INSERT INTO no_such_table VALUES (1)"))
            await real_assign(venue_id, hood_id, **kwargs)

        monkeypatch.setattr(repository, "assign_neighborhood", flaky_assign)

        report = await remap_venues(repository, NeighborhoodResolver(), city)

        assert report.processed == 3
        assert report.skipped == 1
        assert report.newly_mapped == 2
        assert (await repository.venue_stats(city_id)).unmapped == 1
