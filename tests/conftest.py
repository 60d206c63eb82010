"""Shared fixtures.

Every test runs with the Redis cache disabled and no API keys, so nothing
reaches the network unless a test patches it in explicitly.
"""

from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from mylocalguide.config import settings
from mylocalguide.data.repository import VenueRepository
from mylocalguide.engine.reference_tables import SF_RULES
from mylocalguide.models.db import Base
from mylocalguide.models.venue import VenueListing, VenueSource


@pytest.fixture(autouse=True)
def offline_settings(monkeypatch):
    monkeypatch.setattr(settings, "cache_enabled", False)
    monkeypatch.setattr(settings, "yelp_api_key", "")
    monkeypatch.setattr(settings, "google_places_api_key", "")
    monkeypatch.setattr(settings, "default_neighborhood", "SoMa")


@pytest.fixture
async def session(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with factory() as s:
        yield s
    await engine.dispose()


@pytest.fixture
def repository(session):
    return VenueRepository(session)


@pytest.fixture
async def city(repository):
    record = await repository.ensure_city("San Francisco", "CA")
    await repository.ensure_neighborhoods(record.id, SF_RULES.neighborhoods)
    return record


def make_listing(external_id: str, name: str = "Test Venue", address: str = "", **kwargs) -> VenueListing:
    defaults = {
        "source": VenueSource.YELP,
        "rating": 4.5,
        "review_count": 120,
    }
    defaults.update(kwargs)
    return VenueListing(external_id=external_id, name=name, address=address, **defaults)


@pytest.fixture
def tartine():
    return make_listing(
        "yelp-tartine",
        name="Tartine Bakery",
        address="600 Guerrero St, San Francisco, CA 94110",
        tags=("Bakeries", "Cafes"),
        latitude=Decimal("37.7614"),
        longitude=Decimal("-122.4241"),
        price_range=2,
    )


@pytest.fixture
def listing_factory():
    return make_listing
