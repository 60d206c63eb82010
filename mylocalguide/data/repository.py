"""Venue persistence on top of the async SQLAlchemy session.

Upserts use INSERT ... ON CONFLICT DO NOTHING on the natural keys, so
concurrent ingestion runs cannot create duplicate rows.
"""

import logging
import uuid

from sqlalchemy import func, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from mylocalguide.models.db import CityRecord, NeighborhoodRecord, VenueRecord
from mylocalguide.models.neighborhood import Neighborhood
from mylocalguide.models.venue import VenueStats

logger = logging.getLogger(__name__)

_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class VenueRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    def _insert(self, model):
        dialect = self.session.get_bind().dialect.name
        try:
            return _INSERTS[dialect](model)
        except KeyError:
            raise ValueError(f"Unsupported database dialect for upserts: {dialect}") from None

    async def get_city(self, name: str) -> CityRecord | None:
        result = await self.session.execute(select(CityRecord).where(CityRecord.name == name))
        return result.scalar_one_or_none()

    async def ensure_city(self, name: str, state: str) -> CityRecord:
        stmt = self._insert(CityRecord).values(id=uuid.uuid4(), name=name, state=state)
        await self.session.execute(stmt.on_conflict_do_nothing(index_elements=["name"]))
        await self.session.commit()
        return await self.get_city(name)

    async def ensure_neighborhoods(self, city_id: uuid.UUID, neighborhoods: tuple[Neighborhood, ...]) -> int:
        """Insert missing reference neighborhoods. Returns how many were created."""
        created = 0
        for hood in neighborhoods:
            stmt = self._insert(NeighborhoodRecord).values(
                id=uuid.uuid4(),
                city_id=city_id,
                name=hood.name,
                slug=hood.slug,
                description=hood.description,
                active=True,
            )
            result = await self.session.execute(
                stmt.on_conflict_do_nothing(index_elements=["slug", "city_id"])
            )
            created += result.rowcount or 0
        await self.session.commit()
        if created:
            logger.info("Created %d neighborhoods", created)
        return created

    async def neighborhood_ids(self, city_id: uuid.UUID) -> dict[str, uuid.UUID]:
        result = await self.session.execute(
            select(NeighborhoodRecord.name, NeighborhoodRecord.id).where(NeighborhoodRecord.city_id == city_id)
        )
        return {name: hood_id for name, hood_id in result.all()}

    async def list_neighborhoods(self, city_id: uuid.UUID) -> list[NeighborhoodRecord]:
        result = await self.session.execute(
            select(NeighborhoodRecord)
            .where(NeighborhoodRecord.city_id == city_id)
            .order_by(NeighborhoodRecord.name)
        )
        return list(result.scalars())

    async def existing_external_ids(self, source: str | None = None) -> set[str]:
        stmt = select(VenueRecord.external_id)
        if source:
            stmt = stmt.where(VenueRecord.source == source)
        result = await self.session.execute(stmt)
        return set(result.scalars())

    async def upsert_venue(self, values: dict) -> bool:
        """Insert a venue unless (external_id, source) already exists.

        Returns True if a row was inserted.
        """
        stmt = self._insert(VenueRecord).values(id=uuid.uuid4(), **values)
        result = await self.session.execute(
            stmt.on_conflict_do_nothing(index_elements=["external_id", "source"])
        )
        await self.session.commit()
        return bool(result.rowcount)

    async def list_venues(
        self,
        city_id: uuid.UUID,
        limit: int | None = None,
        category: str | None = None,
    ) -> list[VenueRecord]:
        stmt = (
            select(VenueRecord)
            .where(VenueRecord.city_id == city_id, VenueRecord.active.is_(True))
            .order_by(VenueRecord.created_at, VenueRecord.name)
            .execution_options(populate_existing=True)
        )
        if category is not None:
            stmt = stmt.where(VenueRecord.category == category)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars())

    async def assign_neighborhood(
        self,
        venue_id: uuid.UUID,
        neighborhood_id: uuid.UUID,
        confidence: str | None = None,
        method: str | None = None,
    ) -> None:
        await self.session.execute(
            update(VenueRecord)
            .where(VenueRecord.id == venue_id)
            .values(
                neighborhood_id=neighborhood_id,
                neighborhood_confidence=confidence,
                neighborhood_method=method,
            )
        )
        await self.session.commit()

    async def set_category(self, venue_id: uuid.UUID, category: str) -> None:
        await self.session.execute(
            update(VenueRecord).where(VenueRecord.id == venue_id).values(category=category)
        )
        await self.session.commit()

    async def venue_stats(self, city_id: uuid.UUID | None = None) -> VenueStats:
        scope = [VenueRecord.active.is_(True)]
        if city_id is not None:
            scope.append(VenueRecord.city_id == city_id)

        total = await self.session.scalar(select(func.count(VenueRecord.id)).where(*scope))
        unmapped = await self.session.scalar(
            select(func.count(VenueRecord.id)).where(*scope, VenueRecord.neighborhood_id.is_(None))
        )
        rows = await self.session.execute(
            select(VenueRecord.category, func.count(VenueRecord.id))
            .where(*scope)
            .group_by(VenueRecord.category)
            .order_by(func.count(VenueRecord.id).desc())
        )
        return VenueStats(
            total=total or 0,
            unmapped=unmapped or 0,
            by_category={category: count for category, count in rows.all()},
        )
