"""FastAPI dependency injection."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from mylocalguide.config import settings
from mylocalguide.data.repository import VenueRepository
from mylocalguide.data.resolver import NeighborhoodResolver

engine = create_async_engine(settings.database_url, echo=settings.debug)
async_session = async_sessionmaker(engine, expire_on_commit=False)


async def get_db() -> AsyncSession:
    async with async_session() as session:
        yield session


def get_repository(session: AsyncSession = Depends(get_db)) -> VenueRepository:
    return VenueRepository(session)


def get_resolver() -> NeighborhoodResolver:
    return NeighborhoodResolver.from_settings()
