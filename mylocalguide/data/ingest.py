"""Venue ingestion pipeline.

Flow: search pages → dedupe → resolve neighborhood → classify → upsert

One VenueIngestor runs a list of SearchSpecs against a single listing
source. Per-run state (seen IDs, call budget, counters) lives in the
IngestionContext passed to run().

Only plain values (the city UUID, neighborhood IDs) are carried between
listings. A failed upsert rolls the session back, which expires every ORM
object loaded in it.
"""

import logging
import re
import uuid
from decimal import Decimal

from mylocalguide.data.base import ListingSource
from mylocalguide.data.dedup import IngestionContext
from mylocalguide.data.enrich import RatingEnricher
from mylocalguide.data.repository import VenueRepository
from mylocalguide.data.resolver import NeighborhoodResolver
from mylocalguide.engine.categorizer import OTHER, classify_venue
from mylocalguide.engine.ratings import aggregate_rating, popularity_score
from mylocalguide.models.db import CityRecord
from mylocalguide.models.neighborhood import ResolutionMethod, ResolutionResult
from mylocalguide.models.venue import PlatformRatings, SearchSpec, VenueListing

logger = logging.getLogger(__name__)

PAGE_SIZE = 50
MAX_RESULTS_PER_SEARCH = 240

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    return _NON_ALNUM.sub("-", name.lower()).strip("-")


def _decimal(value: float | None) -> Decimal | None:
    return Decimal(str(value)) if value is not None else None


def venue_values(
    listing: VenueListing,
    city_id,
    neighborhood_id,
    category: str,
    result: ResolutionResult,
    ratings: PlatformRatings | None = None,
) -> dict:
    """Column values for a new venue row.

    Without `ratings` only the listing's own platform is rated.
    """
    ratings = ratings or PlatformRatings.from_listing(listing)
    agg = aggregate_rating(
        google_rating=ratings.google_rating,
        google_reviews=ratings.google_reviews,
        yelp_rating=ratings.yelp_rating,
        yelp_reviews=ratings.yelp_reviews,
    )

    return {
        "external_id": listing.external_id,
        "source": listing.source.value,
        "name": listing.name,
        "slug": slugify(listing.name),
        "address": listing.address,
        "city_id": city_id,
        "neighborhood_id": neighborhood_id,
        "latitude": listing.latitude,
        "longitude": listing.longitude,
        "category": category,
        "phone": listing.phone,
        "website": listing.website,
        "price_range": listing.price_range,
        "photos": list(listing.photos),
        "yelp_rating": _decimal(ratings.yelp_rating),
        "yelp_review_count": ratings.yelp_reviews,
        "google_rating": _decimal(ratings.google_rating),
        "google_review_count": ratings.google_reviews,
        "aggregate_rating": agg.rating if agg.total_reviews else None,
        "total_reviews": agg.total_reviews,
        "rating_confidence": agg.confidence,
        "popularity_score": popularity_score(agg.total_reviews),
        "neighborhood_confidence": result.confidence.value,
        "neighborhood_method": result.method.value,
        "verified": True,
        "active": True,
    }


class VenueIngestor:
    def __init__(
        self,
        source: ListingSource,
        repository: VenueRepository,
        resolver: NeighborhoodResolver,
        enricher: RatingEnricher | None = None,
    ):
        self.source = source
        self.repository = repository
        self.resolver = resolver
        self.enricher = enricher

    async def _resolve(self, listing: VenueListing, search: SearchSpec) -> ResolutionResult:
        result = await self.resolver.resolve(listing.name, listing.address)
        if result.method == ResolutionMethod.DEFAULT and search.neighborhood:
            pinned = self.resolver.rules.canonical_name(search.neighborhood)
            if pinned:
                return ResolutionResult(pinned, result.confidence, result.method)
        return result

    async def _store(
        self,
        listing: VenueListing,
        search: SearchSpec,
        city_id: uuid.UUID,
        hood_ids: dict,
        ctx: IngestionContext,
    ) -> bool:
        result = await self._resolve(listing, search)
        category = classify_venue(listing.tags, listing.name, listing.address)
        if category == OTHER and search.category:
            category = search.category

        ratings = await self.enricher.enrich(listing) if self.enricher else None

        values = venue_values(listing, city_id, hood_ids.get(result.neighborhood), category, result, ratings)
        try:
            inserted = await self.repository.upsert_venue(values)
        except Exception as e:
            logger.warning("Failed to store %s (%s): %s", listing.name, listing.external_id, e)
            await self.repository.session.rollback()
            ctx.failed += 1
            return False

        if inserted:
            ctx.added += 1
            logger.debug(
                "Added %s → %s (%s/%s), %s",
                listing.name, result.neighborhood, result.confidence.value, result.method.value, category,
            )
        else:
            ctx.duplicates += 1
        return inserted

    async def run_search(
        self,
        search: SearchSpec,
        ctx: IngestionContext,
        city_id: uuid.UUID,
        hood_ids: dict,
    ) -> int:
        """Page through one search. Returns the number of venues added."""
        added = 0
        ceiling = min(search.limit, MAX_RESULTS_PER_SEARCH)

        for offset in range(0, ceiling, PAGE_SIZE):
            if not ctx.can_call():
                logger.info("Call budget exhausted during %r", search.query)
                break

            ctx.record_call()
            page = await self.source.search(search, offset=offset, page_size=min(PAGE_SIZE, ceiling - offset))
            if not page:
                break

            for listing in page:
                if listing.is_closed or not listing.name:
                    continue
                if not ctx.mark_seen(listing.external_id):
                    continue
                if await self._store(listing, search, city_id, hood_ids, ctx):
                    added += 1

            if len(page) < PAGE_SIZE:
                break

        ctx.per_query[search.query] += added
        return added

    async def run(self, searches: list[SearchSpec], ctx: IngestionContext, city: CityRecord) -> IngestionContext:
        city_id = city.id
        hood_ids = await self.repository.neighborhood_ids(city_id)

        for i, search in enumerate(searches):
            if not ctx.can_call():
                logger.info("Call budget exhausted, stopping with %d searches left", len(searches) - i)
                break
            added = await self.run_search(search, ctx, city_id, hood_ids)
            logger.info("%s search %r: +%d venues", self.source.source_name, search.query, added)

        logger.info(
            "Ingestion complete: %d added, %d duplicates, %d failed, %d calls",
            ctx.added, ctx.duplicates, ctx.failed, ctx.calls_made,
        )
        return ctx
