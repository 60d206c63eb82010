"""CLI for neighborhood resolution, ingestion and remapping.

Usage:
    python -m mylocalguide.data.guide_cli resolve "Tartine" "600 Guerrero St, San Francisco, CA 94110"
    python -m mylocalguide.data.guide_cli classify "Blue Bottle" "66 Mint St" --tags "Coffee & Tea"
    python -m mylocalguide.data.guide_cli init-db
    python -m mylocalguide.data.guide_cli ingest --preset neighborhoods --source yelp --budget 500
    python -m mylocalguide.data.guide_cli ingest --preset comprehensive --enrich
    python -m mylocalguide.data.guide_cli remap --test
    python -m mylocalguide.data.guide_cli recategorize
    python -m mylocalguide.data.guide_cli stats
"""

import argparse
import asyncio
import logging
from pathlib import Path

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from mylocalguide.config import settings
from mylocalguide.data.dedup import IngestionContext
from mylocalguide.data.enrich import RatingEnricher
from mylocalguide.data.google_places import GooglePlacesClient
from mylocalguide.data.ingest import VenueIngestor
from mylocalguide.data.recategorize import recategorize_venues
from mylocalguide.data.remap import remap_venues
from mylocalguide.data.repository import VenueRepository
from mylocalguide.data.resolver import NeighborhoodResolver
from mylocalguide.data.search_catalog import PRESETS, get_preset
from mylocalguide.data.yelp import YelpClient
from mylocalguide.engine.categorizer import classify_venue
from mylocalguide.engine.reference_tables import SF_RULES
from mylocalguide.models.db import Base

SOURCES = {
    "yelp": YelpClient,
    "google": GooglePlacesClient,
}


def print_resolution(name: str, address: str, result) -> None:
    print(f"\n{'=' * 60}")
    print(f"  Neighborhood: {name}")
    print(f"{'=' * 60}")
    print(f"  Address:        {address or '(none)'}")
    print(f"  Neighborhood:   {result.neighborhood}")
    print(f"  Confidence:     {result.confidence.value}")
    print(f"  Method:         {result.method.value}")
    print()


def print_ingestion(preset: str, source: str, ctx: IngestionContext) -> None:
    print(f"\n{'=' * 60}")
    print(f"  Ingestion: {preset} ({source})")
    print(f"{'=' * 60}")
    print(f"  Added:            {ctx.added}")
    print(f"  Duplicates:       {ctx.duplicates}")
    print(f"  Failed:           {ctx.failed}")
    print(f"  API calls:        {ctx.calls_made}")
    print(f"  Calls remaining:  {ctx.calls_remaining}")
    print()
    if ctx.per_query:
        print("  Added by search:")
        for query, count in ctx.per_query.most_common():
            print(f"    {count:>5}  {query}")
    print()


def print_report(report, test_mode: bool = False) -> None:
    data = report.as_dict()
    print(f"\n{'=' * 60}")
    print(f"  Neighborhood Remap{' (test mode)' if test_mode else ''}")
    print(f"{'=' * 60}")
    print(f"  Processed:        {data['processed']}")
    print(f"  Newly mapped:     {data['newly_mapped']}")
    print(f"  Remapped:         {data['remapped']}")
    print(f"  Skipped:          {data['skipped']}")
    print(f"  Low confidence:   {data['low_confidence_share']:.1%}")
    print()
    print("  Confidence:")
    for confidence, count in data["confidence_distribution"].items():
        print(f"    {confidence:>10}: {count}")
    print("  Method:")
    for method, count in sorted(data["method_distribution"].items()):
        print(f"    {method:>10}: {count}")
    print("  Top neighborhoods:")
    for hood, count in list(data["neighborhood_distribution"].items())[:10]:
        print(f"    {count:>5}  {hood}")
    print()


def print_recategorization(report) -> None:
    data = report.as_dict()
    print(f"\n{'=' * 60}")
    print("  Category Fix")
    print(f"{'=' * 60}")
    print(f"  Uncategorized:    {data['processed']}")
    print(f"  Re-classified:    {data['recategorized']}")
    print(f"  Still Other:      {data['unchanged']}")
    print(f"  Failed:           {data['failed']}")
    print()
    for category, count in data["by_category"].items():
        print(f"    {count:>5}  {category}")
    print()


def print_stats(stats) -> None:
    print(f"\n{'=' * 60}")
    print(f"  Venue Statistics: {settings.city_location}")
    print(f"{'=' * 60}")
    print(f"  Total venues:     {stats.total}")
    print(f"  Unmapped:         {stats.unmapped}")
    print()
    if stats.by_category:
        print("  By category:")
        for category, count in stats.by_category.items():
            print(f"    {count:>5}  {category}")
    print()


async def init_db(engine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def _city(repository: VenueRepository):
    city = await repository.ensure_city(settings.city_name, settings.city_state)
    await repository.ensure_neighborhoods(city.id, SF_RULES.neighborhoods)
    return city


async def main() -> None:
    parser = argparse.ArgumentParser(description="MyLocalGuide venue CLI")
    parser.add_argument("--db", default=settings.database_url, help="Database URL")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("resolve", help="Resolve a venue to a neighborhood")
    p.add_argument("name")
    p.add_argument("address")
    p.add_argument("--offline", action="store_true", help="Skip external geocoding")

    p = sub.add_parser("classify", help="Guess a venue's category")
    p.add_argument("name")
    p.add_argument("address", nargs="?", default="")
    p.add_argument("--tags", nargs="*", default=[], help="Source category titles or place types")

    sub.add_parser("init-db", help="Create tables and reference neighborhoods")

    p = sub.add_parser("ingest", help="Pull venues from a listing source")
    p.add_argument("--preset", choices=sorted(PRESETS), default="comprehensive")
    p.add_argument("--source", choices=sorted(SOURCES), default="yelp")
    p.add_argument("--budget", type=int, default=settings.daily_call_budget, help="API call budget for this run, including the reserve")
    p.add_argument("--enrich", action="store_true", help="Look each venue up on the other platform for a second rating")

    p = sub.add_parser("remap", help="Re-resolve neighborhoods for all stored venues")
    p.add_argument("--test", action="store_true", help="Only process the first 10 venues")

    sub.add_parser("recategorize", help="Re-classify venues stored as Other")

    sub.add_parser("stats", help="Show venue counts")

    args = parser.parse_args()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.command == "resolve":
        resolver = NeighborhoodResolver() if args.offline else NeighborhoodResolver.from_settings()
        result = await resolver.resolve(args.name, args.address)
        print_resolution(args.name, args.address, result)
        return

    if args.command == "classify":
        print(classify_venue(args.tags, args.name, args.address))
        return

    url = make_url(args.db)
    if url.get_backend_name() == "sqlite" and url.database:
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    engine = create_async_engine(args.db, echo=settings.debug)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)

    try:
        if args.command == "init-db":
            await init_db(engine)

        async with session_factory() as session:
            repository = VenueRepository(session)

            if args.command == "init-db":
                city = await _city(repository)
                print(f"Database ready: {city.name}, {city.state}")

            elif args.command == "ingest":
                city = await _city(repository)
                source = SOURCES[args.source]()
                ctx = IngestionContext(budget=args.budget)
                ctx.seed(await repository.existing_external_ids(source.source_name))
                enricher = RatingEnricher() if args.enrich else None
                ingestor = VenueIngestor(source, repository, NeighborhoodResolver.from_settings(), enricher=enricher)
                await ingestor.run(list(get_preset(args.preset)), ctx, city)
                print_ingestion(args.preset, args.source, ctx)

            elif args.command == "remap":
                city = await _city(repository)
                report = await remap_venues(repository, NeighborhoodResolver.from_settings(), city, test_mode=args.test)
                print_report(report, test_mode=args.test)

            elif args.command == "recategorize":
                city = await _city(repository)
                print_recategorization(await recategorize_venues(repository, city))

            elif args.command == "stats":
                city = await repository.get_city(settings.city_name)
                print_stats(await repository.venue_stats(city.id if city else None))
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
