"""Cross-platform rating lookup.

A venue ingested from one platform is searched on the other by name and
address. When a result's name matches, its detail payload supplies the second
rating so the aggregate compares two independent sources.
"""

import logging
import re
from dataclasses import replace

from mylocalguide.data.google_places import GooglePlacesClient
from mylocalguide.data.yelp import YelpClient
from mylocalguide.models.venue import PlatformRatings, VenueListing, VenueSource

logger = logging.getLogger(__name__)

# Candidates checked per cross-platform search
MATCH_CANDIDATES = 3
# Shorter names must match exactly rather than by containment
MIN_PARTIAL_LENGTH = 4

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def _squash(name: str) -> str:
    return _NON_ALNUM.sub("", (name or "").lower())


def best_match(name: str, candidates: list[dict]) -> dict | None:
    """First candidate named like `name`, exactly or by containment."""
    wanted = _squash(name)
    if not wanted:
        return None
    for candidate in candidates[:MATCH_CANDIDATES]:
        found = _squash(candidate.get("name", ""))
        if found == wanted:
            return candidate
        if min(len(found), len(wanted)) >= MIN_PARTIAL_LENGTH and (found in wanted or wanted in found):
            return candidate
    return None


class RatingEnricher:
    def __init__(self, yelp: YelpClient | None = None, google: GooglePlacesClient | None = None):
        self.yelp = yelp or YelpClient()
        self.google = google or GooglePlacesClient()

    async def yelp_details(self, name: str, address: str) -> dict:
        businesses = await self.yelp.search_businesses(name, address or None, limit=MATCH_CANDIDATES)
        match = best_match(name, businesses)
        if match is None:
            return {}
        return await self.yelp.get_business_details(match["id"])

    async def google_details(self, name: str, address: str) -> dict:
        places = await self.google.search_venues(f"{name} {address}".strip())
        match = best_match(name, places)
        if match is None:
            return {}
        return await self.google.get_place_details(match["place_id"])

    async def enrich(self, listing: VenueListing) -> PlatformRatings:
        """Ratings from the listing's own platform plus the other one, if found."""
        ratings = PlatformRatings.from_listing(listing)

        if listing.source == VenueSource.YELP:
            details = await self.google_details(listing.name, listing.address)
            if details:
                ratings = replace(
                    ratings,
                    google_rating=details.get("rating"),
                    google_reviews=details.get("user_ratings_total") or 0,
                )
        else:
            details = await self.yelp_details(listing.name, listing.address)
            if details:
                ratings = replace(
                    ratings,
                    yelp_rating=details.get("rating"),
                    yelp_reviews=details.get("review_count") or 0,
                )

        if not details:
            logger.debug("No cross-platform match for %s", listing.name)
        return ratings
