"""Google Places and Geocoding API clients."""

import logging
from decimal import Decimal

import httpx

from mylocalguide.config import settings
from mylocalguide.data.cache import cached
from mylocalguide.data.rate_limit import RateLimiter
from mylocalguide.models.venue import SearchSpec, VenueListing, VenueSource

logger = logging.getLogger(__name__)

PLACES_BASE_URL = "https://maps.googleapis.com/maps/api/place"
GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
DETAIL_FIELDS = (
    "name,formatted_address,formatted_phone_number,website,rating,user_ratings_total,"
    "price_level,opening_hours,photos,geometry,types,business_status"
)

_limiter: RateLimiter | None = None


def get_google_limiter() -> RateLimiter:
    global _limiter
    if _limiter is None:
        _limiter = RateLimiter(settings.google_requests_per_hour)
    return _limiter


def listing_from_google(place: dict) -> VenueListing:
    location = (place.get("geometry") or {}).get("location") or {}
    lat = location.get("lat")
    lng = location.get("lng")

    return VenueListing(
        external_id=f"google-{place['place_id']}",
        source=VenueSource.GOOGLE,
        name=place.get("name", ""),
        address=place.get("formatted_address") or place.get("vicinity") or "",
        latitude=Decimal(str(lat)) if lat is not None else None,
        longitude=Decimal(str(lng)) if lng is not None else None,
        tags=tuple(place.get("types") or []),
        phone=place.get("formatted_phone_number") or None,
        website=place.get("website") or None,
        rating=place.get("rating"),
        review_count=place.get("user_ratings_total") or 0,
        price_range=place.get("price_level"),
        photos=tuple(p["photo_reference"] for p in place.get("photos") or [] if p.get("photo_reference")),
        is_closed=place.get("business_status") == "CLOSED_PERMANENTLY",
    )


async def _google_get(url: str, params: dict, limiter: RateLimiter) -> dict:
    if not limiter.consume():
        logger.warning("Google rate limit reached, skipping %s (resets in %.0fs)", url, limiter.seconds_until_reset())
        return {}

    async with httpx.AsyncClient(timeout=10.0) as client:
        resp = await client.get(url, params=params)
        resp.raise_for_status()
        data = resp.json()

    status = data.get("status", "OK")
    if status not in ("OK", "ZERO_RESULTS"):
        logger.warning("Google API returned status %s: %s", status, data.get("error_message", ""))
        return {}
    return data


class GooglePlacesClient:
    source_name = "google"

    def __init__(self, api_key: str | None = None, limiter: RateLimiter | None = None):
        self.api_key = api_key or settings.google_places_api_key
        self.limiter = limiter or get_google_limiter()

    async def _get(self, endpoint: str, params: dict) -> dict:
        return await _google_get(f"{PLACES_BASE_URL}{endpoint}", {**params, "key": self.api_key}, self.limiter)

    @cached("google:textsearch", ttl_seconds=86400)
    async def search_venues(self, query: str, location: str | None = None) -> list[dict]:
        """Text search for establishments. Returns raw place payloads."""
        if not self.api_key:
            logger.debug("Google Places API key not configured, skipping search")
            return []

        params = {
            "query": f"{query} {location or settings.city_location}",
            "type": "establishment",
            "region": "us",
        }
        try:
            data = await self._get("/textsearch/json", params)
        except (httpx.HTTPStatusError, httpx.RequestError) as e:
            logger.warning("Google Places search failed for %r: %s", query, e)
            return []

        return data.get("results") or []

    async def get_place_details(self, place_id: str) -> dict:
        if not self.api_key:
            logger.debug("Google Places API key not configured, skipping details")
            return {}
        try:
            data = await self._get("/details/json", {"place_id": place_id, "fields": DETAIL_FIELDS})
        except (httpx.HTTPStatusError, httpx.RequestError) as e:
            logger.warning("Google Places details failed for %s: %s", place_id, e)
            return {}
        return data.get("result") or {}

    async def search(self, spec: SearchSpec, offset: int = 0, page_size: int = 20) -> list[VenueListing]:
        # Text search is single-page here; later pages need a next_page_token round trip.
        if offset > 0:
            return []
        places = await self.search_venues(spec.query, spec.location or settings.city_location)
        return [listing_from_google(p) for p in places if p.get("place_id")]


class GoogleGeocodingLocator:
    """Names a neighborhood from the `neighborhood` component of a geocode result."""

    def __init__(self, api_key: str | None = None, limiter: RateLimiter | None = None):
        self.api_key = api_key or settings.google_places_api_key
        self.limiter = limiter or get_google_limiter()

    async def locate_neighborhood(self, name: str, address: str) -> str | None:
        if not self.api_key:
            logger.debug("Google API key not configured, skipping geocoding")
            return None

        params = {"address": address, "key": self.api_key}
        try:
            data = await _google_get(GEOCODE_URL, params, self.limiter)
        except (httpx.HTTPStatusError, httpx.RequestError) as e:
            logger.warning("Google geocoding failed for %r: %s", address, e)
            return None

        for result in data.get("results") or []:
            for component in result.get("address_components") or []:
                if "neighborhood" in component.get("types", []):
                    return component.get("long_name")
        return None
