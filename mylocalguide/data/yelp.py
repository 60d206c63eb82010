"""Yelp Fusion API client for business search and details."""

import logging
from decimal import Decimal

import httpx

from mylocalguide.config import settings
from mylocalguide.data.cache import cached
from mylocalguide.data.rate_limit import RateLimiter
from mylocalguide.models.venue import SearchSpec, VenueListing, VenueSource

logger = logging.getLogger(__name__)

YELP_BASE_URL = "https://api.yelp.com/v3"
YELP_MAX_PAGE_SIZE = 50
YELP_MAX_RESULTS = 240  # limit + offset may not exceed this
SEARCH_RADIUS_M = 40000

_limiter: RateLimiter | None = None


def get_yelp_limiter() -> RateLimiter:
    global _limiter
    if _limiter is None:
        _limiter = RateLimiter(settings.yelp_requests_per_hour)
    return _limiter


def listing_from_yelp(business: dict) -> VenueListing:
    location = business.get("location") or {}
    coords = business.get("coordinates") or {}
    lat = coords.get("latitude")
    lon = coords.get("longitude")
    price = business.get("price")
    image_url = business.get("image_url")

    return VenueListing(
        external_id=f"yelp-{business['id']}",
        source=VenueSource.YELP,
        name=business.get("name", ""),
        address=", ".join(location.get("display_address") or []),
        latitude=Decimal(str(lat)) if lat is not None else None,
        longitude=Decimal(str(lon)) if lon is not None else None,
        tags=tuple(c.get("title", "") for c in business.get("categories") or []),
        phone=business.get("phone") or None,
        website=business.get("url") or None,
        rating=business.get("rating"),
        review_count=business.get("review_count") or 0,
        price_range=len(price) if price else None,
        photos=(image_url,) if image_url else (),
        is_closed=bool(business.get("is_closed", False)),
    )


class YelpClient:
    source_name = "yelp"

    def __init__(self, api_key: str | None = None, limiter: RateLimiter | None = None):
        self.api_key = api_key or settings.yelp_api_key
        self.headers = {"Authorization": f"Bearer {self.api_key}", "Accept": "application/json"}
        self.limiter = limiter or get_yelp_limiter()

    async def _get(self, endpoint: str, params: dict | None = None) -> dict:
        if not self.limiter.consume():
            logger.warning(
                "Yelp rate limit reached, skipping %s (resets in %.0fs)",
                endpoint, self.limiter.seconds_until_reset(),
            )
            return {}

        async with httpx.AsyncClient(timeout=10.0) as client:
            resp = await client.get(
                f"{YELP_BASE_URL}{endpoint}",
                headers=self.headers,
                params=params or {},
            )
            resp.raise_for_status()
            return resp.json()

    @cached("yelp:search", ttl_seconds=86400)
    async def search_businesses(
        self,
        term: str,
        location: str | None = None,
        limit: int = YELP_MAX_PAGE_SIZE,
        offset: int = 0,
        categories: str | None = None,
    ) -> list[dict]:
        """Search businesses sorted by rating. Returns raw business payloads."""
        if not self.api_key:
            logger.debug("Yelp API key not configured, skipping search")
            return []

        params = {
            "term": term,
            "location": location or settings.city_location,
            "limit": min(limit, YELP_MAX_PAGE_SIZE),
            "offset": offset,
            "sort_by": "rating",
            "radius": SEARCH_RADIUS_M,
        }
        if categories:
            params["categories"] = categories

        try:
            data = await self._get("/businesses/search", params)
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 429:
                logger.warning("Yelp throttled search for %r at offset %d", term, offset)
            else:
                logger.warning("Yelp search failed for %r: %s", term, e)
            return []
        except httpx.RequestError as e:
            logger.warning("Yelp request error: %s", e)
            return []

        return data.get("businesses") or []

    async def get_business_details(self, business_id: str) -> dict:
        if not self.api_key:
            logger.debug("Yelp API key not configured, skipping details")
            return {}
        try:
            return await self._get(f"/businesses/{business_id}")
        except (httpx.HTTPStatusError, httpx.RequestError) as e:
            logger.warning("Yelp business details failed for %s: %s", business_id, e)
            return {}

    async def search(self, spec: SearchSpec, offset: int = 0, page_size: int = YELP_MAX_PAGE_SIZE) -> list[VenueListing]:
        page_size = min(page_size, YELP_MAX_RESULTS - offset)
        if page_size <= 0:
            return []
        businesses = await self.search_businesses(
            spec.query,
            spec.location or settings.city_location,
            limit=page_size,
            offset=offset,
            categories=spec.categories,
        )
        return [listing_from_yelp(b) for b in businesses if b.get("id")]
