"""Tests for the Google Places client and geocoding locator."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from mylocalguide.data.google_places import GoogleGeocodingLocator, GooglePlacesClient, listing_from_google
from mylocalguide.data.rate_limit import RateLimiter
from mylocalguide.models.venue import SearchSpec, VenueSource

PLACE = {
    "place_id": "ChIJ123",
    "name": "Blue Bottle Coffee",
    "formatted_address": "66 Mint St, San Francisco, CA 94103, USA",
    "geometry": {"location": {"lat": 37.7823, "lng": -122.4076}},
    "types": ["cafe", "food", "point_of_interest", "establishment"],
    "rating": 4.4,
    "user_ratings_total": 2100,
    "price_level": 2,
    "photos": [{"photo_reference": "ref-1"}, {"height": 10}],
    "business_status": "OPERATIONAL",
}

GEOCODE = {
    "status": "OK",
    "results": [{
        "address_components": [
            {"long_name": "3599", "types": ["street_number"]},
            {"long_name": "Inner Richmond", "types": ["neighborhood", "political"]},
        ],
    }],
}


@pytest.fixture
def client():
    return GooglePlacesClient(api_key="test-key", limiter=RateLimiter(100))


class TestListingFromGoogle:
    def test_normalizes_place(self):
        listing = listing_from_google(PLACE)
        assert listing.external_id == "google-ChIJ123"
        assert listing.source == VenueSource.GOOGLE
        assert listing.tags == ("cafe", "food", "point_of_interest", "establishment")
        assert listing.photos == ("ref-1",)
        assert listing.review_count == 2100
        assert not listing.is_closed

    def test_permanently_closed(self):
        listing = listing_from_google({**PLACE, "business_status": "CLOSED_PERMANENTLY"})
        assert listing.is_closed


class TestGooglePlacesClient:
    async def test_search_venues(self, client):
        with patch.object(client, "_get", new_callable=AsyncMock, return_value={"results": [PLACE]}) as mock_get:
            result = await client.search_venues("coffee")

        assert result == [PLACE]
        endpoint, params = mock_get.call_args.args
        assert endpoint == "/textsearch/json"
        assert params["query"] == "coffee San Francisco, CA"
        assert params["type"] == "establishment"

    async def test_no_api_key(self):
        client = GooglePlacesClient(api_key="", limiter=RateLimiter(100))
        assert await client.search_venues("coffee") == []

    async def test_http_error(self, client):
        request = httpx.Request("GET", "https://maps.googleapis.com")
        error = httpx.HTTPStatusError("403", request=request, response=httpx.Response(403, request=request))
        with patch.object(client, "_get", new_callable=AsyncMock, side_effect=error):
            assert await client.search_venues("coffee") == []

    async def test_search_is_single_page(self, client):
        with patch.object(client, "_get", new_callable=AsyncMock, return_value={"results": [PLACE]}):
            first = await client.search(SearchSpec("coffee"))
            second = await client.search(SearchSpec("coffee"), offset=50)
        assert [l.name for l in first] == ["Blue Bottle Coffee"]
        assert second == []

    async def test_place_details(self, client):
        with patch.object(client, "_get", new_callable=AsyncMock, return_value={"result": PLACE}):
            assert await client.get_place_details("ChIJ123") == PLACE


class TestGoogleGeocodingLocator:
    async def test_reads_neighborhood_component(self):
        locator = GoogleGeocodingLocator(api_key="test-key", limiter=RateLimiter(100))
        with patch("mylocalguide.data.google_places._google_get", new_callable=AsyncMock, return_value=GEOCODE):
            assert await locator.locate_neighborhood("Venue", "3599 Clement St") == "Inner Richmond"

    async def test_no_neighborhood_component(self):
        locator = GoogleGeocodingLocator(api_key="test-key", limiter=RateLimiter(100))
        with patch("mylocalguide.data.google_places._google_get", new_callable=AsyncMock, return_value={"results": []}):
            assert await locator.locate_neighborhood("Venue", "somewhere") is None

    async def test_no_api_key(self):
        locator = GoogleGeocodingLocator(api_key="", limiter=RateLimiter(100))
        with patch("mylocalguide.data.google_places._google_get", new_callable=AsyncMock) as mock_get:
            assert await locator.locate_neighborhood("Venue", "somewhere") is None
        mock_get.assert_not_called()

    async def test_exhausted_limiter(self):
        locator = GoogleGeocodingLocator(api_key="test-key", limiter=RateLimiter(0))
        with patch("mylocalguide.data.google_places.httpx.AsyncClient") as mock_client:
            assert await locator.locate_neighborhood("Venue", "somewhere") is None
        mock_client.assert_not_called()
