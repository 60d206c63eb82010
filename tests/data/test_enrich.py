"""Tests for the cross-platform rating lookup."""

from unittest.mock import AsyncMock

import pytest

from mylocalguide.data.enrich import RatingEnricher, best_match
from mylocalguide.models.venue import PlatformRatings, VenueSource

GOOGLE_PLACE = {"place_id": "ChIJ123", "name": "Tartine Bakery"}
GOOGLE_DETAILS = {"name": "Tartine Bakery", "rating": 4.6, "user_ratings_total": 9000}
YELP_BUSINESS = {"id": "tartine-bakery-sf", "name": "Tartine Bakery"}
YELP_DETAILS = {"id": "tartine-bakery-sf", "rating": 4.0, "review_count": 8000}


@pytest.fixture
def yelp():
    client = AsyncMock()
    client.search_businesses.return_value = [YELP_BUSINESS]
    client.get_business_details.return_value = YELP_DETAILS
    return client


@pytest.fixture
def google():
    client = AsyncMock()
    client.search_venues.return_value = [GOOGLE_PLACE]
    client.get_place_details.return_value = GOOGLE_DETAILS
    return client


class TestBestMatch:
    def test_ignores_punctuation_and_case(self):
        assert best_match("Tartine Bakery", [{"name": "TARTINE BAKERY!"}]) == {"name": "TARTINE BAKERY!"}

    def test_containment_either_way(self):
        assert best_match("Tartine", [{"name": "Tartine Bakery & Cafe"}])
        assert best_match("Tartine Bakery & Cafe", [{"name": "Tartine"}])

    def test_skips_unrelated_results(self):
        candidates = [{"name": "Blue Bottle"}, {"name": "Tartine Bakery"}]
        assert best_match("Tartine Bakery", candidates) == {"name": "Tartine Bakery"}

    def test_only_top_candidates(self):
        candidates = [{"name": "Blue Bottle"}, {"name": "Zuni Cafe"}, {"name": "Foreign Cinema"}, {"name": "Tartine"}]
        assert best_match("Tartine", candidates) is None

    def test_blank_names(self):
        assert best_match("", [{"name": ""}]) is None

    def test_short_names_need_exact_match(self):
        assert best_match("Tartine", [{"name": "Tar"}]) is None
        assert best_match("Zam", [{"name": "Zam"}]) == {"name": "Zam"}


class TestRatingEnricher:
    async def test_yelp_listing_gets_google_rating(self, yelp, google, tartine):
        ratings = await RatingEnricher(yelp=yelp, google=google).enrich(tartine)

        assert ratings == PlatformRatings(
            yelp_rating=4.5, yelp_reviews=120, google_rating=4.6, google_reviews=9000,
        )
        google.search_venues.assert_awaited_once_with("Tartine Bakery 600 Guerrero St, San Francisco, CA 94110")
        google.get_place_details.assert_awaited_once_with("ChIJ123")
        yelp.search_businesses.assert_not_called()

    async def test_google_listing_gets_yelp_rating(self, yelp, google, listing_factory):
        listing = listing_factory(
            "google-ChIJ123", name="Tartine Bakery", address="600 Guerrero St",
            source=VenueSource.GOOGLE, rating=4.6, review_count=9000,
        )

        ratings = await RatingEnricher(yelp=yelp, google=google).enrich(listing)

        assert ratings.yelp_rating == 4.0
        assert ratings.yelp_reviews == 8000
        assert ratings.google_reviews == 9000
        yelp.search_businesses.assert_awaited_once_with("Tartine Bakery", "600 Guerrero St", limit=3)
        yelp.get_business_details.assert_awaited_once_with("tartine-bakery-sf")

    async def test_no_match_keeps_own_rating(self, yelp, google, tartine):
        google.search_venues.return_value = [{"place_id": "x", "name": "Somewhere Else"}]

        ratings = await RatingEnricher(yelp=yelp, google=google).enrich(tartine)

        assert ratings == PlatformRatings.from_listing(tartine)
        google.get_place_details.assert_not_called()

    async def test_empty_details_keep_own_rating(self, yelp, google, tartine):
        google.get_place_details.return_value = {}
        ratings = await RatingEnricher(yelp=yelp, google=google).enrich(tartine)
        assert ratings.google_rating is None
        assert ratings.google_reviews == 0
