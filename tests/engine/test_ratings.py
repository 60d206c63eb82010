"""Tests for cross-platform rating aggregation."""

from decimal import Decimal

from mylocalguide.engine.ratings import aggregate_rating, popularity_score


class TestAggregateRating:
    def test_review_weighted_mean(self):
        agg = aggregate_rating(4.5, 100, 4.0, 100)
        assert agg.rating == Decimal("4.3")  # 4.25 rounds half up
        assert agg.total_reviews == 200
        assert agg.confidence == Decimal("1.00")

    def test_agreement_bonus(self):
        agg = aggregate_rating(4.0, 20, 4.0, 30)
        assert agg.rating == Decimal("4.0")
        assert agg.confidence == Decimal("0.70")

    def test_single_platform_has_no_agreement_bonus(self):
        agg = aggregate_rating(None, 0, 4.5, 10)
        assert agg.rating == Decimal("4.5")
        assert agg.total_reviews == 10
        assert agg.confidence == Decimal("0.10")

    def test_rating_without_reviews_is_not_compared(self):
        # A Google rating with no review count does not earn agreement credit
        agg = aggregate_rating(4.5, 0, 4.5, 40)
        assert agg.confidence == Decimal("0.40")

    def test_disagreement_shrinks_bonus(self):
        agg = aggregate_rating(2.0, 20, 4.5, 30)
        assert agg.rating == Decimal("3.5")
        assert agg.confidence == Decimal("0.60")

    def test_no_reviews(self):
        agg = aggregate_rating(None, None, None, None)
        assert agg.rating == Decimal("0")
        assert agg.total_reviews == 0
        assert agg.confidence == Decimal("0")

    def test_confidence_capped(self):
        agg = aggregate_rating(5.0, 5000, 5.0, 5000)
        assert agg.confidence == Decimal("1.00")


class TestPopularityScore:
    def test_scale(self):
        assert popularity_score(0) == 0
        assert popularity_score(None) == 0
        assert popularity_score(499) == 99
        assert popularity_score(500) == 100

    def test_capped(self):
        assert popularity_score(10_000) == 100
