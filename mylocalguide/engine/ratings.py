"""Cross-platform rating aggregation."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

# Confidence saturates at this many combined reviews
FULL_CONFIDENCE_REVIEWS = 100
AGREEMENT_BONUS_WEIGHT = Decimal("0.2")


@dataclass(frozen=True)
class AggregatedRating:
    rating: Decimal
    total_reviews: int
    confidence: Decimal  # 0.00-1.00


def aggregate_rating(
    google_rating: float | None,
    google_reviews: int | None,
    yelp_rating: float | None,
    yelp_reviews: int | None,
) -> AggregatedRating:
    """Review-weighted rating across Google and Yelp.

    Confidence grows with review volume. When both platforms have reviews it
    also gets a bonus (up to 0.2) for how closely their ratings agree.
    """
    g_rating = Decimal(str(google_rating or 0))
    y_rating = Decimal(str(yelp_rating or 0))
    g_reviews = google_reviews or 0
    y_reviews = yelp_reviews or 0

    total = g_reviews + y_reviews
    if total == 0:
        return AggregatedRating(Decimal("0"), 0, Decimal("0"))

    weighted = (g_rating * g_reviews + y_rating * y_reviews) / total

    base = min(Decimal(total) / FULL_CONFIDENCE_REVIEWS, Decimal("1"))
    bonus = Decimal("0")
    if g_reviews and y_reviews:
        difference = abs(g_rating - y_rating)
        bonus = max(Decimal("0"), 1 - difference / 5) * AGREEMENT_BONUS_WEIGHT
    confidence = min(base + bonus, Decimal("1"))

    return AggregatedRating(
        rating=weighted.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP),
        total_reviews=total,
        confidence=confidence.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP),
    )


def popularity_score(review_count: int | None) -> int:
    """0-100 popularity score: one point per five reviews."""
    return min(100, (review_count or 0) // 5)
