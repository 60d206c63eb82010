from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class VenueSource(Enum):
    YELP = "yelp"
    GOOGLE = "google"


@dataclass(frozen=True)
class VenueListing:
    """A venue as returned by an external listing source, normalized."""

    external_id: str  # source-qualified, e.g. "yelp-abc123"
    source: VenueSource
    name: str
    address: str
    latitude: Decimal | None = None
    longitude: Decimal | None = None
    tags: tuple[str, ...] = ()  # Yelp category titles / Google place types
    phone: str | None = None
    website: str | None = None
    rating: float | None = None
    review_count: int = 0
    price_range: int | None = None  # 1-4
    photos: tuple[str, ...] = ()
    is_closed: bool = False


@dataclass(frozen=True)
class PlatformRatings:
    """Per-platform rating and review count for one venue."""

    yelp_rating: float | None = None
    yelp_reviews: int = 0
    google_rating: float | None = None
    google_reviews: int = 0

    @classmethod
    def from_listing(cls, listing: VenueListing) -> "PlatformRatings":
        if listing.source == VenueSource.GOOGLE:
            return cls(google_rating=listing.rating, google_reviews=listing.review_count or 0)
        return cls(yelp_rating=listing.rating, yelp_reviews=listing.review_count or 0)


@dataclass(frozen=True)
class SearchSpec:
    """One search to run against a listing source."""

    query: str
    limit: int = 50
    location: str | None = None  # defaults to the configured city
    categories: str | None = None  # Yelp category filter, e.g. "bars,nightlife"
    # Pin used when the resolver only reaches the default. The stored method
    # stays "default" since no rule or locator placed the venue there.
    neighborhood: str | None = None
    category: str | None = None  # pin when classification yields "Other"


@dataclass
class VenueStats:
    total: int = 0
    unmapped: int = 0
    by_category: dict[str, int] = field(default_factory=dict)
