"""Named search presets for ingestion runs."""

from mylocalguide.engine.categorizer import (
    ARTS,
    BARS,
    BEAUTY,
    CAFES,
    CATEGORIES,
    FITNESS,
    HEALTHCARE,
    HOTELS,
    RESTAURANTS,
    SERVICES,
    SHOPPING,
)
from mylocalguide.models.venue import SearchSpec


def _group(category: str, *searches: tuple[str, int]) -> tuple[SearchSpec, ...]:
    """Searches that all pin `category` for listings the classifier calls Other."""
    if category not in CATEGORIES:
        raise ValueError(f"Unknown category {category!r}")
    return tuple(SearchSpec(query, limit=limit, category=category) for query, limit in searches)


COMPREHENSIVE = (
    *_group(
        RESTAURANTS,
        ("restaurants", 240), ("breakfast brunch", 200), ("lunch", 200), ("dinner", 200),
        ("chinese restaurant", 100), ("japanese restaurant", 100), ("korean restaurant", 100),
        ("vietnamese restaurant", 100), ("thai restaurant", 100), ("indian restaurant", 100),
        ("mexican restaurant", 100), ("italian restaurant", 100), ("french restaurant", 50),
        ("mediterranean restaurant", 50), ("ethiopian restaurant", 50), ("american restaurant", 100),
        ("burgers", 100), ("pizza", 100), ("sandwiches", 100), ("seafood", 100),
        ("vegan restaurant", 50), ("food truck", 100),
    ),
    *_group(
        CAFES,
        ("coffee shop", 240), ("cafe", 200), ("bakery", 100), ("dessert", 100),
        ("ice cream", 50), ("bubble tea", 50),
    ),
    *_group(
        BARS,
        ("bars", 240), ("cocktail bar", 100), ("wine bar", 100), ("nightclub", 50), ("brewery", 50),
    ),
    *_group(
        SHOPPING,
        ("shopping", 200), ("clothing store", 100), ("thrift store", 50), ("bookstore", 50),
        ("grocery store", 100),
    ),
    *_group(ARTS, ("art gallery", 50)),
    *_group(BEAUTY, ("hair salon", 100), ("barber shop", 50), ("nail salon", 100), ("spa", 50)),
    *_group(FITNESS, ("gym", 100), ("yoga", 50)),
    *_group(SERVICES, ("laundromat", 50), ("auto repair", 50)),
    *_group(HEALTHCARE, ("pharmacy", 50), ("veterinarian", 30)),
    *_group(HOTELS, ("hotels", 100)),
)

BARS_AND_NIGHTLIFE = tuple(
    SearchSpec(q, limit=50, categories="bars,nightlife", category=BARS)
    for q in (
        "dive bar", "cocktail bar", "wine bar", "sports bar", "rooftop bar",
        "speakeasy", "whiskey bar", "tiki bar", "beer bar", "gastropub",
        "karaoke bar", "lounge", "nightclub", "live music", "jazz club",
        "comedy club", "brewery", "taproom", "beer garden", "gay bar",
        "happy hour", "late night bar",
    )
)

# Neighborhood-targeted searches pin the neighborhood they target; the
# resolver's answer still wins unless it only reached the default.
NEIGHBORHOOD_TARGETS = (
    ("mission district", "The Mission"),
    ("castro", "Castro"),
    ("bernal heights", "Bernal Heights"),
    ("soma", "SoMa"),
    ("financial district", "Financial District"),
    ("north beach", "North Beach"),
    ("chinatown", "Chinatown"),
    ("marina", "Marina District"),
    ("pacific heights", "Pacific Heights"),
    ("hayes valley", "Hayes Valley"),
    ("haight ashbury", "Haight-Ashbury"),
    ("inner richmond", "Richmond District"),
    ("inner sunset", "Sunset District"),
    ("noe valley", "Noe Valley"),
    ("potrero hill", "Potrero Hill"),
    ("dogpatch", "Dogpatch"),
)

NEIGHBORHOOD_KINDS = (
    ("restaurant", RESTAURANTS),
    ("bar", BARS),
    ("coffee", CAFES),
)

NEIGHBORHOODS = tuple(
    SearchSpec(f"{term} {kind}", limit=50, neighborhood=hood, category=category)
    for term, hood in NEIGHBORHOOD_TARGETS
    for kind, category in NEIGHBORHOOD_KINDS
)

PRESETS: dict[str, tuple[SearchSpec, ...]] = {
    "comprehensive": COMPREHENSIVE,
    "bars": BARS_AND_NIGHTLIFE,
    "neighborhoods": NEIGHBORHOODS,
}


def get_preset(name: str) -> tuple[SearchSpec, ...]:
    try:
        return PRESETS[name]
    except KeyError:
        raise ValueError(f"Unknown search preset {name!r}; choose from {', '.join(sorted(PRESETS))}") from None
