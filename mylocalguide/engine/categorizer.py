"""Table-driven venue category classifier.

Shared by every ingestion entry point. Two ordered rule tables:
  TAG_RULES      run against source category titles (Yelp) or place types (Google)
  KEYWORD_RULES  run against the venue name + address when tags are inconclusive
First matching rule wins. Keyword rules avoid street-name words ("market",
"mission") since the address is part of the text. Patterns are word-bounded
so "bar" does not match "barbeque" or "barber".
"""

import re
from dataclasses import dataclass
from typing import Iterable

RESTAURANTS = "Restaurants"
CAFES = "Cafes & Coffee"
BARS = "Bars & Nightlife"
SHOPPING = "Shopping"
HOTELS = "Hotels"
FITNESS = "Health & Fitness"
BEAUTY = "Beauty & Wellness"
HEALTHCARE = "Healthcare"
SERVICES = "Services"
ARTS = "Arts & Entertainment"
EDUCATION = "Education"
OTHER = "Other"

CATEGORIES = (
    RESTAURANTS, CAFES, BARS, SHOPPING, HOTELS, FITNESS,
    BEAUTY, HEALTHCARE, SERVICES, ARTS, EDUCATION, OTHER,
)


@dataclass(frozen=True)
class CategoryRule:
    pattern: re.Pattern
    category: str

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


def _rule(words: Iterable[str], category: str) -> CategoryRule:
    alternation = "|".join(re.escape(w) for w in words)
    return CategoryRule(re.compile(rf"\b(?:{alternation})s?\b", re.IGNORECASE), category)


TAG_RULES: tuple[CategoryRule, ...] = (
    _rule(["coffee", "cafe", "café", "tea", "bakery", "bakeries", "juice bar", "bubble tea", "donut",
           "ice cream", "frozen yogurt", "patisserie"], CAFES),
    _rule(["restaurant", "food", "meal takeaway", "meal delivery", "pizza", "burger", "sushi bar",
           "breakfast", "brunch", "tapas bar"], RESTAURANTS),
    _rule(["bar", "pub", "nightlife", "night club", "cocktail", "lounge", "brewery", "breweries", "wine bar"], BARS),
    # Yelp titles most restaurants by cuisine alone. Checked after bars so a
    # "Sports Bars, American" listing stays a bar.
    _rule(["american", "italian", "mexican", "taco", "tex-mex", "chinese", "dim sum", "cantonese",
           "szechuan", "japanese", "ramen", "korean", "thai", "vietnamese", "indian", "himalayan/nepalese",
           "french", "mediterranean", "greek", "middle eastern", "ethiopian", "spanish", "tapas",
           "peruvian", "salvadoran", "filipino", "burmese", "asian fusion", "hawaiian",
           "poke", "seafood", "steakhouse", "barbeque", "bbq", "sandwiches", "deli", "diner", "noodle",
           "salad", "soup", "vegan", "vegetarian", "gastropub", "southern", "cajun/creole", "halal"],
          RESTAURANTS),
    _rule(["hotel", "lodging", "motel", "hostel", "bed & breakfast"], HOTELS),
    _rule(["gym", "fitness", "yoga", "pilates", "martial arts"], FITNESS),
    _rule(["hair salon", "beauty salon", "nail salon", "spa", "massage", "barber", "skin care",
           "hair care"], BEAUTY),
    _rule(["doctor", "dentist", "hospital", "pharmacy", "pharmacies", "urgent care", "veterinarian", "health"], HEALTHCARE),
    _rule(["shop", "shopping", "store", "retail", "boutique", "market", "clothing"], SHOPPING),
    _rule(["museum", "art gallery", "galleries", "arts", "entertainment", "theater", "movie theater",
           "music venue", "comedy club", "amusement park", "tourist attraction"], ARTS),
    _rule(["school", "education", "university", "college", "tutoring", "library"], EDUCATION),
    _rule(["service", "laundry", "dry cleaning", "auto repair", "car repair", "bank", "real estate", "plumbing",
           "electrician", "contractor", "insurance"], SERVICES),
)

KEYWORD_RULES: tuple[CategoryRule, ...] = (
    _rule(["restaurant", "cuisine", "dining", "bistro", "grill", "eatery", "kitchen", "taco", "taqueria",
           "pizza", "burger", "sushi", "ramen", "pho", "deli", "sandwich", "noodle", "bbq", "steakhouse",
           "seafood", "brasserie", "trattoria"], RESTAURANTS),
    _rule(["coffee", "cafe", "café", "tea", "bakery", "pastry", "donut", "bagel", "breakfast", "brunch"], CAFES),
    _rule(["bar", "pub", "cocktail", "lounge", "club", "brewery", "taproom", "tavern", "saloon",
           "speakeasy"], BARS),
    _rule(["hotel", "motel", "inn", "lodge", "hostel", "bed and breakfast", "resort"], HOTELS),
    _rule(["gym", "fitness", "yoga", "pilates", "crossfit", "martial arts", "dance studio"], FITNESS),
    _rule(["salon", "spa", "beauty", "barber", "massage", "nail", "skincare", "facial"], BEAUTY),
    _rule(["medical", "clinic", "hospital", "dental", "dentist", "doctor", "urgent care", "pharmacy",
           "optometry", "chiropractic", "physical therapy", "veterinary"], HEALTHCARE),
    _rule(["shop", "store", "retail", "boutique", "apparel", "clothing", "fashion", "shoes", "jewelry",
           "electronics", "hardware", "furniture", "decor", "books", "records", "vintage",
           "thrift"], SHOPPING),
    _rule(["theater", "theatre", "museum", "gallery", "cinema", "comedy", "music", "performance"], ARTS),
    _rule(["school", "university", "college", "academy", "institute", "tutoring", "library"], EDUCATION),
    _rule(["repair", "auto", "mechanic", "laundry", "laundromat", "dry cleaning", "tailor", "alterations",
           "plumber", "electrician", "contractor", "handyman", "lawyer", "accountant", "insurance",
           "real estate", "bank", "notary", "consulting", "agency", "catering"], SERVICES),
)


def _first_match(text: str, rules: tuple[CategoryRule, ...]) -> str | None:
    for rule in rules:
        if rule.matches(text):
            return rule.category
    return None


def classify_tags(tags: Iterable[str], rules: tuple[CategoryRule, ...] = TAG_RULES) -> str | None:
    text = " | ".join(t.replace("_", " ").lower() for t in tags if t)
    if not text:
        return None
    return _first_match(text, rules)


def classify_text(name: str, address: str = "", rules: tuple[CategoryRule, ...] = KEYWORD_RULES) -> str | None:
    text = f"{name or ''} {address or ''}".strip()
    if not text:
        return None
    return _first_match(text, rules)


def classify_venue(tags: Iterable[str] = (), name: str = "", address: str = "") -> str:
    """Category for a venue: tags first, then name/address keywords, else Other."""
    return classify_tags(tags) or classify_text(name, address) or OTHER
