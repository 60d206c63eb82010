"""San Francisco reference tables for neighborhood resolution.

Tables are immutable and built once at import. `build_rule_set` validates
them: every neighborhood a rule points at must be a known neighborhood, and
street-number ranges must not overlap within a street name.
"""

from dataclasses import dataclass

from mylocalguide.models.neighborhood import LandmarkRule, Neighborhood, StreetRule, ZipRule

FALLBACK_NEIGHBORHOOD = "SoMa"

NEIGHBORHOODS: tuple[Neighborhood, ...] = (
    Neighborhood("The Mission", "mission", "Vibrant Latino culture and dining"),
    Neighborhood("Castro", "castro", "Historic LGBTQ+ neighborhood"),
    Neighborhood("Marina District", "marina", "Upscale waterfront area"),
    Neighborhood("North Beach", "north-beach", "Italian heritage district"),
    Neighborhood("Chinatown", "chinatown", "Authentic Chinese culture"),
    Neighborhood("SoMa", "soma", "South of Market tech hub"),
    Neighborhood("Financial District", "financial", "Business district"),
    Neighborhood("Haight-Ashbury", "haight", "Bohemian culture"),
    Neighborhood("Hayes Valley", "hayes-valley", "Hip shopping district"),
    Neighborhood("Richmond District", "richmond", "Diverse residential area"),
    Neighborhood("Nob Hill", "nob-hill", "Elegant hilltop neighborhood"),
    Neighborhood("Pacific Heights", "pacific-heights", "Upscale residential"),
    Neighborhood("Tenderloin", "tenderloin", "Diverse downtown area"),
    Neighborhood("Union Square", "union-square", "Shopping and theater district"),
    Neighborhood("Presidio", "presidio", "Former military base park"),
    Neighborhood("West Portal", "west-portal", "Quiet residential area"),
    Neighborhood("Sunset District", "sunset", "Residential fog belt"),
    Neighborhood("Potrero Hill", "potrero-hill", "Sunny residential hill"),
    Neighborhood("Civic Center", "civic-center", "Government and performing arts hub"),
    Neighborhood("Mission Bay", "mission-bay", "Waterfront biotech and ballpark district"),
    Neighborhood("Rincon Hill", "rincon-hill", "High-rise living by the Bay Bridge"),
    Neighborhood("Russian Hill", "russian-hill", "Steep streets and bay views"),
    Neighborhood("Bernal Heights", "bernal-heights", "Village feel around Cortland Ave"),
    Neighborhood("Excelsior", "excelsior", "Family neighborhood in the southern hills"),
    Neighborhood("Outer Mission", "outer-mission", "Residential south of the Mission"),
    Neighborhood("Noe Valley", "noe-valley", "Stroller-friendly village on 24th St"),
    Neighborhood("Fillmore", "fillmore", "Jazz history and Japantown's neighbor"),
    Neighborhood("Cole Valley", "cole-valley", "Quiet pocket below Mount Sutro"),
    Neighborhood("Laurel Heights", "laurel-heights", "Residential streets near Laurel Village"),
    Neighborhood("Cow Hollow", "cow-hollow", "Boutiques and bars along Union St"),
    Neighborhood("Bayview", "bayview", "Southeast industrial and residential area"),
    Neighborhood("Hunters Point", "hunters-point", "Former shipyard on the southeast shore"),
    Neighborhood("Forest Hill", "forest-hill", "Leafy hillside homes"),
    Neighborhood("Glen Park", "glen-park", "Canyon park and village center"),
    Neighborhood("Diamond Heights", "diamond-heights", "Hilltop homes with city views"),
    Neighborhood("Lake Merced", "lake-merced", "Lakeside southwest corner"),
    Neighborhood("Telegraph Hill", "telegraph-hill", "Coit Tower and hillside stairways"),
    Neighborhood("Fisherman's Wharf", "fishermans-wharf", "Piers, sea lions and seafood"),
    Neighborhood("Dogpatch", "dogpatch", "Converted warehouses by the bay"),
)

# Candidate order matters: the first candidate is the medium-confidence pick.
ZIP_RULES: tuple[ZipRule, ...] = (
    ZipRule("94102", ("Hayes Valley", "Tenderloin", "Union Square", "Civic Center")),
    ZipRule("94103", ("SoMa", "Mission Bay")),
    ZipRule("94104", ("Financial District",)),
    ZipRule("94105", ("SoMa", "Rincon Hill")),
    ZipRule("94107", ("SoMa", "Potrero Hill", "Dogpatch")),
    ZipRule("94108", ("Chinatown", "Nob Hill")),
    ZipRule("94109", ("Nob Hill", "Russian Hill")),
    ZipRule("94110", ("The Mission", "Bernal Heights")),
    ZipRule("94111", ("Financial District", "North Beach")),
    ZipRule("94112", ("Excelsior", "Outer Mission")),
    ZipRule("94114", ("Castro", "Noe Valley")),
    ZipRule("94115", ("Pacific Heights", "Fillmore")),
    ZipRule("94116", ("Sunset District",)),
    ZipRule("94117", ("Haight-Ashbury", "Cole Valley")),
    ZipRule("94118", ("Richmond District", "Laurel Heights")),
    ZipRule("94121", ("Richmond District",)),
    ZipRule("94122", ("Sunset District",)),
    ZipRule("94123", ("Marina District", "Cow Hollow")),
    ZipRule("94124", ("Bayview", "Hunters Point")),
    ZipRule("94127", ("West Portal", "Forest Hill")),
    ZipRule("94129", ("Presidio",)),
    ZipRule("94131", ("Glen Park", "Diamond Heights")),
    ZipRule("94132", ("Lake Merced",)),
    ZipRule("94133", ("North Beach", "Telegraph Hill")),
    ZipRule("94134", ("Bayview",)),
    ZipRule("94158", ("Mission Bay",)),
)

STREET_RULES: tuple[StreetRule, ...] = (
    # Mission
    StreetRule("Mission St", ((2000, 4000),), "The Mission"),
    StreetRule("Valencia St", ((500, 1500),), "The Mission"),
    StreetRule("16th St", ((2800, 3800),), "The Mission"),
    StreetRule("24th St", ((2800, 3800),), "The Mission"),
    # Castro
    StreetRule("Castro St", ((100, 600),), "Castro"),
    StreetRule("Market St", ((2000, 2500),), "Castro"),
    # Marina
    StreetRule("Chestnut St", ((2000, 3500),), "Marina District"),
    StreetRule("Union St", ((2000, 3500),), "Marina District"),
    StreetRule("Marina Blvd", ((1, 500),), "Marina District"),
    # North Beach
    StreetRule("Columbus Ave", ((200, 1000),), "North Beach"),
    StreetRule("Grant Ave", ((1200, 1800),), "North Beach"),
    # Chinatown
    StreetRule("Grant Ave", ((500, 1199),), "Chinatown"),
    StreetRule("Stockton St", ((600, 1200),), "Chinatown"),
    # Haight
    StreetRule("Haight St", ((1000, 2000),), "Haight-Ashbury"),
    StreetRule("Divisadero St", ((1400, 2000),), "Haight-Ashbury"),
    # Hayes Valley
    StreetRule("Hayes St", ((300, 800),), "Hayes Valley"),
    StreetRule("Octavia St", ((300, 800),), "Hayes Valley"),
    # Richmond
    StreetRule("Clement St", ((200, 4000),), "Richmond District"),
    StreetRule("Geary Blvd", ((200, 4000),), "Richmond District"),
    # SoMa
    StreetRule("Howard St", ((200, 2000),), "SoMa"),
    StreetRule("Folsom St", ((200, 2000),), "SoMa"),
    StreetRule("Bryant St", ((200, 2000),), "SoMa"),
    # Financial District
    StreetRule("Montgomery St", ((1, 800),), "Financial District"),
    StreetRule("California St", ((1, 799),), "Financial District"),
    # Nob Hill
    StreetRule("California St", ((800, 1800),), "Nob Hill"),
    StreetRule("Sacramento St", ((800, 1800),), "Nob Hill"),
    # Pacific Heights
    StreetRule("Fillmore St", ((1800, 2800),), "Pacific Heights"),
    StreetRule("Union St", ((1800, 1999),), "Pacific Heights"),
)

# Registration order is precedence: first hit wins.
LANDMARK_RULES: tuple[LandmarkRule, ...] = (
    # Parks and landmarks
    LandmarkRule("Crissy Field", "Presidio"),
    LandmarkRule("Golden Gate Park", "Haight-Ashbury"),
    LandmarkRule("Dolores Park", "The Mission"),
    LandmarkRule("Washington Square", "North Beach"),
    LandmarkRule("Union Square", "Union Square"),
    LandmarkRule("Ferry Building", "Financial District"),
    LandmarkRule("Pier 39", "Fisherman's Wharf"),
    LandmarkRule("Ghirardelli Square", "Fisherman's Wharf"),
    LandmarkRule("AT&T Park", "SoMa"),
    LandmarkRule("Oracle Park", "SoMa"),
    LandmarkRule("Portsmouth Square", "Chinatown"),
    LandmarkRule("Dragon Gate", "Chinatown"),
    # Neighborhood names and nicknames
    LandmarkRule("Hayes Valley", "Hayes Valley"),
    LandmarkRule("Castro District", "Castro"),
    LandmarkRule("Mission District", "The Mission"),
    LandmarkRule("North Beach", "North Beach"),
    LandmarkRule("Chinatown", "Chinatown"),
    LandmarkRule("Marina District", "Marina District"),
    LandmarkRule("Pacific Heights", "Pacific Heights"),
    LandmarkRule("Nob Hill", "Nob Hill"),
    LandmarkRule("Russian Hill", "Russian Hill"),
    LandmarkRule("Haight", "Haight-Ashbury"),
    LandmarkRule("Haight-Ashbury", "Haight-Ashbury"),
    LandmarkRule("Richmond", "Richmond District"),
    LandmarkRule("Sunset", "Sunset District"),
    LandmarkRule("SoMa", "SoMa"),
    LandmarkRule("South of Market", "SoMa"),
    LandmarkRule("Financial District", "Financial District"),
    LandmarkRule("FiDi", "Financial District"),
    LandmarkRule("Tenderloin", "Tenderloin"),
    LandmarkRule("Presidio", "Presidio"),
)

# Secondary keyword heuristic, matched against the lower-cased address only.
KEYWORD_HINTS: tuple[tuple[str, str], ...] = (
    ("mission", "The Mission"),
    ("valencia", "The Mission"),
    ("castro", "Castro"),
    ("marina", "Marina District"),
    ("chestnut", "Marina District"),
    ("north beach", "North Beach"),
    ("columbus", "North Beach"),
    ("chinatown", "Chinatown"),
    ("grant", "Chinatown"),
    ("haight", "Haight-Ashbury"),
    ("hayes", "Hayes Valley"),
    ("richmond", "Richmond District"),
    ("clement", "Richmond District"),
    ("sunset", "Sunset District"),
    ("presidio", "Presidio"),
    ("crissy", "Presidio"),
)


@dataclass(frozen=True)
class RuleSet:
    neighborhoods: tuple[Neighborhood, ...]
    zip_rules: dict[str, ZipRule]
    street_rules: tuple[StreetRule, ...]
    landmark_rules: tuple[LandmarkRule, ...]
    keyword_hints: tuple[tuple[str, str], ...]

    @property
    def neighborhood_names(self) -> tuple[str, ...]:
        return tuple(n.name for n in self.neighborhoods)

    def canonical_name(self, name: str | None) -> str | None:
        """Return the known neighborhood spelled like `name` (case-insensitive)."""
        if not name:
            return None
        wanted = name.strip().lower()
        for n in self.neighborhoods:
            if n.name.lower() == wanted:
                return n.name
        return None


def _normalize_street(name: str) -> str:
    return " ".join(name.lower().split())


def validate_street_rules(rules: tuple[StreetRule, ...]) -> None:
    """Raise ValueError if any street has inverted or overlapping ranges."""
    by_street: dict[str, list[tuple[int, int, str]]] = {}
    for rule in rules:
        for low, high in rule.ranges:
            if low > high:
                raise ValueError(
                    f"Inverted range {low}-{high} for {rule.street_name} ({rule.neighborhood})"
                )
            by_street.setdefault(_normalize_street(rule.street_name), []).append(
                (low, high, rule.neighborhood)
            )

    for street, spans in by_street.items():
        spans.sort()
        for (low_a, high_a, hood_a), (low_b, high_b, hood_b) in zip(spans, spans[1:]):
            if low_b <= high_a:
                raise ValueError(
                    f"Overlapping ranges on {street}: "
                    f"{low_a}-{high_a} ({hood_a}) and {low_b}-{high_b} ({hood_b})"
                )


def build_rule_set(
    neighborhoods: tuple[Neighborhood, ...] = NEIGHBORHOODS,
    zip_rules: tuple[ZipRule, ...] = ZIP_RULES,
    street_rules: tuple[StreetRule, ...] = STREET_RULES,
    landmark_rules: tuple[LandmarkRule, ...] = LANDMARK_RULES,
    keyword_hints: tuple[tuple[str, str], ...] = KEYWORD_HINTS,
) -> RuleSet:
    known = {n.name for n in neighborhoods}

    referenced: list[str] = []
    for z in zip_rules:
        if not z.candidates:
            raise ValueError(f"Zip {z.zip_code} has no candidate neighborhoods")
        referenced.extend(z.candidates)
    referenced.extend(r.neighborhood for r in street_rules)
    referenced.extend(r.neighborhood for r in landmark_rules)
    referenced.extend(hood for _, hood in keyword_hints)

    unknown = sorted(set(referenced) - known)
    if unknown:
        raise ValueError(f"Rules reference unknown neighborhoods: {', '.join(unknown)}")

    validate_street_rules(street_rules)

    return RuleSet(
        neighborhoods=neighborhoods,
        zip_rules={z.zip_code: z for z in zip_rules},
        street_rules=street_rules,
        landmark_rules=landmark_rules,
        keyword_hints=keyword_hints,
    )


SF_RULES = build_rule_set()
