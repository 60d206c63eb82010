"""Neighborhood resolver: rule cascade plus optional external locators.

Flow: rules (zip → street → landmark → secondary keyword) → locators → default

Locators are tried in order only when every rule misses. Their answers are
canonicalized to a known neighborhood; unknown names are discarded.
"""

import logging

from mylocalguide.config import settings
from mylocalguide.data.base import NeighborhoodLocator
from mylocalguide.data.google_places import GoogleGeocodingLocator
from mylocalguide.engine.neighborhood_rules import canonicalize, default_result, match_rules
from mylocalguide.engine.reference_tables import SF_RULES, RuleSet
from mylocalguide.models.neighborhood import Confidence, ResolutionMethod, ResolutionResult, VenueAddressInput

logger = logging.getLogger(__name__)


class NeighborhoodResolver:
    def __init__(
        self,
        locators: list[NeighborhoodLocator] | None = None,
        rules: RuleSet = SF_RULES,
        default: str | None = None,
    ):
        self.locators = locators or []
        self.rules = rules
        configured = default or settings.default_neighborhood
        self.default = rules.canonical_name(configured)
        if self.default is None:
            raise ValueError(f"Default neighborhood {configured!r} is not a known neighborhood")

    @classmethod
    def from_settings(cls) -> "NeighborhoodResolver":
        locators: list[NeighborhoodLocator] = []
        if settings.google_places_api_key:
            locators.append(GoogleGeocodingLocator())
        return cls(locators=locators)

    async def resolve(self, name: str | None, address: str | None) -> ResolutionResult:
        """Resolve a venue to a neighborhood. Never raises."""
        if not address or not address.strip():
            return default_result(self.default)

        result = match_rules(name, address, self.rules)
        if result is not None:
            return result

        for locator in self.locators:
            try:
                located = await locator.locate_neighborhood(name or "", address)
            except Exception as e:
                logger.warning("Locator %s failed for %r: %s", type(locator).__name__, address, e)
                continue

            hood = canonicalize(located, self.rules)
            if hood:
                return ResolutionResult(hood, Confidence.MEDIUM, ResolutionMethod.GEOCODING)
            if located:
                logger.debug("Locator returned unknown neighborhood %r for %r", located, address)

        return default_result(self.default)

    async def resolve_venue(self, venue: VenueAddressInput) -> ResolutionResult:
        return await self.resolve(venue.name, venue.address)
