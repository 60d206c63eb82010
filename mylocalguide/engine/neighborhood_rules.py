"""Rule-based neighborhood resolution.

Evaluation order (first match wins):
  1. Empty address      -> default (low)
  2. Zip code           -> high, or medium for an unresolved shared zip
  3. Street + number    -> high
  4. Landmark / keyword -> medium
  5. Secondary keyword  -> medium
  6. Default            -> low

Everything here is pure: no I/O, no clock, no shared mutable state.
The async resolver in `mylocalguide.data.resolver` adds an external
locator stage between 5 and 6.
"""

import re
from functools import lru_cache

from mylocalguide.config import settings
from mylocalguide.engine.reference_tables import FALLBACK_NEIGHBORHOOD, SF_RULES, RuleSet
from mylocalguide.models.neighborhood import (
    Confidence,
    ResolutionMethod,
    ResolutionResult,
    StreetRule,
)

ZIP_PATTERN = re.compile(r"\b(\d{5})\b")


@lru_cache(maxsize=None)
def _street_pattern(street_name: str) -> re.Pattern:
    words = r"\s+".join(re.escape(w) for w in street_name.split())
    return re.compile(rf"\b(\d+)\s+{words}", re.IGNORECASE)


def street_number(rule: StreetRule, address: str) -> int | None:
    """Number written directly before the rule's street name, if present."""
    match = _street_pattern(rule.street_name).search(address)
    if match is None:
        return None
    return int(match.group(1))


def extract_zip(address: str, rules: RuleSet = SF_RULES) -> str | None:
    """First 5-digit token that is a known zip code."""
    for token in ZIP_PATTERN.findall(address):
        if token in rules.zip_rules:
            return token
    return None


def _landmark_hit(
    name: str,
    address: str,
    rules: RuleSet,
    allowed: tuple[str, ...] | None = None,
) -> str | None:
    address_upper = address.upper()
    name_upper = name.upper()
    for rule in rules.landmark_rules:
        if allowed is not None and rule.neighborhood not in allowed:
            continue
        keyword = rule.keyword.upper()
        if keyword in address_upper or keyword in name_upper:
            return rule.neighborhood
    return None


def _street_hit(
    address: str,
    rules: RuleSet,
    allowed: tuple[str, ...] | None = None,
) -> str | None:
    for rule in rules.street_rules:
        if allowed is not None and rule.neighborhood not in allowed:
            continue
        number = street_number(rule, address)
        if number is not None and rule.covers(number):
            return rule.neighborhood
    return None


def match_zip(name: str, address: str, rules: RuleSet = SF_RULES) -> ResolutionResult | None:
    zip_code = extract_zip(address, rules)
    if zip_code is None:
        return None

    candidates = rules.zip_rules[zip_code].candidates
    if len(candidates) == 1:
        return ResolutionResult(candidates[0], Confidence.HIGH, ResolutionMethod.ZIP)

    # Shared zip: break the tie with landmarks, then street ranges
    hood = _landmark_hit(name, address, rules, allowed=candidates)
    if hood:
        return ResolutionResult(hood, Confidence.HIGH, ResolutionMethod.LANDMARK)

    hood = _street_hit(address, rules, allowed=candidates)
    if hood:
        return ResolutionResult(hood, Confidence.HIGH, ResolutionMethod.STREET)

    return ResolutionResult(candidates[0], Confidence.MEDIUM, ResolutionMethod.ZIP)


def match_street(name: str, address: str, rules: RuleSet = SF_RULES) -> ResolutionResult | None:
    hood = _street_hit(address, rules)
    if hood is None:
        return None
    return ResolutionResult(hood, Confidence.HIGH, ResolutionMethod.STREET)


def match_landmark(name: str, address: str, rules: RuleSet = SF_RULES) -> ResolutionResult | None:
    hood = _landmark_hit(name, address, rules)
    if hood is None:
        return None
    return ResolutionResult(hood, Confidence.MEDIUM, ResolutionMethod.LANDMARK)


def match_keyword_hint(name: str, address: str, rules: RuleSet = SF_RULES) -> ResolutionResult | None:
    address_lower = address.lower()
    for keyword, hood in rules.keyword_hints:
        if keyword in address_lower:
            return ResolutionResult(hood, Confidence.MEDIUM, ResolutionMethod.KEYWORD_HINT)
    return None


EVALUATORS = (match_zip, match_street, match_landmark, match_keyword_hint)


def match_rules(name: str | None, address: str | None, rules: RuleSet = SF_RULES) -> ResolutionResult | None:
    """Run the rule evaluators in priority order. None if nothing matched."""
    name = name or ""
    if not address or not address.strip():
        return None
    for evaluator in EVALUATORS:
        result = evaluator(name, address, rules)
        if result is not None:
            return result
    return None


def default_result(default: str | None = None) -> ResolutionResult:
    hood = default or settings.default_neighborhood or FALLBACK_NEIGHBORHOOD
    return ResolutionResult(hood, Confidence.LOW, ResolutionMethod.DEFAULT)


def resolve(
    name: str | None,
    address: str | None,
    rules: RuleSet = SF_RULES,
    default: str | None = None,
) -> ResolutionResult:
    """Resolve a venue to a neighborhood. Never raises, never returns empty."""
    return match_rules(name, address, rules) or default_result(default)


def canonicalize(name: str | None, rules: RuleSet = SF_RULES) -> str | None:
    """Map a free-form neighborhood name onto a known one, or None."""
    if not name:
        return None
    return rules.canonical_name(name) or _landmark_hit("", name, rules)
