"""Tests for reference table validation."""

import pytest

from mylocalguide.engine.reference_tables import (
    NEIGHBORHOODS,
    SF_RULES,
    STREET_RULES,
    ZIP_RULES,
    build_rule_set,
    validate_street_rules,
)
from mylocalguide.models.neighborhood import LandmarkRule, Neighborhood, StreetRule, ZipRule


class TestShippedTables:
    def test_rule_set_builds(self):
        assert len(SF_RULES.neighborhoods) == len(NEIGHBORHOODS)
        assert set(SF_RULES.zip_rules) == {z.zip_code for z in ZIP_RULES}

    def test_slugs_unique(self):
        slugs = [n.slug for n in NEIGHBORHOODS]
        assert len(slugs) == len(set(slugs))

    def test_names_unique(self):
        names = SF_RULES.neighborhood_names
        assert len(names) == len(set(names))

    def test_street_ranges_disjoint(self):
        validate_street_rules(STREET_RULES)

    def test_default_is_a_known_neighborhood(self):
        assert SF_RULES.canonical_name("SoMa") == "SoMa"


class TestValidation:
    hoods = (Neighborhood("Alpha", "alpha"), Neighborhood("Beta", "beta"))

    def test_overlapping_ranges_rejected(self):
        rules = (
            StreetRule("Main St", ((1, 100),), "Alpha"),
            StreetRule("Main St", ((100, 200),), "Beta"),
        )
        with pytest.raises(ValueError, match="Overlapping"):
            build_rule_set(self.hoods, (), rules, (), ())

    def test_overlap_detected_across_spelling(self):
        rules = (
            StreetRule("Main St", ((1, 100),), "Alpha"),
            StreetRule("main  st", ((50, 60),), "Beta"),
        )
        with pytest.raises(ValueError):
            validate_street_rules(rules)

    def test_adjacent_ranges_allowed(self):
        rules = (
            StreetRule("Main St", ((1, 99),), "Alpha"),
            StreetRule("Main St", ((100, 200),), "Beta"),
        )
        rule_set = build_rule_set(self.hoods, (), rules, (), ())
        assert len(rule_set.street_rules) == 2

    def test_inverted_range_rejected(self):
        with pytest.raises(ValueError, match="Inverted"):
            validate_street_rules((StreetRule("Main St", ((200, 100),), "Alpha"),))

    def test_unknown_neighborhood_rejected(self):
        with pytest.raises(ValueError, match="Gamma"):
            build_rule_set(self.hoods, (), (), (LandmarkRule("Gamma Park", "Gamma"),), ())

    def test_unknown_zip_candidate_rejected(self):
        with pytest.raises(ValueError):
            build_rule_set(self.hoods, (ZipRule("00001", ("Alpha", "Delta")),), (), (), ())

    def test_empty_zip_candidates_rejected(self):
        with pytest.raises(ValueError):
            build_rule_set(self.hoods, (ZipRule("00001", ()),), (), (), ())

    def test_unknown_keyword_hint_rejected(self):
        with pytest.raises(ValueError):
            build_rule_set(self.hoods, (), (), (), (("gamma", "Gamma"),))
