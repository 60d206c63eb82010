"""Tests for batch mapping statistics."""

from mylocalguide.engine.mapping_report import MAX_SAMPLES, MappingReport
from mylocalguide.models.neighborhood import Confidence, ResolutionMethod, ResolutionResult

MISSION_STREET = ResolutionResult("The Mission", Confidence.HIGH, ResolutionMethod.STREET)
SOMA_DEFAULT = ResolutionResult("SoMa", Confidence.LOW, ResolutionMethod.DEFAULT)


class TestMappingReport:
    def test_counts(self):
        report = MappingReport()
        report.record("Tartine", "600 Guerrero St", MISSION_STREET)
        report.record("Zuni", "1658 Market St", SOMA_DEFAULT, previously_mapped=True)

        data = report.as_dict()
        assert data["processed"] == 2
        assert data["newly_mapped"] == 1
        assert data["remapped"] == 1
        assert data["skipped"] == 0
        assert data["confidence_distribution"] == {"high": 1, "medium": 0, "low": 1}
        assert data["method_distribution"] == {"street": 1, "default": 1}
        assert data["neighborhood_distribution"] == {"The Mission": 1, "SoMa": 1}
        assert data["low_confidence_share"] == 0.5

    def test_unpersisted_counts_as_skipped(self):
        report = MappingReport()
        report.record("Ghost", "", SOMA_DEFAULT, persisted=False)

        assert report.processed == 1
        assert report.skipped == 1
        assert report.newly_mapped == 0
        assert not report.by_neighborhood
        assert report.low_confidence_share == 0.0

    def test_samples_capped(self):
        report = MappingReport()
        for i in range(MAX_SAMPLES + 5):
            report.record(f"Venue {i}", "3599 24th St", MISSION_STREET)

        samples = report.as_dict()["sample_mappings"]
        assert len(samples) == MAX_SAMPLES
        assert samples[0] == {
            "venue": "Venue 0",
            "address": "3599 24th St",
            "neighborhood": "The Mission",
            "confidence": "high",
            "method": "street",
        }
