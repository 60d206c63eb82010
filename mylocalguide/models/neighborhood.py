"""Neighborhood resolution data types."""

from dataclasses import dataclass
from enum import Enum


class Confidence(Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ResolutionMethod(Enum):
    ZIP = "zip"
    STREET = "street"
    LANDMARK = "landmark"
    # Secondary keyword heuristic. Wire label stays "llm" for existing consumers.
    KEYWORD_HINT = "llm"
    GEOCODING = "geocoding"
    DEFAULT = "default"


@dataclass(frozen=True)
class Neighborhood:
    name: str
    slug: str
    description: str = ""


@dataclass(frozen=True)
class ZipRule:
    zip_code: str
    candidates: tuple[str, ...]


@dataclass(frozen=True)
class StreetRule:
    street_name: str
    ranges: tuple[tuple[int, int], ...]  # inclusive (min, max)
    neighborhood: str

    def covers(self, number: int) -> bool:
        return any(low <= number <= high for low, high in self.ranges)


@dataclass(frozen=True)
class LandmarkRule:
    keyword: str
    neighborhood: str


@dataclass(frozen=True)
class VenueAddressInput:
    name: str
    address: str


@dataclass(frozen=True)
class ResolutionResult:
    neighborhood: str
    confidence: Confidence
    method: ResolutionMethod

    def as_dict(self) -> dict[str, str]:
        return {
            "neighborhood": self.neighborhood,
            "confidence": self.confidence.value,
            "method": self.method.value,
        }
