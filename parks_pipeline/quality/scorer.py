"""
Completeness scoring for park records.

Every park gets a score from 0 to 100 built from independent, additive
criteria. Each awarded criterion is recorded in the breakdown so a stored
score can always be explained.
"""

from dataclasses import dataclass, fields

from parks_pipeline.config import OFFICIAL_SOURCE_PRIORITY
from parks_pipeline.models import ParkRecord, QualityScore
from parks_pipeline.utils.geo import has_boundary_geometry, parse_coordinates
from parks_pipeline.utils.numbers import as_number
from parks_pipeline.utils.text import is_blank, is_valid_url

MAX_SCORE = 100


@dataclass(frozen=True)
class ScoringWeights:
    """Points awarded per criterion. Field names are the breakdown keys."""
    name: int = 15
    description: int = 10
    coordinates: int = 25          # critical for the map
    website: int = 10
    contact: int = 10
    amenities: int = 10
    activities: int = 5
    boundaries: int = 10
    official_source: int = 5

    def __post_init__(self):
        for f in fields(self):
            if getattr(self, f.name) < 0:
                raise ValueError(f"Weight for {f.name!r} cannot be negative")
        if self.total > MAX_SCORE:
            raise ValueError(f"Scoring weights total {self.total}, maximum is {MAX_SCORE}")

    @property
    def total(self) -> int:
        return sum(getattr(self, f.name) for f in fields(self))


DEFAULT_WEIGHTS = ScoringWeights()


class QualityScorer:
    """
    Scores a candidate record's completeness.

    The record's ``data_source_priority`` must already be resolved; it
    drives the official-source bonus.
    """

    def __init__(
        self,
        weights: ScoringWeights = DEFAULT_WEIGHTS,
        official_source_threshold: int = OFFICIAL_SOURCE_PRIORITY,
        description_min_length: int = 20,
    ):
        self.weights = weights
        self.official_source_threshold = official_source_threshold
        self.description_min_length = description_min_length

    def criteria(self, record: ParkRecord) -> dict[str, bool]:
        """Evaluate each criterion once, in breakdown order."""
        lat, lon = parse_coordinates(record.latitude, record.longitude)
        description = record.description if isinstance(record.description, str) else ""
        priority = as_number(record.data_source_priority)

        return {
            "name": isinstance(record.name, str) and not is_blank(record.name),
            "description": len(description.strip()) > self.description_min_length,
            "coordinates": lat is not None,
            "website": is_valid_url(record.website),
            "contact": not is_blank(record.phone) or not is_blank(record.email),
            "amenities": isinstance(record.amenities, (list, tuple)) and len(record.amenities) > 0,
            "activities": isinstance(record.activities, (list, tuple)) and len(record.activities) > 0,
            "boundaries": has_boundary_geometry(record.boundaries),
            "official_source": priority >= self.official_source_threshold,
        }

    def score(self, record: ParkRecord) -> QualityScore:
        """
        Calculate the quality score for a record.

        Args:
            record: Candidate with its source priority already stamped

        Returns:
            QualityScore whose ``score`` equals the sum of ``breakdown``
        """
        breakdown = {}
        for criterion, met in self.criteria(record).items():
            points = getattr(self.weights, criterion)
            if met and points:
                breakdown[criterion] = points

        return QualityScore(score=sum(breakdown.values()), breakdown=breakdown)
