"""
Data quality reporting over stored parks.

Identifies low-quality records and entries that are probably not parks at
all (offices, maintenance yards) so they can be reviewed.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from parks_pipeline.models import ParkRecord
from parks_pipeline.normalizers import normalize_state_to_code
from parks_pipeline.quality import QualityScorer
from parks_pipeline.utils.geo import has_boundary_geometry, parse_coordinates
from parks_pipeline.utils.numbers import as_number
from parks_pipeline.utils.text import is_blank

# Keywords indicating an entry is an office or facility rather than a park
NON_PARK_KEYWORDS = [
    "office", "offices", "headquarters", "hq", "admin", "administration",
    "facility", "facilities", "service center",
    "city hall", "county office", "county building", "municipal building",
    "government center", "courthouse", "courthouse annex",
    "maintenance", "maintenance facility", "equipment yard",
    "warehouse", "storage", "depot",
]

NON_PARK_PATTERNS = [
    re.compile(r"county\s+office", re.IGNORECASE),
    re.compile(r"city\s+hall", re.IGNORECASE),
    re.compile(r"municipal\s+building", re.IGNORECASE),
    re.compile(r"government\s+center", re.IGNORECASE),
    re.compile(r"service\s+center", re.IGNORECASE),
    re.compile(r"\badmin\b", re.IGNORECASE),
    re.compile(r"\bfacility\b", re.IGNORECASE),
]

MIN_PARK_ACRES = 0.1

# (bucket, lowest score in bucket), highest first
QUALITY_BUCKETS = [("excellent", 80), ("good", 60), ("fair", 40), ("poor", 0)]

COVERAGE_FIELDS = ["coordinates", "description", "website", "phone", "address", "geometry"]


@dataclass
class NonParkCheck:
    is_non_park: bool
    reason: str | None = None
    confidence: str | None = None


@dataclass
class RecordIssues:
    id: str | None
    name: str | None
    state: str | None
    agency: str | None
    score: int
    issues: list[str]


@dataclass
class QualityReport:
    total: int = 0
    coverage: dict[str, int] = field(default_factory=lambda: {f: 0 for f in COVERAGE_FIELDS})
    average_score: float = 0.0
    distribution: dict[str, int] = field(default_factory=lambda: {b: 0 for b, _ in QUALITY_BUCKETS})
    likely_non_parks: list[dict[str, Any]] = field(default_factory=list)
    issues: list[RecordIssues] = field(default_factory=list)

    @property
    def percentages(self) -> dict[str, int]:
        if not self.total:
            return {f: 0 for f in self.coverage}
        return {f: round(count / self.total * 100) for f, count in self.coverage.items()}


def _acres(record: ParkRecord) -> float | None:
    return as_number(record.extra.get("acres"), default=None)


def likely_non_park(record: ParkRecord) -> NonParkCheck:
    """Check whether a record's name or size suggests it is not a park."""
    if not isinstance(record.name, str) or not record.name:
        return NonParkCheck(is_non_park=False)

    name_lower = record.name.lower()
    for keyword in NON_PARK_KEYWORDS:
        if re.search(rf"\b{re.escape(keyword)}\b", name_lower):
            return NonParkCheck(True, f'Name contains "{keyword}"', "high")

    acres = _acres(record)
    if acres is not None and 0 < acres < MIN_PARK_ACRES:
        return NonParkCheck(True, f"Very small size ({acres} acres) - likely office/facility", "medium")

    for pattern in NON_PARK_PATTERNS:
        if pattern.search(record.name):
            return NonParkCheck(True, "Name matches non-park pattern", "high")

    return NonParkCheck(is_non_park=False)


def _present_fields(record: ParkRecord) -> dict[str, bool]:
    lat, _ = parse_coordinates(record.latitude, record.longitude)
    return {
        "coordinates": lat is not None,
        "description": not is_blank(record.description),
        "website": not is_blank(record.website),
        "phone": not is_blank(record.phone),
        "address": not is_blank(record.extra.get("address")),
        "geometry": has_boundary_geometry(record.boundaries),
    }


def quality_bucket(score: int) -> str:
    for bucket, floor in QUALITY_BUCKETS:
        if score >= floor:
            return bucket
    return QUALITY_BUCKETS[-1][0]


def analyze_quality(
    records: Iterable[ParkRecord],
    scorer: QualityScorer | None = None,
    low_quality_threshold: int = 40,
) -> QualityReport:
    """
    Analyze a collection of parks for data quality problems.

    Scores are recomputed from each record's fields with ``scorer`` so the
    report reflects current content, not whatever score was stored.

    Args:
        records: Parks to analyze
        scorer: Scorer to use (default weights if omitted)
        low_quality_threshold: Scores below this are flagged as an issue

    Returns:
        QualityReport with coverage, score distribution and per-record issues
    """
    scorer = scorer or QualityScorer()
    report = QualityReport()
    total_score = 0

    for record in records:
        report.total += 1
        present = _present_fields(record)
        for name, is_present in present.items():
            if is_present:
                report.coverage[name] += 1

        score = scorer.score(record).score
        total_score += score
        report.distribution[quality_bucket(score)] += 1

        check = likely_non_park(record)
        if check.is_non_park:
            report.likely_non_parks.append({
                "id": record.id,
                "name": record.name,
                "state": record.state,
                "reason": check.reason,
                "confidence": check.confidence,
            })

        issues = []
        if not present["coordinates"]:
            issues.append("Missing coordinates")
        if not present["description"]:
            issues.append("Missing description")
        if not present["geometry"]:
            issues.append("Missing boundary geometry")
        acres = _acres(record)
        if acres is not None and 0 < acres < MIN_PARK_ACRES:
            issues.append("Very small size (< 0.1 acres)")
        if score < low_quality_threshold:
            issues.append("Low quality score")

        if issues:
            report.issues.append(RecordIssues(
                id=record.id,
                name=record.name,
                state=record.state,
                agency=record.agency,
                score=score,
                issues=issues,
            ))

    if report.total:
        report.average_score = round(total_score / report.total, 2)

    return report


@dataclass
class CleanupCriteria:
    """
    Filters for picking cleanup candidates out of the store.

    Every filter that is set must pass. ``missing_fields`` names fields from
    ``COVERAGE_FIELDS`` that must all be absent. The acreage bounds only
    apply to records that carry a positive ``acres`` value.
    """
    name_keywords: list[str] = field(default_factory=list)
    state: str | None = None
    agency: str | None = None
    min_acres: float | None = None
    max_acres: float | None = None
    max_quality_score: int | None = None
    missing_fields: list[str] = field(default_factory=list)

    def __post_init__(self):
        unknown = set(self.missing_fields) - set(COVERAGE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown fields {sorted(unknown)}; expected some of {COVERAGE_FIELDS}")


def filter_for_cleanup(
    records: Iterable[ParkRecord],
    criteria: CleanupCriteria,
    scorer: QualityScorer | None = None,
) -> list[ParkRecord]:
    """
    Select parks matching every filter in ``criteria``.

    Args:
        records: Parks to filter
        criteria: Filters to apply
        scorer: Scorer used for ``max_quality_score`` (default weights if omitted)

    Returns:
        Matching records, in input order
    """
    scorer = scorer or QualityScorer()
    keywords = [k.lower() for k in criteria.name_keywords if k]
    wanted_state = normalize_state_to_code(criteria.state) if criteria.state else None

    matches = []
    for record in records:
        if keywords:
            name = record.name.lower() if isinstance(record.name, str) else ""
            if not any(keyword in name for keyword in keywords):
                continue

        if wanted_state and normalize_state_to_code(record.state) != wanted_state:
            continue

        if criteria.agency and record.agency != criteria.agency:
            continue

        acres = _acres(record)
        if acres:
            if criteria.max_acres is not None and acres > criteria.max_acres:
                continue
            if criteria.min_acres is not None and acres < criteria.min_acres:
                continue

        if criteria.max_quality_score is not None and scorer.score(record).score > criteria.max_quality_score:
            continue

        if criteria.missing_fields:
            present = _present_fields(record)
            if any(present[name] for name in criteria.missing_fields):
                continue

        matches.append(record)

    return matches
