"""
Record and result types shared by the quality engine.

``ParkRecord`` is the common format every ingestion source is converted to
before it reaches the engine. Result types are plain dataclasses so callers
can log, serialize or compare them without touching engine internals.
"""

from dataclasses import asdict, dataclass, field, fields
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping

from parks_pipeline.normalizers import normalize_list

# Upstream column names that map onto ParkRecord fields
FIELD_ALIASES = {
    "website_url": "website",
    "url": "website",
    "boundary": "boundaries",
    "geometry": "boundaries",
    "lat": "latitude",
    "lng": "longitude",
    "lon": "longitude",
}


@dataclass
class ParkRecord:
    """
    A park record, either a candidate from an ingestion source or the
    record currently held in storage.

    Coordinates are kept as supplied (numbers or numeric strings); the
    scorer and validator parse them. ``data_source_priority`` and
    ``data_quality_score`` are stamped by the engine.
    """
    name: str | None = None
    state: str | None = None
    agency: str | None = None

    id: str | None = None
    description: str | None = None
    latitude: Any = None
    longitude: Any = None
    website: str | None = None
    phone: str | None = None
    email: str | None = None
    amenities: list[str] = field(default_factory=list)
    activities: list[str] = field(default_factory=list)
    boundaries: Any = None

    data_source_priority: int | None = None
    data_quality_score: int | None = None

    # Columns the engine does not score (address, acres, county, ...)
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ParkRecord":
        """
        Build a record from a structured map.

        Resolves upstream aliases, normalizes comma-separated amenity and
        activity strings into lists, and keeps unknown keys in ``extra``.
        Never raises for a mapping input.
        """
        known = {f.name for f in fields(cls)} - {"extra"}
        values: dict[str, Any] = {}
        raw_extra = data.get("extra")
        extra: dict[str, Any] = dict(raw_extra) if isinstance(raw_extra, Mapping) else {}

        for key, value in data.items():
            if key == "extra":
                continue
            target = FIELD_ALIASES.get(key, key)
            if target in known:
                # Canonical names win over aliases
                if target in values and key != target:
                    continue
                values[target] = value
            else:
                extra[key] = value

        for list_field in ("amenities", "activities"):
            values[list_field] = normalize_list(values.get(list_field))

        return cls(**values, extra=extra)

    @classmethod
    def coerce(cls, record: "ParkRecord | Mapping[str, Any] | None") -> "ParkRecord | None":
        """Accept either a ParkRecord or a mapping."""
        if record is None or isinstance(record, ParkRecord):
            return record
        if isinstance(record, Mapping):
            return cls.from_dict(record)
        return None

    def to_dict(self) -> dict[str, Any]:
        """Flatten into a structured map, extra columns included."""
        data = asdict(self)
        extra = data.pop("extra")
        return {**extra, **data}

    @property
    def entity_key(self) -> tuple[str, str]:
        """Case-insensitive name + state identity used for batch dedup."""
        name = self.name if isinstance(self.name, str) else ""
        state = self.state if isinstance(self.state, str) else ""
        return name.lower(), state.lower()


@dataclass
class QualityScore:
    """Completeness score with the points awarded per criterion."""
    score: int
    breakdown: dict[str, int] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class MergeReason(str, Enum):
    NEW_RECORD = "NEW_RECORD"
    PROTECTED_HIGH_TRUST_SOURCE = "PROTECTED_HIGH_TRUST_SOURCE"
    HIGHER_PRIORITY_SOURCE = "HIGHER_PRIORITY_SOURCE"
    IMPROVED_QUALITY = "IMPROVED_QUALITY"
    NO_IMPROVEMENT = "NO_IMPROVEMENT"

    @property
    def message(self) -> str:
        return MERGE_REASON_MESSAGES[self]


MERGE_REASON_MESSAGES = {
    MergeReason.NEW_RECORD: "No existing record",
    MergeReason.PROTECTED_HIGH_TRUST_SOURCE: "Protected: API data cannot be overwritten by scraped data",
    MergeReason.HIGHER_PRIORITY_SOURCE: "Higher priority data source",
    MergeReason.IMPROVED_QUALITY: "Improved data quality",
    MergeReason.NO_IMPROVEMENT: "No quality improvement",
}


@dataclass(frozen=True)
class MergeDecision:
    """Whether a candidate may replace the stored record, and why."""
    accept: bool
    reason: MergeReason


@dataclass
class ValidationResult:
    """Result of validating a candidate record."""
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors
