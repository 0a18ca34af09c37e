"""
The data quality engine.

Bundles the policy tables into an immutable ``QualityPolicy`` and wires the
five components together. The engine holds no mutable state and performs
no I/O: every call depends only on its arguments, so one engine can be
shared across threads.

Typical flow for one candidate::

    engine = QualityEngine()
    evaluation = engine.evaluate(candidate, "NPS API", existing=stored)
    if evaluation.decision.accept:
        ...  # caller writes evaluation.record to storage
"""

from collections.abc import Iterable
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Mapping, Optional

from loguru import logger

from parks_pipeline.config import OFFICIAL_SOURCE_PRIORITY, PROTECTED_PRIORITY
from parks_pipeline.deduplication import deduplicate as deduplicate_batch
from parks_pipeline.models import (
    MergeDecision,
    MergeReason,
    ParkRecord,
    QualityScore,
    ValidationResult,
)
from parks_pipeline.quality import (
    DEFAULT_PRIORITY,
    DEFAULT_PRIORITY_RULES,
    DEFAULT_WEIGHTS,
    MergePolicy,
    PriorityRule,
    QualityScorer,
    RecordValidator,
    ScoringWeights,
    SourcePriorityResolver,
)

# Fields every record must carry before it may be stored
STORABLE_REQUIRED_FIELDS = ("name", "state", "agency")


@dataclass(frozen=True)
class QualityPolicy:
    """Immutable policy configuration injected into the engine."""
    priority_rules: tuple[PriorityRule, ...] = DEFAULT_PRIORITY_RULES
    default_priority: int = DEFAULT_PRIORITY
    weights: ScoringWeights = DEFAULT_WEIGHTS
    protected_priority: int = PROTECTED_PRIORITY
    official_source_priority: int = OFFICIAL_SOURCE_PRIORITY
    description_min_length: int = 20
    required_fields: tuple[str, ...] = STORABLE_REQUIRED_FIELDS


DEFAULT_POLICY = QualityPolicy()


class IngestAction(str, Enum):
    ADDED = "added"
    UPDATED = "updated"
    SKIPPED = "skipped"
    INVALID = "invalid"


@dataclass
class Evaluation:
    """Outcome of running one candidate through the engine."""
    record: ParkRecord
    validation: ValidationResult
    quality: Optional[QualityScore] = None
    decision: Optional[MergeDecision] = None
    source_label: Optional[str] = None

    @property
    def action(self) -> IngestAction:
        if self.decision is None:
            return IngestAction.INVALID
        if not self.decision.accept:
            return IngestAction.SKIPPED
        if self.decision.reason is MergeReason.NEW_RECORD:
            return IngestAction.ADDED
        return IngestAction.UPDATED


class QualityEngine:
    """Source priority, scoring, validation, dedup and merge decisions."""

    def __init__(self, policy: QualityPolicy = DEFAULT_POLICY):
        self.policy = policy
        self.resolver = SourcePriorityResolver(policy.priority_rules, policy.default_priority)
        self.scorer = QualityScorer(
            policy.weights,
            official_source_threshold=policy.official_source_priority,
            description_min_length=policy.description_min_length,
        )
        self.merge_policy = MergePolicy(policy.protected_priority)
        # Standalone validation checks name/state; storing also needs agency
        self.validator = RecordValidator()
        self.storage_validator = RecordValidator(policy.required_fields)

    def resolve_priority(self, source_label: Any) -> int:
        return self.resolver.resolve(source_label)

    def score(self, record: ParkRecord | Mapping[str, Any]) -> QualityScore:
        return self.scorer.score(ParkRecord.coerce(record) or ParkRecord())

    def decide(
        self,
        existing: ParkRecord | Mapping[str, Any] | None,
        candidate: ParkRecord | Mapping[str, Any],
    ) -> MergeDecision:
        return self.merge_policy.decide(
            ParkRecord.coerce(existing),
            ParkRecord.coerce(candidate) or ParkRecord(),
        )

    def validate(self, record: ParkRecord | Mapping[str, Any]) -> ValidationResult:
        return self.validator.validate(ParkRecord.coerce(record) or ParkRecord())

    def deduplicate(self, records: Iterable[ParkRecord | Mapping[str, Any]]) -> list[ParkRecord]:
        return deduplicate_batch(records)

    def stamp(self, record: ParkRecord, source_label: Any) -> tuple[ParkRecord, QualityScore]:
        """
        Resolve priority and score for a record.

        Any hand-set priority or score on the input is overwritten: the
        priority is stamped first because the score depends on it.

        Returns:
            (stamped copy of the record, its quality score)
        """
        stamped = replace(record, data_source_priority=self.resolve_priority(source_label))
        quality = self.scorer.score(stamped)
        return replace(stamped, data_quality_score=quality.score), quality

    def evaluate(
        self,
        candidate: ParkRecord | Mapping[str, Any],
        source_label: Any,
        existing: ParkRecord | Mapping[str, Any] | None = None,
    ) -> Evaluation:
        """
        Run one candidate through validation, priority, scoring and merge.

        Args:
            candidate: Incoming record
            source_label: Free-text label of the source that produced it
            existing: Record currently stored for the same park, if any

        Returns:
            Evaluation; ``decision`` is None when the record is invalid
        """
        record = ParkRecord.coerce(candidate) or ParkRecord()
        validation = self.storage_validator.validate(record)

        if not validation.is_valid:
            logger.debug(f"Invalid record {record.name!r}: {', '.join(validation.errors)}")
            return Evaluation(record=record, validation=validation, source_label=source_label)

        stamped, quality = self.stamp(record, source_label)
        decision = self.merge_policy.decide(ParkRecord.coerce(existing), stamped)

        return Evaluation(
            record=stamped,
            validation=validation,
            quality=quality,
            decision=decision,
            source_label=source_label,
        )


_default_engine = QualityEngine()


def resolve_priority(source_label: Any) -> int:
    """Map a source label to its trust priority."""
    return _default_engine.resolve_priority(source_label)


def score(record: ParkRecord | Mapping[str, Any]) -> QualityScore:
    """Score a record's completeness (priority must already be stamped)."""
    return _default_engine.score(record)


def decide(
    existing: ParkRecord | Mapping[str, Any] | None,
    candidate: ParkRecord | Mapping[str, Any],
) -> MergeDecision:
    """Decide whether ``candidate`` may replace ``existing``."""
    return _default_engine.decide(existing, candidate)


def validate(record: ParkRecord | Mapping[str, Any]) -> ValidationResult:
    """Check a candidate's required fields and coordinates."""
    return _default_engine.validate(record)


def deduplicate(records: Iterable[ParkRecord | Mapping[str, Any]]) -> list[ParkRecord]:
    """Drop repeated name + state records from a batch."""
    return _default_engine.deduplicate(records)
