"""
Parks directory data pipeline.

Data quality engine deciding whether an incoming park record may replace
the one already stored:

    from parks_pipeline import QualityEngine
    evaluation = QualityEngine().evaluate(candidate, "NPS API", existing=stored)
"""

from parks_pipeline.engine import (
    DEFAULT_POLICY,
    Evaluation,
    IngestAction,
    QualityEngine,
    QualityPolicy,
    decide,
    deduplicate,
    resolve_priority,
    score,
    validate,
)
from parks_pipeline.models import (
    MergeDecision,
    MergeReason,
    ParkRecord,
    QualityScore,
    ValidationResult,
)

__version__ = "1.0.0"

__all__ = [
    "DEFAULT_POLICY",
    "Evaluation",
    "IngestAction",
    "MergeDecision",
    "MergeReason",
    "ParkRecord",
    "QualityEngine",
    "QualityPolicy",
    "QualityScore",
    "ValidationResult",
    "decide",
    "deduplicate",
    "resolve_priority",
    "score",
    "validate",
]
