"""
Data quality components: source priority, completeness scoring, merge
policy and validation.
"""

from parks_pipeline.quality.merge import MergePolicy
from parks_pipeline.quality.priority import (
    DEFAULT_PRIORITY,
    DEFAULT_PRIORITY_RULES,
    PriorityRule,
    SourcePriorityResolver,
)
from parks_pipeline.quality.scorer import DEFAULT_WEIGHTS, QualityScorer, ScoringWeights
from parks_pipeline.quality.validator import RecordValidator

__all__ = [
    "DEFAULT_PRIORITY",
    "DEFAULT_PRIORITY_RULES",
    "DEFAULT_WEIGHTS",
    "MergePolicy",
    "PriorityRule",
    "QualityScorer",
    "RecordValidator",
    "ScoringWeights",
    "SourcePriorityResolver",
]
