"""
Merge policy: may a candidate replace the record currently in storage?

Rules, evaluated in order, first applicable wins:

1. Protection: stored data from a high-trust source (priority >= 90) is
   never replaced by a lower-trust candidate, whatever its score.
2. A higher-priority source replaces a lower one.
3. At equal priority, a strictly higher quality score replaces.
4. Otherwise the stored record stays.

Acceptance replaces the whole record; there is no field-level merge.
"""

from loguru import logger

from parks_pipeline.config import PROTECTED_PRIORITY
from parks_pipeline.models import MergeDecision, MergeReason, ParkRecord
from parks_pipeline.utils.numbers import as_number


class MergePolicy:
    """Decides whether a candidate record is accepted over the stored one."""

    def __init__(self, protected_priority: int = PROTECTED_PRIORITY):
        self.protected_priority = protected_priority

    def is_protected(self, existing_priority: float, new_priority: float) -> bool:
        """True when stored high-trust data would be overwritten by a lower tier."""
        return existing_priority >= self.protected_priority and new_priority < self.protected_priority

    def decide(self, existing: ParkRecord | None, candidate: ParkRecord) -> MergeDecision:
        """
        Decide whether ``candidate`` should replace ``existing``.

        Args:
            existing: Record currently in storage, or None for a new entity
            candidate: Incoming record with priority and score stamped

        Returns:
            MergeDecision with the accept flag and the rule that decided it
        """
        if existing is None:
            return MergeDecision(accept=True, reason=MergeReason.NEW_RECORD)

        existing_priority = as_number(getattr(existing, "data_source_priority", None))
        existing_score = as_number(getattr(existing, "data_quality_score", None))
        new_priority = as_number(getattr(candidate, "data_source_priority", None))
        new_score = as_number(getattr(candidate, "data_quality_score", None))

        # Must stay first: nothing below may override it
        if self.is_protected(existing_priority, new_priority):
            logger.info(
                f"Protected: {getattr(existing, 'name', None)!r} (priority {existing_priority:g}) "
                f"cannot be overwritten by priority {new_priority:g}"
            )
            return MergeDecision(accept=False, reason=MergeReason.PROTECTED_HIGH_TRUST_SOURCE)

        if new_priority > existing_priority:
            logger.debug(f"Update: better data source ({new_priority:g} > {existing_priority:g})")
            return MergeDecision(accept=True, reason=MergeReason.HIGHER_PRIORITY_SOURCE)

        if new_priority == existing_priority and new_score > existing_score:
            logger.debug(f"Update: better quality ({new_score:g} > {existing_score:g})")
            return MergeDecision(accept=True, reason=MergeReason.IMPROVED_QUALITY)

        logger.debug("Skip: no improvement")
        return MergeDecision(accept=False, reason=MergeReason.NO_IMPROVEMENT)
