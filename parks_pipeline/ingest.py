"""
Batch ingestion runner.

Takes one batch of candidate records from a source, deduplicates it, and
upserts every survivor into a ParkStore through the quality engine.
"""

from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Mapping

from loguru import logger

from parks_pipeline.engine import Evaluation, IngestAction, QualityEngine
from parks_pipeline.models import MergeReason, ParkRecord
from parks_pipeline.store import ParkStore


@dataclass
class IngestResult:
    """Result of an ingestion run."""
    source_label: str
    records_received: int = 0
    duplicates_dropped: int = 0
    added: int = 0
    updated: int = 0
    skipped: int = 0
    protected: int = 0
    invalid: int = 0
    errors: list[str] = field(default_factory=list)
    evaluations: list[Evaluation] = field(default_factory=list)
    started_at: datetime | None = None
    completed_at: datetime | None = None

    @property
    def duration_seconds(self) -> float | None:
        """Calculate duration in seconds."""
        if self.started_at and self.completed_at:
            return (self.completed_at - self.started_at).total_seconds()
        return None

    def record(self, evaluation: Evaluation) -> None:
        """Count one evaluation outcome."""
        self.evaluations.append(evaluation)
        action = evaluation.action

        if action is IngestAction.ADDED:
            self.added += 1
        elif action is IngestAction.UPDATED:
            self.updated += 1
        elif action is IngestAction.SKIPPED:
            self.skipped += 1
            if evaluation.decision.reason is MergeReason.PROTECTED_HIGH_TRUST_SOURCE:
                self.protected += 1
        else:
            self.invalid += 1
            self.errors.append(f"{evaluation.record.name or 'Unknown'}: {', '.join(evaluation.validation.errors)}")


class BatchIngester:
    """
    Runs batches of candidate records into a store.

    Args:
        engine: Quality engine making the per-record decisions
        store: Store holding the current record per park
        progress_callback: Optional callback(current, total, status_text)
        checkpoint: Optional callback(store), called every ``checkpoint_every``
            records and once at the end of a run
        checkpoint_every: Records between checkpoints
    """

    def __init__(
        self,
        engine: QualityEngine | None = None,
        store: ParkStore | None = None,
        progress_callback: Callable[[int, int | None, str | None], None] | None = None,
        checkpoint: Callable[[ParkStore], Any] | None = None,
        checkpoint_every: int = 500,
    ):
        self.engine = engine or QualityEngine()
        self.store = store if store is not None else ParkStore()
        self.progress_callback = progress_callback
        self.checkpoint = checkpoint
        self.checkpoint_every = max(1, checkpoint_every)

    def report_progress(self, current: int, total: int | None = None, status: str | None = None):
        """Report progress to callback if set."""
        if self.progress_callback:
            self.progress_callback(current, total, status)

    def _advance(self, index: int, total: int, record: ParkRecord) -> None:
        self.report_progress(index, total, record.name)
        if self.checkpoint and index % self.checkpoint_every == 0 and index < total:
            self.checkpoint(self.store)

    def _upsert(self, record: ParkRecord, source_label: str) -> Evaluation:
        return self.store.upsert(record, source_label, self.engine)

    def run(
        self,
        candidates: Iterable[ParkRecord | Mapping[str, Any]],
        source_label: str,
        max_workers: int | None = None,
    ) -> IngestResult:
        """
        Run one batch through dedup, validation, scoring and merge.

        Args:
            candidates: Records produced by one source
            source_label: Label used to resolve the source priority
            max_workers: Upsert on a thread pool of this size (None = serial)

        Returns:
            IngestResult with per-action counts
        """
        result = IngestResult(source_label=source_label, started_at=datetime.now(timezone.utc))

        candidates = list(candidates)
        result.records_received = len(candidates)
        unique = self.engine.deduplicate(candidates)
        result.duplicates_dropped = result.records_received - len(unique)

        logger.info(
            f"Ingesting {len(unique)} records from {source_label!r} "
            f"(priority {self.engine.resolve_priority(source_label)}, "
            f"{result.duplicates_dropped} duplicates dropped)"
        )

        total = len(unique)
        if max_workers and max_workers > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                futures = [(record, executor.submit(self._upsert, record, source_label)) for record in unique]
                for index, (record, future) in enumerate(futures, start=1):
                    self._collect(result, record, future.result)
                    self._advance(index, total, record)
        else:
            for index, record in enumerate(unique, start=1):
                self._collect(result, record, lambda: self._upsert(record, source_label))
                self._advance(index, total, record)

        if self.checkpoint:
            self.checkpoint(self.store)

        result.completed_at = datetime.now(timezone.utc)
        logger.info(
            f"Ingestion complete: {result.added} added, {result.updated} updated, "
            f"{result.skipped} skipped ({result.protected} protected), "
            f"{result.invalid} invalid, {result.duration_seconds:.2f}s"
        )
        return result

    @staticmethod
    def _collect(result: IngestResult, record: ParkRecord, get_evaluation: Callable[[], Evaluation]) -> None:
        # One bad record must not abort the batch
        try:
            evaluation = get_evaluation()
        except Exception as e:
            logger.exception(f"Error ingesting {record.name!r}")
            result.errors.append(f"{record.name or 'Unknown'}: {e}")
            return
        result.record(evaluation)
