"""
In-memory park store.

Holds the current record for each park and applies engine decisions. The
engine itself never touches storage; this store is the collaborator that
serializes the read-decide-write sequence so two concurrent candidates for
the same park cannot both accept against the same stale baseline.
"""

import json
import threading
import uuid
from collections.abc import Iterator
from dataclasses import replace
from pathlib import Path
from typing import Any, Mapping

from loguru import logger

from parks_pipeline.deduplication import names_match, normalize_park_name
from parks_pipeline.engine import Evaluation, QualityEngine
from parks_pipeline.models import ParkRecord
from parks_pipeline.normalizers import normalize_state_to_code


def atomic_write_json(dest_path: Path, data: Any, indent: int | None = None) -> Path:
    """
    Write JSON data atomically - only replaces target file on success.

    Args:
        dest_path: Final destination path
        data: Data to serialize as JSON
        indent: JSON indent (None for compact)

    Returns:
        Path to written file
    """
    dest_path = Path(dest_path)
    dest_path.parent.mkdir(parents=True, exist_ok=True)

    # Same directory so the rename stays on one filesystem
    temp_path = dest_path.with_suffix(dest_path.suffix + ".tmp")

    try:
        with open(temp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, default=str, ensure_ascii=False, indent=indent)
        temp_path.replace(dest_path)
        return dest_path
    except Exception:
        if temp_path.exists():
            temp_path.unlink()
        raise


class ParkStore:
    """
    Current record per park, grouped by state.

    A park is located by state code plus park name match (see
    ``names_match``). Because name matching is fuzzy, the read-decide-write
    lock is held per state rather than per exact name.
    """

    def __init__(self, records: list[ParkRecord] | None = None):
        self._records: dict[str, dict[str, ParkRecord]] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

        for record in records or []:
            self.put(record)

    @staticmethod
    def state_key(state: Any) -> str:
        code = normalize_state_to_code(state)
        return code.upper() if isinstance(code, str) else ""

    def _lock_for(self, state_key: str) -> threading.Lock:
        with self._locks_guard:
            if state_key not in self._locks:
                self._locks[state_key] = threading.Lock()
            return self._locks[state_key]

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._records.values())

    def __iter__(self) -> Iterator[ParkRecord]:
        for bucket in list(self._records.values()):
            yield from list(bucket.values())

    def get(self, record_id: str) -> ParkRecord | None:
        for bucket in self._records.values():
            if record_id in bucket:
                return bucket[record_id]
        return None

    def put(self, record: ParkRecord) -> ParkRecord:
        """Store a record as-is, assigning an id if it has none."""
        if not record.id:
            record = replace(record, id=uuid.uuid4().hex)
        self._records.setdefault(self.state_key(record.state), {})[record.id] = record
        return record

    def find_existing(self, record: ParkRecord) -> ParkRecord | None:
        """
        Find the stored record for the same park.

        Args:
            record: Candidate with name and state

        Returns:
            Stored record or None if the park is new
        """
        if not record.name or not record.state:
            return None

        bucket = self._records.get(self.state_key(record.state), {})
        if not bucket:
            return None

        target = normalize_park_name(record.name)
        if not target:
            # Name is all generic words ("State Park"): compare literally
            wanted = record.name.strip().lower()
            for stored in bucket.values():
                if isinstance(stored.name, str) and stored.name.strip().lower() == wanted:
                    return stored
            return None

        for stored in bucket.values():
            if normalize_park_name(stored.name) == target:
                return stored

        for stored in bucket.values():
            if names_match(stored.name, record.name):
                return stored

        return None

    def upsert(
        self,
        candidate: ParkRecord | Mapping[str, Any],
        source_label: Any,
        engine: QualityEngine,
    ) -> Evaluation:
        """
        Evaluate a candidate against the stored record and apply the decision.

        On accept, the stored record is replaced as a whole; the stored id
        is kept so references to the park stay valid. A new park always gets
        a fresh id; an id carried in from the source is ignored.

        Returns:
            Evaluation whose ``record`` is the stored version when accepted
        """
        record = ParkRecord.coerce(candidate) or ParkRecord()
        state_key = self.state_key(record.state)

        with self._lock_for(state_key):
            existing = self.find_existing(record)
            evaluation = engine.evaluate(record, source_label, existing=existing)

            if evaluation.decision is not None and evaluation.decision.accept:
                record_id = existing.id if existing else uuid.uuid4().hex
                stored = replace(evaluation.record, id=record_id)
                self._records.setdefault(state_key, {})[record_id] = stored
                evaluation.record = stored

        return evaluation

    @classmethod
    def load(cls, path: Path) -> "ParkStore":
        """Load a store from a JSON array of park records (missing file = empty)."""
        path = Path(path)
        if not path.exists():
            logger.info(f"No store at {path}, starting empty")
            return cls()

        with open(path, encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, list):
            raise ValueError(f"Expected a JSON array of parks in {path}")

        store = cls([ParkRecord.from_dict(item) for item in data if isinstance(item, Mapping)])
        logger.info(f"Loaded {len(store)} parks from {path}")
        return store

    def dump(self, path: Path, indent: int | None = 2) -> Path:
        """Write all records to a JSON file atomically."""
        records = [record.to_dict() for record in self]
        written = atomic_write_json(Path(path), records, indent=indent)
        logger.info(f"Saved {len(records)} parks to {written}")
        return written
