"""
Intra-batch deduplication.

Collapses records in a single ingestion batch that describe the same park,
keeping the first one seen. Does not look at stored records.
"""

from collections.abc import Iterable
from typing import Any, Mapping

from loguru import logger

from parks_pipeline.models import ParkRecord


def deduplicate(records: Iterable[ParkRecord | Mapping[str, Any]]) -> list[ParkRecord]:
    """Remove duplicate parks from a batch, preserving first-seen order.

    Records are keyed on case-insensitive name + state. Mappings are
    coerced to ParkRecord; anything else is dropped.

    Args:
        records: Candidate records from one ingestion run

    Returns:
        The first record for each name + state key
    """
    unique: list[ParkRecord] = []
    seen: set[tuple[str, str]] = set()
    dropped = 0

    for raw in records:
        record = ParkRecord.coerce(raw)
        if record is None:
            dropped += 1
            continue

        key = record.entity_key
        if key in seen:
            dropped += 1
            continue

        seen.add(key)
        unique.append(record)

    if dropped:
        logger.debug(f"Deduplicated batch: kept {len(unique)}, dropped {dropped}")

    return unique
