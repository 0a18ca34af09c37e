"""
Deduplication pipeline components.

``deduplicate`` collapses duplicates inside one batch; ``normalize_park_name``
and ``names_match`` match incoming records to the stored record for the
same park.
"""

from parks_pipeline.deduplication.batch import deduplicate
from parks_pipeline.deduplication.names import names_match, normalize_park_name

__all__ = ["deduplicate", "names_match", "normalize_park_name"]
