"""
Data normalization utilities.

These modules convert source-specific field formats into the shape the
quality engine expects. Normalization happens at the boundary, before
scoring.
"""

from .lists import normalize_list
from .states import is_valid_state_code, normalize_state_to_code, state_code_to_name

__all__ = [
    'normalize_list',
    'normalize_state_to_code',
    'state_code_to_name',
    'is_valid_state_code',
]
