"""
List field normalization for amenities and activities.

Upstream sources deliver these either as structured lists, as JSON array
strings, or as free-form comma-separated text.
"""

import json
from typing import Any


def normalize_list(value: Any) -> list[str]:
    """Normalize a raw list-ish value into a list of trimmed, non-empty strings.

    Args:
        value: A list/tuple, a JSON array string, a comma-separated string, or None

    Returns:
        List of strings in their original order
    """
    if value is None:
        return []

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return []
        if text.startswith("["):
            try:
                parsed = json.loads(text)
            except json.JSONDecodeError:
                parsed = None
            if isinstance(parsed, list):
                return normalize_list(parsed)
        return [part.strip() for part in text.split(",") if part.strip()]

    if isinstance(value, (list, tuple)):
        items = []
        for item in value:
            if item is None:
                continue
            item = str(item).strip()
            if item:
                items.append(item)
        return items

    # Scalars become a single-item list
    item = str(value).strip()
    return [item] if item else []
