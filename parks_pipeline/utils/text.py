"""Text processing utility functions for the parks pipeline."""

from typing import Any
from urllib.parse import urlsplit


def is_blank(value: Any) -> bool:
    """True for None, empty strings and whitespace-only strings."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def is_valid_url(value: Any) -> bool:
    """Check whether a value parses as a well-formed absolute URL.

    A URL is well-formed when it has both a scheme and a network location.
    Any parsing failure counts as invalid.
    """
    if not isinstance(value, str) or not value.strip():
        return False

    try:
        parts = urlsplit(value.strip())
        # Accessing .port validates the port component
        parts.port
    except ValueError:
        return False

    return bool(parts.scheme) and bool(parts.netloc) and " " not in parts.netloc
