"""Utility modules for the parks pipeline."""

from parks_pipeline.utils.geo import (
    has_boundary_geometry,
    is_supplied,
    is_valid_coordinates,
    is_valid_latitude,
    is_valid_longitude,
    parse_coordinate,
    parse_coordinates,
)
from parks_pipeline.utils.logging import setup_logging
from parks_pipeline.utils.numbers import as_number
from parks_pipeline.utils.text import is_blank, is_valid_url

__all__ = [
    # Logging
    "setup_logging",
    # Geographic utilities
    "parse_coordinate",
    "parse_coordinates",
    "is_supplied",
    "is_valid_latitude",
    "is_valid_longitude",
    "is_valid_coordinates",
    "has_boundary_geometry",
    # Numbers
    "as_number",
    # Text utilities
    "is_blank",
    "is_valid_url",
]
