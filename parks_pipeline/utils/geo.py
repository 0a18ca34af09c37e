"""Geographic utility functions for the parks pipeline."""

import math
from typing import Any


def parse_coordinate(value: Any) -> float | None:
    """Parse a single coordinate value into a float.

    Accepts numbers and numeric strings. Booleans, blank strings, NaN and
    infinities are not coordinates.

    Args:
        value: Raw latitude or longitude value

    Returns:
        The value as a float, or None if it is not numeric
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None

    try:
        number = float(value)
    except (TypeError, ValueError):
        return None

    if math.isnan(number) or math.isinf(number):
        return None
    return number


def is_supplied(value: Any) -> bool:
    """True if a raw coordinate field carries anything at all."""
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def is_valid_latitude(lat: float | None) -> bool:
    return lat is not None and -90 <= lat <= 90


def is_valid_longitude(lon: float | None) -> bool:
    return lon is not None and -180 <= lon <= 180


def is_valid_coordinates(lat: float, lon: float) -> bool:
    """Check if latitude and longitude are valid.

    Args:
        lat: Latitude in degrees
        lon: Longitude in degrees

    Returns:
        True if coordinates are valid, False otherwise
    """
    return is_valid_latitude(lat) and is_valid_longitude(lon)


def parse_coordinates(lat: Any, lon: Any) -> tuple[float | None, float | None]:
    """Parse and validate a raw coordinate pair.

    Returns:
        Tuple of (lat, lon) if both parse and lie in range, or (None, None)
    """
    lat_value = parse_coordinate(lat)
    lon_value = parse_coordinate(lon)
    if is_valid_coordinates(lat_value, lon_value):
        return lat_value, lon_value
    return None, None


def has_boundary_geometry(boundaries: Any) -> bool:
    """Check whether boundary data carries any geometry.

    Handles GeoJSON geometry/feature dicts, WKT strings and raw coordinate
    sequences.
    """
    if not boundaries:
        return False

    if isinstance(boundaries, dict):
        if boundaries.get("type") == "Feature":
            return has_boundary_geometry(boundaries.get("geometry"))
        if boundaries.get("type") == "GeometryCollection":
            return any(has_boundary_geometry(g) for g in boundaries.get("geometries") or [])
        return bool(boundaries.get("coordinates"))

    if isinstance(boundaries, str):
        wkt = boundaries.strip().upper()
        return bool(wkt) and not wkt.endswith("EMPTY")

    try:
        return len(boundaries) > 0
    except TypeError:
        return False
