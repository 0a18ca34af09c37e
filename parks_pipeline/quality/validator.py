"""
Structural validation of candidate records.

Runs before scoring: a record with errors never reaches the merge policy.
Warnings are informational only.
"""

from parks_pipeline.models import ParkRecord, ValidationResult
from parks_pipeline.utils.geo import (
    is_supplied,
    is_valid_latitude,
    is_valid_longitude,
    parse_coordinate,
)
from parks_pipeline.utils.text import is_blank

REQUIRED_FIELD_ERRORS = {
    "name": "Park name is required",
    "state": "State is required",
    "agency": "Agency is required",
}

NO_COORDINATES_WARNING = "No coordinates - park won't show on map"


class RecordValidator:
    """Checks required fields and coordinate sanity."""

    def __init__(self, required_fields: tuple[str, ...] = ("name", "state")):
        unknown = set(required_fields) - set(REQUIRED_FIELD_ERRORS)
        if unknown:
            raise ValueError(f"Unsupported required fields: {sorted(unknown)}")
        self.required_fields = tuple(required_fields)

    def validate(self, record: ParkRecord) -> ValidationResult:
        """
        Validate a candidate record.

        Args:
            record: Candidate to check

        Returns:
            ValidationResult with blocking errors and non-blocking warnings
        """
        result = ValidationResult()

        for field_name in self.required_fields:
            value = getattr(record, field_name, None)
            if not isinstance(value, str) or is_blank(value):
                result.errors.append(REQUIRED_FIELD_ERRORS[field_name])

        lat_supplied = is_supplied(record.latitude)
        lon_supplied = is_supplied(record.longitude)

        if not lat_supplied and not lon_supplied:
            result.warnings.append(NO_COORDINATES_WARNING)
            return result

        lat_ok = is_valid_latitude(parse_coordinate(record.latitude))
        lon_ok = is_valid_longitude(parse_coordinate(record.longitude))

        # A supplied axis is checked on its own. A missing axis is only
        # reported when the other one is usable, so each broken pair
        # produces one error per offending axis.
        if lat_supplied and not lat_ok:
            result.errors.append("Invalid latitude")
        elif not lat_supplied and lon_ok:
            result.errors.append("Invalid latitude")

        if lon_supplied and not lon_ok:
            result.errors.append("Invalid longitude")
        elif not lon_supplied and lat_ok:
            result.errors.append("Invalid longitude")

        return result
