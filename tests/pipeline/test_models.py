# SPDX-License-Identifier: MIT
"""Tests for record and result types."""

from parks_pipeline.models import MergeReason, ParkRecord, ValidationResult


class TestParkRecordFromDict:
    def test_known_fields(self, sample_park_data):
        record = ParkRecord.from_dict(sample_park_data)
        assert record.name == "Pine Park"
        assert record.latitude == 37.5
        assert record.amenities == ["Restrooms", "Parking"]
        assert record.extra == {}

    def test_aliases(self):
        record = ParkRecord.from_dict({
            "name": "Pine Park",
            "website_url": "https://example.org",
            "lat": "37.5",
            "lng": "-119.5",
            "boundary": "POLYGON((0 0, 1 0, 1 1, 0 0))",
        })
        assert record.website == "https://example.org"
        assert record.latitude == "37.5"
        assert record.longitude == "-119.5"
        assert record.boundaries.startswith("POLYGON")

    def test_canonical_name_wins_over_alias(self):
        first = ParkRecord.from_dict({"website": "https://a.org", "website_url": "https://b.org"})
        second = ParkRecord.from_dict({"website_url": "https://b.org", "website": "https://a.org"})
        assert first.website == second.website == "https://a.org"

    def test_comma_separated_lists(self):
        record = ParkRecord.from_dict({"amenities": "Restrooms, Parking", "activities": '["Hiking"]'})
        assert record.amenities == ["Restrooms", "Parking"]
        assert record.activities == ["Hiking"]

    def test_unknown_keys_go_to_extra(self):
        record = ParkRecord.from_dict({"name": "Pine Park", "acres": 12.5, "extra": {"county": "Mono"}})
        assert record.extra == {"county": "Mono", "acres": 12.5}

    def test_to_dict_flattens_extra(self):
        record = ParkRecord(name="Pine Park", extra={"acres": 3})
        data = record.to_dict()
        assert data["acres"] == 3
        assert "extra" not in data
        assert ParkRecord.from_dict(data) == record


class TestParkRecordHelpers:
    def test_entity_key(self):
        assert ParkRecord(name="Pine Park", state="CA").entity_key == ("pine park", "ca")
        assert ParkRecord().entity_key == ("", "")

    def test_coerce(self):
        record = ParkRecord(name="Pine Park")
        assert ParkRecord.coerce(record) is record
        assert ParkRecord.coerce({"name": "Pine Park"}) == record
        assert ParkRecord.coerce(None) is None
        assert ParkRecord.coerce(42) is None


class TestResults:
    def test_validation_result_validity(self):
        assert ValidationResult().is_valid
        assert not ValidationResult(errors=["State is required"]).is_valid

    def test_merge_reason_is_string(self):
        assert MergeReason.NEW_RECORD == "NEW_RECORD"
