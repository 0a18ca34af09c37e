# SPDX-License-Identifier: MIT
"""Tests for completeness scoring."""

from dataclasses import replace

import pytest

from parks_pipeline.models import ParkRecord
from parks_pipeline.quality.scorer import QualityScorer, ScoringWeights


@pytest.fixture
def scorer():
    return QualityScorer()


class TestFullRecord:
    """Scores for complete and empty records."""

    def test_complete_record_without_official_source(self, scorer, sample_park):
        result = scorer.score(sample_park)
        assert result.score == 95
        assert "official_source" not in result.breakdown

    def test_complete_record_from_official_source(self, scorer, sample_park):
        result = scorer.score(replace(sample_park, data_source_priority=100))
        assert result.score == 100
        assert result.breakdown == {
            "name": 15,
            "description": 10,
            "coordinates": 25,
            "website": 10,
            "contact": 10,
            "amenities": 10,
            "activities": 5,
            "boundaries": 10,
            "official_source": 5,
        }

    def test_empty_record_scores_zero(self, scorer):
        result = scorer.score(ParkRecord())
        assert result.score == 0
        assert result.breakdown == {}

    def test_score_is_sum_of_breakdown(self, scorer, sample_park):
        for record in (sample_park, ParkRecord(name="X"), replace(sample_park, website="nope")):
            result = scorer.score(record)
            assert result.score == sum(result.breakdown.values())
            assert 0 <= result.score <= 100

    def test_result_has_timestamp(self, scorer):
        assert scorer.score(ParkRecord()).timestamp is not None


class TestCriteria:
    """Individual criteria."""

    def test_whitespace_name_earns_nothing(self, scorer):
        assert "name" not in scorer.score(ParkRecord(name="   ")).breakdown

    def test_description_must_exceed_twenty_characters(self, scorer):
        assert "description" not in scorer.score(ParkRecord(description="x" * 20)).breakdown
        assert scorer.score(ParkRecord(description="x" * 21)).breakdown["description"] == 10

    def test_description_is_trimmed(self, scorer):
        padded = "   " + "x" * 18 + "   "
        assert "description" not in scorer.score(ParkRecord(description=padded)).breakdown

    def test_numeric_string_coordinates(self, scorer):
        result = scorer.score(ParkRecord(latitude="37.5", longitude=" -119.5 "))
        assert result.breakdown["coordinates"] == 25

    def test_zero_coordinates_are_valid(self, scorer):
        assert scorer.score(ParkRecord(latitude=0, longitude=0)).breakdown["coordinates"] == 25

    @pytest.mark.parametrize("lat,lon", [
        (91, 0),
        (0, 181),
        ("north", "-119"),
        (37.5, None),
        (None, None),
        (True, 1),
        ("nan", 10),
    ])
    def test_invalid_coordinates_earn_nothing(self, scorer, lat, lon):
        assert "coordinates" not in scorer.score(ParkRecord(latitude=lat, longitude=lon)).breakdown

    @pytest.mark.parametrize("website", [
        "https://www.nps.gov/yose",
        "http://parks.ca.gov",
        "ftp://files.example.org/maps",
    ])
    def test_valid_website(self, scorer, website):
        assert scorer.score(ParkRecord(website=website)).breakdown["website"] == 10

    @pytest.mark.parametrize("website", [
        "www.nps.gov",
        "not a url",
        "http://",
        "http://[::1",
        "http://example.com:port",
        "",
        None,
        42,
    ])
    def test_invalid_website_earns_nothing(self, scorer, website):
        assert "website" not in scorer.score(ParkRecord(website=website)).breakdown

    def test_contact_from_phone_or_email(self, scorer):
        assert scorer.score(ParkRecord(phone="555-0100")).breakdown["contact"] == 10
        assert scorer.score(ParkRecord(email="ranger@example.org")).breakdown["contact"] == 10
        both = scorer.score(ParkRecord(phone="555-0100", email="ranger@example.org"))
        assert both.breakdown["contact"] == 10

    def test_blank_contact_earns_nothing(self, scorer):
        assert "contact" not in scorer.score(ParkRecord(phone=" ", email="")).breakdown

    def test_lists_must_be_non_empty(self, scorer):
        result = scorer.score(ParkRecord(amenities=[], activities=["Hiking"]))
        assert "amenities" not in result.breakdown
        assert result.breakdown["activities"] == 5

    def test_unnormalized_string_list_earns_nothing(self, scorer):
        """Comma-separated strings are split at the boundary, not by the scorer."""
        result = scorer.score(ParkRecord(amenities="Restrooms, Parking"))
        assert "amenities" not in result.breakdown

    @pytest.mark.parametrize("boundaries", [
        [[[-119.6, 37.4], [-119.4, 37.4], [-119.4, 37.6]]],
        {"type": "MultiPolygon", "coordinates": [[[[0, 0], [1, 0], [1, 1]]]]},
        {"type": "Feature", "geometry": {"type": "Polygon", "coordinates": [[[0, 0], [1, 0], [1, 1]]]}},
        "POLYGON((0 0, 1 0, 1 1, 0 0))",
    ])
    def test_boundary_geometry(self, scorer, boundaries):
        assert scorer.score(ParkRecord(boundaries=boundaries)).breakdown["boundaries"] == 10

    @pytest.mark.parametrize("boundaries", [
        None,
        [],
        {},
        {"type": "Polygon", "coordinates": []},
        {"type": "Feature", "geometry": None},
        "POLYGON EMPTY",
    ])
    def test_empty_boundaries_earn_nothing(self, scorer, boundaries):
        assert "boundaries" not in scorer.score(ParkRecord(boundaries=boundaries)).breakdown

    @pytest.mark.parametrize("priority,awarded", [
        (100, True),
        (90, True),
        (89, False),
        (None, False),
        ("95", True),
        ("89", False),
        ("official", False),
        (True, False),
        (float("nan"), False),
    ])
    def test_official_source_bonus(self, scorer, priority, awarded):
        result = scorer.score(ParkRecord(data_source_priority=priority))
        assert ("official_source" in result.breakdown) is awarded


class TestScoringWeights:
    """Injected weights."""

    def test_default_total_is_one_hundred(self):
        assert ScoringWeights().total == 100

    def test_negative_weight_rejected(self):
        with pytest.raises(ValueError):
            ScoringWeights(name=-1)

    def test_total_over_one_hundred_rejected(self):
        with pytest.raises(ValueError):
            ScoringWeights(coordinates=50)

    def test_custom_weights(self, sample_park):
        scorer = QualityScorer(ScoringWeights(name=50, description=0, coordinates=50, website=0,
                                              contact=0, amenities=0, activities=0, boundaries=0,
                                              official_source=0))
        result = scorer.score(sample_park)
        assert result.breakdown == {"name": 50, "coordinates": 50}
        assert result.score == 100

    def test_zero_weight_criteria_are_absent(self):
        scorer = QualityScorer(ScoringWeights(activities=0))
        assert "activities" not in scorer.score(ParkRecord(activities=["Hiking"])).breakdown
