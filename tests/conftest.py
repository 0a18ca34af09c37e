# SPDX-License-Identifier: MIT
"""Pytest configuration and fixtures for parks pipeline tests."""

import os

import pytest

# Set test environment variables before importing the package
os.environ.setdefault("DISABLE_LOGGING", "1")
os.environ.setdefault("TESTING", "true")


@pytest.fixture
def engine():
    """Quality engine with the default policy."""
    from parks_pipeline.engine import QualityEngine

    return QualityEngine()


@pytest.fixture
def sample_park_data() -> dict:
    """A complete park record as an ingestion source would deliver it."""
    return {
        "name": "Pine Park",
        "state": "CA",
        "agency": "National Park Service",
        "description": "A quiet pine forest with lakes and hiking trails.",
        "latitude": 37.5,
        "longitude": -119.5,
        "website": "https://www.nps.gov/pine",
        "phone": "555-0100",
        "email": None,
        "amenities": ["Restrooms", "Parking"],
        "activities": ["Hiking"],
        "boundaries": {
            "type": "Polygon",
            "coordinates": [[[-119.6, 37.4], [-119.4, 37.4], [-119.4, 37.6], [-119.6, 37.4]]],
        },
    }


@pytest.fixture
def minimal_park_data() -> dict:
    """A park with only the fields required for storage."""
    return {
        "name": "Oak Park",
        "state": "CA",
        "agency": "City of Oakland",
    }


@pytest.fixture
def sample_park(sample_park_data: dict):
    from parks_pipeline.models import ParkRecord

    return ParkRecord.from_dict(sample_park_data)


@pytest.fixture
def sample_parks_list(sample_park_data: dict) -> list:
    """List of sample parks for batch tests."""
    return [
        sample_park_data,
        {
            **sample_park_data,
            "name": "Cedar Lake Park",
            "latitude": 38.1,
            "longitude": -120.2,
        },
        {
            **sample_park_data,
            "name": "Red Rock Canyon",
            "state": "NV",
            "latitude": 36.1,
            "longitude": -115.4,
        },
    ]
