# SPDX-License-Identifier: MIT
"""Tests for boundary normalization helpers."""

import pytest

from parks_pipeline.normalizers import (
    is_valid_state_code,
    normalize_list,
    normalize_state_to_code,
    state_code_to_name,
)


class TestNormalizeList:
    @pytest.mark.parametrize("raw,expected", [
        (None, []),
        ("", []),
        ("Restrooms, Parking ,, Picnic Area", ["Restrooms", "Parking", "Picnic Area"]),
        ('["Hiking", " Fishing ", ""]', ["Hiking", "Fishing"]),
        ("[not json", ["[not json"]),
        (["Hiking", None, "  ", "Camping"], ["Hiking", "Camping"]),
        (("Boating",), ["Boating"]),
        (7, ["7"]),
    ])
    def test_normalization(self, raw, expected):
        assert normalize_list(raw) == expected

    def test_json_numbers_become_strings(self):
        assert normalize_list("[1, 2]") == ["1", "2"]


class TestStates:
    @pytest.mark.parametrize("raw,expected", [
        ("California", "CA"),
        ("  new york ", "NY"),
        ("ca", "CA"),
        ("Washington D.C.", "DC"),
        ("District of Columbia", "DC"),
        ("Narnia", "Narnia"),
        (None, None),
        ("", ""),
    ])
    def test_normalize_state_to_code(self, raw, expected):
        assert normalize_state_to_code(raw) == expected

    def test_state_code_to_name(self):
        assert state_code_to_name("nc") == "North Carolina"
        assert state_code_to_name("DC") == "District Of Columbia"
        assert state_code_to_name("ZZ") == "ZZ"

    def test_is_valid_state_code(self):
        assert is_valid_state_code("ga")
        assert not is_valid_state_code("Georgia")
        assert not is_valid_state_code("ZZ")
        assert not is_valid_state_code(None)
