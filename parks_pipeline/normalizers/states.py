"""
US state normalization utilities.

Converts state names to two-letter codes so records keyed on state compare
consistently across sources.
"""

from typing import Any, Optional

STATE_NAME_TO_CODE = {
    "alabama": "AL",
    "alaska": "AK",
    "arizona": "AZ",
    "arkansas": "AR",
    "california": "CA",
    "colorado": "CO",
    "connecticut": "CT",
    "delaware": "DE",
    "florida": "FL",
    "georgia": "GA",
    "hawaii": "HI",
    "idaho": "ID",
    "illinois": "IL",
    "indiana": "IN",
    "iowa": "IA",
    "kansas": "KS",
    "kentucky": "KY",
    "louisiana": "LA",
    "maine": "ME",
    "maryland": "MD",
    "massachusetts": "MA",
    "michigan": "MI",
    "minnesota": "MN",
    "mississippi": "MS",
    "missouri": "MO",
    "montana": "MT",
    "nebraska": "NE",
    "nevada": "NV",
    "new hampshire": "NH",
    "new jersey": "NJ",
    "new mexico": "NM",
    "new york": "NY",
    "north carolina": "NC",
    "north dakota": "ND",
    "ohio": "OH",
    "oklahoma": "OK",
    "oregon": "OR",
    "pennsylvania": "PA",
    "rhode island": "RI",
    "south carolina": "SC",
    "south dakota": "SD",
    "tennessee": "TN",
    "texas": "TX",
    "utah": "UT",
    "vermont": "VT",
    "virginia": "VA",
    "washington": "WA",
    "west virginia": "WV",
    "wisconsin": "WI",
    "wyoming": "WY",
    "district of columbia": "DC",
    "washington dc": "DC",
}

STATE_CODE_TO_NAME = {}
for _name, _code in STATE_NAME_TO_CODE.items():
    STATE_CODE_TO_NAME.setdefault(_code, _name)


def normalize_state_to_code(state: Any) -> Any:
    """Normalize a state name or code to its two-letter uppercase code.

    Two-letter inputs are uppercased as-is. Unknown names are returned
    trimmed but otherwise unchanged; non-strings are returned untouched.
    """
    if not state or not isinstance(state, str):
        return state

    trimmed = state.strip()
    if len(trimmed) == 2:
        return trimmed.upper()

    return STATE_NAME_TO_CODE.get(trimmed.lower().replace(".", ""), trimmed)


def state_code_to_name(state_code: Any) -> Any:
    """Convert a two-letter state code to its title-cased name."""
    if not state_code or not isinstance(state_code, str):
        return state_code

    name: Optional[str] = STATE_CODE_TO_NAME.get(state_code.strip().upper())
    if name:
        return name.title()
    return state_code


def is_valid_state_code(state: Any) -> bool:
    if not state or not isinstance(state, str):
        return False
    code = state.strip().upper()
    return len(code) == 2 and code in STATE_CODE_TO_NAME
