"""
Park name normalization for matching incoming records to stored ones.

Names from different sources vary ("Yosemite NP", "Yosemite National Park",
"YOSEMITE"). Normalizing expands abbreviations and removes generic words so
those variants compare equal.
"""

import re

# Applied in order; later patterns see the output of earlier ones
ABBREVIATIONS = [
    (r"\bnp\b", "national park"),
    (r"\bnm\b", "national monument"),
    (r"\bnf\b", "national forest"),
    (r"\bnwr\b", "national wildlife refuge"),
    (r"\bnra\b", "national recreation area"),
    (r"\bnps\b", "national park service"),
    (r"\bsp\b", "state park"),
    (r"\bsf\b", "state forest"),
    (r"\bsra\b", "state recreation area"),
    (r"\bcr\b", "county recreation"),
    (r"\bcp\b", "county park"),
    (r"\bco\b", "county"),
    (r"\bst\b", "state"),
]

GENERIC_WORDS = re.compile(
    r"\b(state|county|city|park|recreation|area|preserve|reserve|forest|wildlife|"
    r"refuge|national|monument|memorial|historic|site|center|centre|service)\b"
)


def normalize_park_name(name: str | None) -> str:
    """Normalize a park name for matching.

    Args:
        name: Raw park name

    Returns:
        Lowercased name with punctuation removed, abbreviations expanded and
        generic words dropped, or "" for empty input
    """
    if not name or not isinstance(name, str):
        return ""

    normalized = re.sub(r"\s+", " ", name.lower().strip())
    normalized = re.sub(r"[^\w\s]", "", normalized)

    for pattern, replacement in ABBREVIATIONS:
        normalized = re.sub(pattern, replacement, normalized)

    normalized = GENERIC_WORDS.sub("", normalized)
    return re.sub(r"\s+", " ", normalized).strip()


def names_match(a: str | None, b: str | None, max_length_diff: int = 5) -> bool:
    """Check whether two park names likely refer to the same park.

    Exact match after normalization, or one normalized name containing the
    other with lengths differing by less than ``max_length_diff``.
    """
    left = normalize_park_name(a)
    right = normalize_park_name(b)
    if not left or not right:
        return False
    if left == right:
        return True
    if left in right or right in left:
        return abs(len(left) - len(right)) < max_length_diff
    return False
