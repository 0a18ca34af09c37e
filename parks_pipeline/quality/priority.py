"""
Source priority resolution.

Maps a free-text source label (e.g. "NPS API", "recreation.gov sync",
"Georgia State Parks API") to a numeric trust tier. Rules are evaluated
top-to-bottom against the uppercased label and the first match wins.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from parks_pipeline.config import SOURCE_PRIORITIES


@dataclass(frozen=True)
class PriorityRule:
    """One row of the priority table: a label predicate and its tier."""
    name: str
    predicate: Callable[[str], bool]
    priority: int

    def matches(self, label: str) -> bool:
        return self.predicate(label)


def contains(*needles: str) -> Callable[[str], bool]:
    """Predicate matching labels that contain every needle (uppercase)."""
    def predicate(label: str) -> bool:
        return all(needle in label for needle in needles)
    return predicate


DEFAULT_PRIORITY_RULES: tuple[PriorityRule, ...] = (
    PriorityRule("nps", contains("NPS"), SOURCE_PRIORITIES["NPS_API"]),
    PriorityRule("recreation_gov", contains("RECREATION.GOV"), SOURCE_PRIORITIES["RECREATION_GOV_API"]),
    PriorityRule("state_api", contains("STATE", "API"), SOURCE_PRIORITIES["STATE_PARK_API"]),
    PriorityRule("manual", contains("MANUAL"), SOURCE_PRIORITIES["MANUAL_CURATION"]),
    PriorityRule("email", contains("EMAIL"), SOURCE_PRIORITIES["EMAIL_RESPONSE"]),
    PriorityRule("gov_site", contains(".GOV"), SOURCE_PRIORITIES["OFFICIAL_WEBSITE_SCRAPE"]),
)

DEFAULT_PRIORITY = SOURCE_PRIORITIES["WEB_SEARCH_SCRAPE"]


class SourcePriorityResolver:
    """Resolves source labels against an ordered rule table."""

    def __init__(
        self,
        rules: tuple[PriorityRule, ...] = DEFAULT_PRIORITY_RULES,
        default_priority: int = DEFAULT_PRIORITY,
    ):
        self.rules = tuple(rules)
        self.default_priority = default_priority

    def match(self, source_label: Any) -> Optional[PriorityRule]:
        """Return the first rule matching the label, or None."""
        if not isinstance(source_label, str):
            return None

        label = source_label.upper()
        for rule in self.rules:
            if rule.matches(label):
                return rule
        return None

    def resolve(self, source_label: Any) -> int:
        """
        Resolve a source label to its priority tier.

        Args:
            source_label: Free-text source identifier; blank or missing
                labels fall through to the default tier

        Returns:
            Integer priority
        """
        rule = self.match(source_label)
        return rule.priority if rule else self.default_priority

