# src/compat_scraper/parsers/classifier.py
"""
Decides whether a table fragment is a vendor's firmware support matrix.

Vendor pages carry navigation, legal and product data tables next to the matrix.
Two cheap gates must both pass: a minimum <tr> count and a keyword policy
("all" keywords present, or "any" of them). Ambiguous tables are rejected.
"""
import logging
from typing import Iterable, Iterator

from ..types import RawTableFragment, VendorProfile

logger = logging.getLogger(__name__)


def has_min_density(fragment: RawTableFragment, min_rows: int) -> bool:
    return fragment.row_count >= min_rows


def matches_keywords(text: str, keywords: Iterable[str], policy: str) -> bool:
    """Case-insensitive substring test of `keywords` against `text` under an all/any policy."""
    haystack = text.lower()
    hits = [keyword.lower() in haystack for keyword in keywords]
    if not hits:
        return False
    if policy == "all":
        return all(hits)
    if policy == "any":
        return any(hits)
    raise ValueError(f"Unknown keyword policy: {policy}")


class TableClassifier:
    def __init__(self, profile: VendorProfile):
        self.profile = profile

    def is_relevant(self, fragment: RawTableFragment) -> bool:
        if not has_min_density(fragment, self.profile.min_rows):
            logger.debug(
                f"[{self.profile.key}] Rejected table with {fragment.row_count} rows "
                f"(minimum {self.profile.min_rows})."
            )
            return False
        if not matches_keywords(fragment.text, self.profile.keywords, self.profile.keyword_policy):
            logger.debug(
                f"[{self.profile.key}] Rejected table with {fragment.row_count} rows: "
                f"keyword policy '{self.profile.keyword_policy}' over {self.profile.keywords} not met."
            )
            return False
        return True

    def select(self, fragments: Iterable[RawTableFragment]) -> Iterator[RawTableFragment]:
        """Filters a fragment stream down to the relevant tables, preserving order."""
        for fragment in fragments:
            if self.is_relevant(fragment):
                yield fragment
