# src/compat_scraper/parsers/table_locator.py
"""
Cuts candidate <table> regions out of a full HTML document.

Matching is regex-level and non-greedy: a nested table closes its outer
region early. Vendor pages are machine generated and well formed, so this
is accepted rather than worked around.
"""
import re
import logging
from typing import Iterator

from ..types import RawTableFragment

logger = logging.getLogger(__name__)

TABLE_RE = re.compile(r"<table\b.*?</table\s*>", re.IGNORECASE | re.DOTALL)
ROW_OPEN_RE = re.compile(r"<tr\b", re.IGNORECASE)


def count_rows(fragment_text: str) -> int:
    """Approximate row count: number of <tr> openings."""
    return len(ROW_OPEN_RE.findall(fragment_text))


def locate_tables(html_content: str) -> Iterator[RawTableFragment]:
    """Yields one RawTableFragment per <table>...</table> region, in document order."""
    if not html_content:
        return
    for match in TABLE_RE.finditer(html_content):
        text = match.group(0)
        yield RawTableFragment(text=text, row_count=count_rows(text))
