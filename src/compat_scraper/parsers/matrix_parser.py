# src/compat_scraper/parsers/matrix_parser.py
import logging
from typing import List, Optional

from .base_parser import BaseParser
from .classifier import TableClassifier
from .normalizer import RecordNormalizer
from .table_locator import locate_tables
from .table_parser import TableRecordParser
from ..types import CanonicalRecord, VendorProfile

logger = logging.getLogger(__name__)

class VendorMatrixParser(BaseParser):
    """
    Extracts a vendor's firmware support matrix from a full page.
    Every table that passes the classifier contributes records, in page order.
    """
    def __init__(self, profile: VendorProfile, table_parser: Optional[TableRecordParser] = None):
        self.profile = profile
        self.classifier = TableClassifier(profile)
        self.table_parser = table_parser or TableRecordParser()
        self.normalizer = RecordNormalizer(profile)

    def parse(self, html_content: str, source_url: str) -> List[CanonicalRecord]:
        if not html_content:
            logger.warning(f"Empty HTML content received for parsing from {source_url}.")
            return []

        fragments = list(locate_tables(html_content))
        tables_seen = len(fragments)

        records: List[CanonicalRecord] = []
        tables_matched = 0
        for fragment in self.classifier.select(fragments):
            tables_matched += 1
            rows = self.table_parser.parse(fragment)
            table_records = self.normalizer.normalize(rows)
            logger.debug(
                f"[{self.profile.key}] Matched table {tables_matched}: {len(rows)} rows, "
                f"{len(table_records)} records."
            )
            records.extend(table_records)

        if not tables_matched:
            logger.warning(
                f"[{self.profile.key}] None of {tables_seen} table(s) at {source_url} looked like the "
                f"support matrix. The page structure may have changed."
            )
        else:
            logger.info(
                f"[{self.profile.key}] Parsed {len(records)} records from {tables_matched} of "
                f"{tables_seen} table(s) at {source_url}."
            )
        return records
