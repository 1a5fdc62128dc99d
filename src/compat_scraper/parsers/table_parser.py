# src/compat_scraper/parsers/table_parser.py
import logging
from typing import List, Union

from bs4 import BeautifulSoup

from ..constants import POSITIONAL_KEY_TEMPLATE
from ..types import RawRow, RawRows, RawTableFragment
from .data_cleaner import cell_text, label_text

logger = logging.getLogger(__name__)

class TableRecordParser:
    """
    Turns one table fragment into ordered header -> cell mappings.

    Header labels come from <th> cells anywhere in the fragment; a table with
    no <th> at all borrows its first row's <td> cells instead. The row that
    supplied the labels is not repeated as data. Cells without a usable label
    are keyed Column{N} (1-indexed), so column alignment survives missing,
    empty or duplicate headers.

    Parsing never raises: odd markup just yields fewer rows.
    """

    def __init__(self,
                 row_selector: str = "tr",
                 header_selector: str = "th",
                 cell_selector: str = "td",
                 features: str = "lxml"):
        self.row_selector = row_selector
        self.header_selector = header_selector
        self.cell_selector = cell_selector
        self.features = features

    def _extract_headers(self, soup: BeautifulSoup) -> List[str]:
        """Extracts header labels, dropping the ones that are empty once decoded."""
        header_cells = soup.find_all(self.header_selector)
        if header_cells:
            return [label for label in (label_text(cell) for cell in header_cells) if label]

        # No <th> anywhere: the first row is the header row
        first_row = soup.find(self.row_selector)
        if first_row is None:
            return []
        headers = [
            label for label in
            (label_text(cell) for cell in first_row.find_all(self.cell_selector, recursive=False))
            if label
        ]
        logger.debug(f"No <th> cells found, inferred headers from first row: {headers}")
        return headers

    @staticmethod
    def _key_row(headers: List[str], values: List[str]) -> RawRow:
        row: RawRow = {}
        for index, value in enumerate(values):
            label = headers[index] if index < len(headers) else ""
            if not label or label in row:
                label = POSITIONAL_KEY_TEMPLATE.format(index + 1)
            row[label] = value
        return row

    def parse(self, fragment: Union[RawTableFragment, str]) -> RawRows:
        text = fragment.text if isinstance(fragment, RawTableFragment) else fragment
        if not text:
            return []

        soup = BeautifulSoup(text, self.features)
        headers = self._extract_headers(soup)
        header_row_pending = bool(headers)

        rows: RawRows = []
        for row_element in soup.find_all(self.row_selector):
            header_cells = row_element.find_all(self.header_selector, recursive=False)
            data_cells = row_element.find_all(self.cell_selector, recursive=False)

            if header_row_pending and (header_cells or data_cells):
                # First data-bearing row is the one the labels came from
                header_row_pending = False
                continue
            if header_cells:
                continue
            if not data_cells:
                continue

            rows.append(self._key_row(headers, [cell_text(cell) for cell in data_cells]))

        logger.debug(f"Parsed {len(rows)} rows with headers {headers}")
        return rows
