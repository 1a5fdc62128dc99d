# src/compat_scraper/parsers/base_parser.py
from abc import ABC, abstractmethod
from typing import List

from ..types import CanonicalRecord

class BaseParser(ABC):
    """
    Abstract base class for page parsers.
    """
    @abstractmethod
    def parse(self, html_content: str, source_url: str) -> List[CanonicalRecord]:
        """
        Parses a vendor page into canonical records.

        :param html_content: The HTML string to parse.
        :param source_url: The URL from which the HTML was fetched (for context/logging).
        :return: Records in page order; an empty list when nothing matched.
        """
        pass
