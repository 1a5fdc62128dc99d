# src/compat_scraper/extractors/base_fetcher.py
from abc import ABC, abstractmethod
from typing import Dict, Optional

from ..constants import DEFAULT_TIMEOUT_SECONDS

class FetchStrategy(ABC):
    """
    One way of turning a URL into raw HTML.
    Implementations raise FetchError (or a subclass) instead of returning partial data.
    """
    name: str = "base"

    @abstractmethod
    def fetch(self, url: str, user_agent: str, headers: Optional[Dict[str, str]] = None,
              timeout: int = DEFAULT_TIMEOUT_SECONDS) -> str:
        pass

    def close(self) -> None:
        """Releases anything the strategy holds open. Default: nothing."""
        pass
