# src/compat_scraper/extractors/fetch_chain.py
import logging
from typing import Dict, Any, List, Optional, Tuple

from .base_fetcher import FetchStrategy
from .request_manager import RequestManager
from .selenium_client import SeleniumClient
from ..constants import DEFAULT_TIMEOUT_SECONDS, DEFAULT_USER_AGENT, STRATEGY_BROWSER, STRATEGY_HTTP
from ..exceptions import BlockedContentError, FetchError
from ..types import Config, VendorProfile

logger = logging.getLogger(__name__)

class FetchChain:
    """
    Tries a vendor's fetch strategies in their configured order, each exactly once.

    A step may carry an expected marker: HTML without it is treated as a bot wall
    and discarded, the same as a failed fetch. The first acceptable page wins.
    """

    def __init__(self, steps: List[Tuple[FetchStrategy, Optional[str]]]):
        if not steps:
            raise ValueError("FetchChain needs at least one strategy")
        self.steps = steps

    def fetch(self, url: str, user_agent: Optional[str] = None, headers: Optional[Dict[str, str]] = None,
              timeout: int = DEFAULT_TIMEOUT_SECONDS) -> str:
        user_agent = user_agent or DEFAULT_USER_AGENT
        last_error: Optional[FetchError] = None
        for position, (strategy, expected_marker) in enumerate(self.steps):
            if position:
                logger.warning(f"Falling back to '{strategy.name}' strategy for {url}.")
            try:
                html = strategy.fetch(url, user_agent, headers=headers, timeout=timeout)
                if expected_marker and expected_marker not in html:
                    raise BlockedContentError(
                        f"Expected marker '{expected_marker}' missing from {url}; response is likely a bot-block page",
                        url=url,
                    )
                return html
            except FetchError as e:
                logger.error(f"Strategy '{strategy.name}' failed for {url}: {e}")
                last_error = e

        raise FetchError(f"All fetch strategies failed for {url}: {last_error}", url=url) from last_error

    def close(self) -> None:
        for strategy, _ in self.steps:
            strategy.close()


def build_fetch_chain(profile: VendorProfile, config: Config) -> FetchChain:
    """Instantiates the strategies a vendor profile lists, with their shared config sections."""
    advanced = config.get("advanced", {})
    steps: List[Tuple[FetchStrategy, Optional[str]]] = []
    for step in profile.fetch:
        if step.type == STRATEGY_HTTP:
            strategy: FetchStrategy = RequestManager(advanced.get("caching", {}))
        elif step.type == STRATEGY_BROWSER:
            strategy = SeleniumClient(advanced.get("selenium", {}))
        else: # Guarded by VendorProfile validation
            raise ValueError(f"Unknown fetch strategy: {step.type}")
        steps.append((strategy, step.expected_marker))
    return FetchChain(steps)
