# src/compat_scraper/extractors/selenium_client.py
import logging
import time
from typing import Dict, Any, Optional

from .base_fetcher import FetchStrategy
from ..constants import DEFAULT_SETTLE_DELAY_SECONDS, DEFAULT_TIMEOUT_SECONDS, STRATEGY_BROWSER
from ..exceptions import BrowserError

logger = logging.getLogger(__name__)

class SeleniumClient(FetchStrategy):
    """
    Browser strategy: renders the page in a real browser so client-side scripts
    and bot checks run, waits a fixed settle delay, then returns the DOM.
    Each fetch owns its browser for exactly the duration of the call.
    """
    name = STRATEGY_BROWSER

    def __init__(self, selenium_config: Optional[Dict[str, Any]] = None):
        self.config = selenium_config or {}
        self.settle_delay = self.config.get("settle_delay", DEFAULT_SETTLE_DELAY_SECONDS)

    def fetch(self, url: str, user_agent: str, headers: Optional[Dict[str, str]] = None,
              timeout: int = DEFAULT_TIMEOUT_SECONDS) -> str:
        # Selenium (and a browser) may be absent on the host; that only disables this strategy
        try:
            from .browser import browser_session
            from selenium.common.exceptions import TimeoutException, WebDriverException
        except ImportError as e:
            raise BrowserError(f"Selenium is not installed: {e}", url=url) from e

        if headers:
            logger.debug(f"Browser strategy ignores extra request headers for {url}: {sorted(headers)}")

        try:
            with browser_session(self.config, user_agent=user_agent, page_load_timeout=timeout) as driver:
                logger.info(f"Fetching {url} using Selenium...")
                driver.get(url)
                logger.debug(f"Waiting {self.settle_delay}s for client-side rendering on {url}")
                time.sleep(self.settle_delay)
                page_source = driver.page_source
        except BrowserError as e:
            e.url = e.url or url
            raise
        except TimeoutException as e:
            logger.error(f"Timeout waiting for page load for {url}: {e}")
            raise BrowserError(f"Selenium timeout for {url}: {e}", url=url) from e
        except WebDriverException as e: # Catch broader Selenium exceptions
            logger.error(f"WebDriverException for {url}: {e.msg}")
            raise BrowserError(f"Selenium WebDriver error for {url}: {e.msg}", url=url) from e
        except Exception as e: # e.g. urllib3 errors when the driver process dies
            logger.error(f"Unexpected error fetching {url} with Selenium: {e}")
            raise BrowserError(f"Unexpected Selenium error for {url}: {e}", url=url) from e

        logger.info(f"Successfully fetched {url} with Selenium ({len(page_source)} characters).")
        return page_source
