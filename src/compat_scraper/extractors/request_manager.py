# src/compat_scraper/extractors/request_manager.py
import requests
import logging
from typing import Dict, Any, Optional
from pathlib import Path

import requests_cache # Optional caching

from .base_fetcher import FetchStrategy
from ..constants import COMMON_HEADERS, DEFAULT_TIMEOUT_SECONDS, DEFAULT_USER_AGENT, STRATEGY_HTTP
from ..exceptions import FetchError, HTTPError

logger = logging.getLogger(__name__)

class RequestManager(FetchStrategy):
    """
    Plain HTTP GET strategy:
    - Connection pooling (via requests.Session)
    - Caching (optional, via `requests-cache`)
    - Response validation (non-2xx is a failure)

    A request is made exactly once; there is no retry loop.
    """
    name = STRATEGY_HTTP

    def __init__(self, caching_config: Optional[Dict[str, Any]] = None):
        self.caching_config = caching_config or {}
        self.session = self._create_session()

    def _create_session(self) -> requests.Session:
        if self.caching_config.get("enabled", False):
            cache_name = self.caching_config.get("cache_name", "data/cache/http_cache")
            Path(cache_name).parent.mkdir(parents=True, exist_ok=True)
            session = requests_cache.CachedSession(
                cache_name=str(cache_name),
                backend=self.caching_config.get("backend", "sqlite"),
                expire_after=self.caching_config.get("expire_after", 3600), # seconds
                allowable_codes=[200], # Cache only successful responses
            )
            logger.info(f"HTTP Caching enabled. Backend: {self.caching_config.get('backend', 'sqlite')}, Name: {cache_name}")
        else:
            session = requests.Session()
            logger.debug("HTTP Caching disabled.")

        session.headers.update(COMMON_HEADERS)
        session.headers["User-Agent"] = DEFAULT_USER_AGENT
        return session

    def fetch(self, url: str, user_agent: str, headers: Optional[Dict[str, str]] = None,
              timeout: int = DEFAULT_TIMEOUT_SECONDS) -> str:
        request_headers = dict(self.session.headers) # Start with session defaults
        if user_agent:
            request_headers["User-Agent"] = user_agent
        if headers: # Apply any request-specific headers
            request_headers.update(headers)

        logger.debug(f"Making GET request to {url}, UA: {request_headers['User-Agent']}, timeout: {timeout}s")

        try:
            response = self.session.get(url, headers=request_headers, timeout=timeout)
            response.raise_for_status()
        except requests.exceptions.Timeout as e:
            logger.error(f"Timeout while requesting {url}: {e}")
            raise FetchError(f"Timeout for {url}: {e}", url=url) from e
        except requests.exceptions.ConnectionError as e:
            logger.error(f"Connection error while requesting {url}: {e}")
            raise FetchError(f"Connection error for {url}: {e}", url=url) from e
        except requests.exceptions.HTTPError as e: # Raised by raise_for_status()
            status_code = e.response.status_code if e.response is not None else None
            logger.error(f"HTTP error {status_code} for {url}")
            raise HTTPError(f"HTTP error for {url}", status_code=status_code, url=url) from e
        except requests.exceptions.RequestException as e: # Catch-all for other requests issues
            logger.error(f"Request exception for {url}: {e}")
            raise FetchError(f"Request failed for {url}: {e}", url=url) from e

        logger.info(f"Successfully fetched {url}. Status: {response.status_code}. Cached: {getattr(response, 'from_cache', False)}")
        return response.text

    def close(self):
        """Clean up resources."""
        logger.debug("Closing RequestManager session.")
        self.session.close()
