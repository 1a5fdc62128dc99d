# src/compat_scraper/exceptions.py

class ScraperException(Exception):
    """Base exception for the compatibility scraper."""
    pass

class ConfigurationError(ScraperException):
    """Error related to configuration loading or vendor profile validation."""
    pass

class FetchError(ScraperException):
    """A page could not be retrieved (connection, timeout, bad status, browser startup)."""
    def __init__(self, message, url=None):
        super().__init__(message)
        self.url = url

class HTTPError(FetchError):
    """Error specific to HTTP responses (e.g., 4xx, 5xx status codes)."""
    def __init__(self, message, status_code=None, url=None):
        super().__init__(message, url=url)
        self.status_code = status_code

    def __str__(self):
        return f"{super().__str__()} (Status: {self.status_code}, URL: {self.url})"


class BrowserError(FetchError):
    """Error related to the Selenium browser strategy."""
    pass

class BlockedContentError(FetchError):
    """The response arrived but lacks the expected content marker (likely a bot wall)."""
    pass

class DataValidationError(ScraperException):
    """A snapshot document does not satisfy the record or count invariants."""
    pass

class StorageError(ScraperException):
    """Error writing a snapshot document to disk."""
    pass
