# src/compat_scraper/extractors/browser.py
import logging
from contextlib import contextmanager
from typing import Optional, Dict, Any, Iterator

from selenium import webdriver
from selenium.webdriver.chrome.service import Service as ChromeService
from selenium.webdriver.firefox.service import Service as FirefoxService

from ..constants import DEFAULT_TIMEOUT_SECONDS
from ..exceptions import BrowserError

logger = logging.getLogger(__name__)

def _driver_pid(driver: webdriver.Remote) -> Any:
    service = getattr(driver, "service", None)
    process = getattr(service, "process", None)
    return process.pid if process is not None else "N/A"

def create_driver(selenium_config: Dict[str, Any], user_agent: Optional[str] = None,
                  page_load_timeout: int = DEFAULT_TIMEOUT_SECONDS) -> webdriver.Remote:
    """Starts a WebDriver according to `advanced.selenium` config. Raises BrowserError on failure."""
    browser_type = selenium_config.get("browser_type", "chrome").lower() # chrome or firefox
    headless = selenium_config.get("headless", True)
    driver_path = selenium_config.get("driver_path") # e.g., path to chromedriver

    logger.info(f"Creating Selenium WebDriver instance (Type: {browser_type}, Headless: {headless})...")
    driver: Optional[webdriver.Remote] = None
    try:
        if browser_type == "chrome":
            options = webdriver.ChromeOptions()
            if headless:
                options.add_argument("--headless=new")
            options.add_argument("--no-sandbox")
            options.add_argument("--disable-dev-shm-usage")
            options.add_argument("--disable-gpu") # Often recommended for headless
            if user_agent:
                options.add_argument(f"--user-agent={user_agent}")

            if driver_path:
                driver = webdriver.Chrome(service=ChromeService(executable_path=driver_path), options=options)
            else:
                driver = webdriver.Chrome(options=options)

        elif browser_type == "firefox":
            options = webdriver.FirefoxOptions()
            if headless:
                options.add_argument("--headless")
            if user_agent:
                options.set_preference("general.useragent.override", user_agent)

            if driver_path: # Path to geckodriver
                driver = webdriver.Firefox(service=FirefoxService(executable_path=driver_path), options=options)
            else:
                driver = webdriver.Firefox(options=options)
        else:
            raise BrowserError(f"Unsupported browser type: {browser_type}")

        driver.set_page_load_timeout(page_load_timeout)
        logger.info(f"WebDriver instance created successfully. (PID: {_driver_pid(driver)})")
        return driver

    except BrowserError:
        raise
    except Exception as e:
        logger.error(f"Failed to create Selenium WebDriver (Type: {browser_type}): {e}")
        if driver: # Ensure cleanup if partial creation failed
            quit_driver(driver)
        raise BrowserError(f"Failed to create WebDriver: {e}") from e


def quit_driver(driver: webdriver.Remote) -> None:
    """Terminates the browser process; errors are logged, not raised."""
    logger.info(f"Closing WebDriver instance (PID: {_driver_pid(driver)})...")
    try:
        driver.quit()
    except Exception as e:
        logger.error(f"Error quitting WebDriver: {e}")


@contextmanager
def browser_session(selenium_config: Dict[str, Any], user_agent: Optional[str] = None,
                    page_load_timeout: int = DEFAULT_TIMEOUT_SECONDS) -> Iterator[webdriver.Remote]:
    """Yields a fresh WebDriver and always quits it, whatever happens inside the block."""
    driver = create_driver(selenium_config, user_agent=user_agent, page_load_timeout=page_load_timeout)
    try:
        yield driver
    finally:
        quit_driver(driver)
