"""
Selenium WebDriver utilities for the Chrome Translator API.

Chrome exposes its on-device Translator API only to pages running in a
browser started with the right feature flags. This module starts such a
browser through Selenium and offers small probes on top of it.

Key features:
    - Chrome with the Translator API feature flags enabled
    - Persistent profile so the language model is downloaded only once
    - Driver shutdown that logs instead of raising
    - Availability and version probes

Author: Leonardo Pacciani-Mori
License: MIT
"""

import os
import pathlib
import tempfile
from typing import List, Optional, Tuple

from selenium import webdriver
from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.chrome.service import Service as ChromeService

from ..config.logging_config import get_logger
from ..config.settings import (
    TRANSLATOR_CHROME_FLAGS,
    TRANSLATOR_HEADLESS,
    TRANSLATOR_PAGE_LOAD_TIMEOUT,
    TRANSLATOR_PROFILE_DIR,
    TRANSLATOR_SCRIPT_TIMEOUT,
    TRANSLATOR_WINDOW_SIZE,
)

# Initialize module logger
logger = get_logger(__name__)

TRANSLATOR_AVAILABLE_SCRIPT = (
    'return "Translator" in window && typeof window.Translator.create === "function";'
)

CHROME_VERSION_SCRIPT = (
    "const match = navigator.userAgent.match(/Chrome\\/(\\d+\\.\\d+\\.\\d+\\.\\d+)/);"
    'return match ? match[1] : "unknown";'
)


def _prepare_profile_dir(profile_dir: Optional[str] = None) -> Tuple[str, bool]:
    """
    Return a writable Chrome profile directory.

    Returns:
        Tuple of (path, whether the caller should delete it afterwards).
        The configured directory is reused across runs; a temporary one is
        created only when it is not writable.
    """
    profile_dir = profile_dir or TRANSLATOR_PROFILE_DIR
    if profile_dir:
        path = pathlib.Path(profile_dir)
        try:
            path.mkdir(parents=True, exist_ok=True)
            test_path = path / ".write_test"
            test_path.write_text("ok")
            test_path.unlink(missing_ok=True)
            return str(path), False
        except OSError as exc:
            logger.warning(
                f"Profile directory '{profile_dir}' is not writable; "
                f"using a temp profile ({exc})."
            )

    temp_dir = tempfile.mkdtemp(prefix="chrome-translator-profile-")
    return temp_dir, True


def build_chrome_options(
    headless: bool = TRANSLATOR_HEADLESS,
    profile_dir: Optional[str] = None,
    extra_flags: Optional[List[str]] = None,
) -> ChromeOptions:
    """Chrome options with the Translator API flags applied."""
    options = ChromeOptions()

    if headless:
        # The Translator API is usually missing in headless mode; allowed
        # for environments where it has been verified to work.
        options.add_argument("--headless=new")

    options.add_argument(f"--window-size={TRANSLATOR_WINDOW_SIZE}")
    options.add_argument("--lang=en-US")
    for flag in TRANSLATOR_CHROME_FLAGS + list(extra_flags or []):
        options.add_argument(flag)

    if profile_dir:
        options.add_argument(f"--user-data-dir={profile_dir}")

    chrome_bin = os.getenv("CHROME_BIN")
    if chrome_bin:
        options.binary_location = chrome_bin

    return options


def initialize_webdriver(
    headless: bool = TRANSLATOR_HEADLESS,
    profile_dir: Optional[str] = None,
) -> webdriver.Chrome:
    """
    Initialize and return a Chrome WebDriver with the Translator API enabled.

    The driver should be closed when no longer needed to free resources.

    Args:
        headless: If True, runs the browser without a visible window.
            Defaults to TRANSLATOR_HEADLESS (False).
        profile_dir: Chrome user data directory.

    Returns:
        webdriver.Chrome: A configured WebDriver instance.

    Example:
        >>> driver = initialize_webdriver()
        >>> try:
        ...     driver.get("https://www.google.com")
        ...     print(is_translator_api_available(driver))
        ... finally:
        ...     driver.quit()
    """
    logger.info("Initializing Selenium WebDriver (chrome)")
    options = build_chrome_options(headless=headless, profile_dir=profile_dir)

    chromedriver_path = os.getenv("CHROMEDRIVER_PATH")
    if chromedriver_path:
        service = ChromeService(executable_path=chromedriver_path)
        driver = webdriver.Chrome(service=service, options=options)
    else:
        driver = webdriver.Chrome(options=options)

    driver.set_page_load_timeout(TRANSLATOR_PAGE_LOAD_TIMEOUT)
    driver.set_script_timeout(TRANSLATOR_SCRIPT_TIMEOUT)
    return driver


def quit_driver(driver: Optional[webdriver.Remote]) -> None:
    """Quit a driver, logging instead of raising on failure."""
    if driver is None:
        return
    try:
        driver.quit()
    except Exception as e:
        logger.warning(f"Error closing WebDriver: {str(e)}")


def is_translator_api_available(driver: webdriver.Remote) -> bool:
    """Whether the loaded page exposes window.Translator.create()."""
    try:
        return bool(driver.execute_script(TRANSLATOR_AVAILABLE_SCRIPT))
    except Exception as e:
        logger.error(f"Error checking Translator API availability: {str(e)}")
        return False


def get_chrome_version(driver: webdriver.Remote) -> str:
    """Chrome version from the user agent, or "unknown"."""
    try:
        return driver.execute_script(CHROME_VERSION_SCRIPT) or "unknown"
    except Exception as e:
        logger.warning(f"Error getting Chrome version: {str(e)}")
        return "unknown"
