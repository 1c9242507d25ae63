"""
Translation gateway backed by Chrome's built-in Translator API.

ChromeTranslatorGateway starts one Chrome session through Selenium, opens
a start page, checks that window.Translator is exposed and creates a
single translator instance that is kept on the page for the whole run.
Every translate() call reuses that instance through
execute_async_script.

Selenium is synchronous and a WebDriver session cannot serve two commands
at once, so calls are serialized with an asyncio.Lock and executed in a
worker thread. The event loop stays free while Chrome translates, but
concurrent sub-field translations reach the browser one at a time.
Cancelling a translate() call does not stop its worker thread, so the
WebDriver itself is also guarded by a thread lock and close() waits for a
running script before quitting the browser.

Author: Leonardo Pacciani-Mori
License: MIT
"""

import asyncio
import shutil
import threading
import time
from typing import Any, Callable, Optional

from selenium import webdriver

from ..config.logging_config import get_logger
from ..config.settings import (
    TRANSLATOR_HEADLESS,
    TRANSLATOR_PAGE_SETTLE_DELAY,
    TRANSLATOR_SCRIPT_TIMEOUT,
    TRANSLATOR_START_URL,
)
from ..core.exceptions import GatewayUnavailableError, TranslationError
from ..translation.gateway import TranslationGateway
from .selenium_handler import (
    _prepare_profile_dir,
    get_chrome_version,
    initialize_webdriver,
    is_translator_api_available,
    quit_driver,
)

# Initialize module logger
logger = get_logger(__name__)

# Creates the translator once and keeps it on window for later calls.
CREATE_TRANSLATOR_SCRIPT = """
const [sourceLanguage, targetLanguage, done] = arguments;
window.Translator.create({ sourceLanguage, targetLanguage })
  .then((translator) => {
    if (!translator) {
      done({ ok: false, error: "Failed to create translator instance" });
      return;
    }
    window.__glossaryTranslator = translator;
    done({ ok: true });
  })
  .catch((e) => done({ ok: false, error: String((e && e.message) || e) }));
"""

TRANSLATE_SCRIPT = """
const [text, done] = arguments;
const translator = window.__glossaryTranslator;
if (!translator) {
  done({ ok: false, error: "Translator instance not initialized" });
  return;
}
translator.translate(text)
  .then((result) => done({ ok: true, result }))
  .catch((e) => done({ ok: false, error: String((e && e.message) || e) }));
"""

DESTROY_SCRIPT = """
const translator = window.__glossaryTranslator;
if (translator && typeof translator.destroy === "function") {
  translator.destroy();
}
window.__glossaryTranslator = undefined;
"""

DriverFactory = Callable[[bool, Optional[str]], webdriver.Remote]


class ChromeTranslatorGateway(TranslationGateway):
    """
    TranslationGateway that drives Chrome's Translator API via Selenium.

    Args:
        headless: Run Chrome without a window. The Translator API is
            generally unavailable in headless mode.
        profile_dir: Chrome user data directory. Defaults to
            TRANSLATOR_PROFILE_DIR so the language model persists.
        start_url: Page loaded before probing the API.
        settle_delay: Seconds to wait after the start page has loaded.
        driver_factory: Callable (headless, profile_dir) -> WebDriver,
            replaceable in tests.
        shutdown_timeout: Seconds close() waits for a running script.

    Example:
        >>> gateway = ChromeTranslatorGateway()
        >>> await gateway.create("en", "ja")
        >>> await gateway.translate("software")
        'ソフトウェア'
        >>> await gateway.close()
    """

    def __init__(
        self,
        headless: bool = TRANSLATOR_HEADLESS,
        profile_dir: Optional[str] = None,
        start_url: str = TRANSLATOR_START_URL,
        settle_delay: float = TRANSLATOR_PAGE_SETTLE_DELAY,
        driver_factory: DriverFactory = initialize_webdriver,
        shutdown_timeout: float = TRANSLATOR_SCRIPT_TIMEOUT,
    ):
        self.headless = headless
        self.profile_dir = profile_dir
        self.start_url = start_url
        self.settle_delay = settle_delay
        self._driver_factory = driver_factory
        self.shutdown_timeout = shutdown_timeout
        self._driver: Optional[webdriver.Remote] = None
        self._cleanup_profile_dir: Optional[str] = None
        self._lock: Optional[asyncio.Lock] = None
        self._driver_lock = threading.Lock()
        self._ready = False
        self._closed = False

    @property
    def is_ready(self) -> bool:
        return self._ready and not self._closed

    def _start_session(self, source_language: str, target_language: str) -> None:
        """Blocking part of create(); runs in a worker thread."""
        profile_dir, cleanup = _prepare_profile_dir(self.profile_dir)
        if cleanup:
            self._cleanup_profile_dir = profile_dir

        self._driver = self._driver_factory(self.headless, profile_dir)
        logger.info(f"Loading start page: {self.start_url}")
        self._driver.get(self.start_url)
        if self.settle_delay:
            time.sleep(self.settle_delay)

        if not is_translator_api_available(self._driver):
            raise GatewayUnavailableError(
                "Translator API is not available in this Chrome version",
                code="api_unavailable",
            )

        response = self._driver.execute_async_script(
            CREATE_TRANSLATOR_SCRIPT, source_language, target_language
        )
        if not isinstance(response, dict) or not response.get("ok"):
            error = response.get("error") if isinstance(response, dict) else response
            raise GatewayUnavailableError(
                f"Failed to create translator: {error}",
                code="create_failed",
            )

        logger.info(f"Chrome version: {get_chrome_version(self._driver)}")

    async def create(self, source_language: str, target_language: str) -> None:
        """
        Start Chrome and create the translator for a language pair.

        Raises:
            GatewayUnavailableError: If Chrome cannot start or the
                Translator API is missing or refuses the language pair.
        """
        # Bound to the running loop, not the one active at construction.
        self._lock = asyncio.Lock()
        try:
            await asyncio.to_thread(self._start_session, source_language, target_language)
        except GatewayUnavailableError:
            await self.close()
            raise
        except Exception as e:
            await self.close()
            raise GatewayUnavailableError(
                f"Failed to initialize Chrome Translator: {e}",
                code="browser_start_failed",
            ) from e

        self._ready = True
        logger.info("Chrome Translator initialized successfully")

    def _run_translate(self, text: str) -> Any:
        with self._driver_lock:
            if self._driver is None:
                return {"ok": False, "error": "Browser closed"}
            return self._driver.execute_async_script(TRANSLATE_SCRIPT, text)

    async def translate(self, text: str) -> str:
        """
        Translate text with the translator created by create().

        Raises:
            TranslationError: If the gateway is not ready or the browser
                reports an error.
        """
        if not self.is_ready:
            raise TranslationError("Translator not initialized", code="not_ready")

        async with self._lock:
            try:
                response = await asyncio.to_thread(self._run_translate, text)
            except Exception as e:
                raise TranslationError(
                    f"Browser translation error: {e}", code="gateway_error"
                ) from e

        if not isinstance(response, dict):
            raise TranslationError("Invalid translation result", code="empty_result")
        if not response.get("ok"):
            raise TranslationError(
                f"Browser translation error: {response.get('error', 'Unknown browser error')}",
                code="gateway_error",
            )

        result = response.get("result")
        if not result or not isinstance(result, str):
            raise TranslationError("Invalid translation result", code="empty_result")
        return result

    def _shutdown(self) -> None:
        # A cancelled translate() may still be running its script.
        acquired = self._driver_lock.acquire(timeout=self.shutdown_timeout)
        if not acquired:
            logger.warning(
                f"Translation still running after {self.shutdown_timeout}s, closing browser anyway"
            )
        try:
            driver, self._driver = self._driver, None
            if driver is not None:
                try:
                    driver.execute_script(DESTROY_SCRIPT)
                except Exception as e:
                    logger.debug(f"Could not destroy translator instance: {e}")
                quit_driver(driver)
            if self._cleanup_profile_dir:
                shutil.rmtree(self._cleanup_profile_dir, ignore_errors=True)
                self._cleanup_profile_dir = None
        finally:
            if acquired:
                self._driver_lock.release()

    async def close(self) -> None:
        """Quit Chrome. Further calls are no-ops."""
        if self._closed:
            return
        self._closed = True
        self._ready = False
        if self._lock is None:
            await asyncio.to_thread(self._shutdown)
        else:
            async with self._lock:
                await asyncio.to_thread(self._shutdown)
        logger.info("Browser closed")
