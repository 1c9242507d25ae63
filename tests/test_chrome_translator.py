from __future__ import annotations

import asyncio
import logging
import threading

import pytest

from iso24765_translator.browser import chrome_translator, selenium_handler
from iso24765_translator.browser.chrome_translator import ChromeTranslatorGateway
from iso24765_translator.core.exceptions import GatewayUnavailableError, TranslationError


class DummyDriver:
    def __init__(self, available=True, create_response=None, translate_fn=None):
        self.available = available
        self.create_response = create_response or {"ok": True}
        self.translate_fn = translate_fn or (lambda text: {"ok": True, "result": f"訳:{text}"})
        self.urls = []
        self.async_calls = []
        self.quit_calls = 0
        self.events = []

    def get(self, url):
        self.urls.append(url)

    def execute_script(self, script, *args):
        if script == selenium_handler.TRANSLATOR_AVAILABLE_SCRIPT:
            return self.available
        if script == selenium_handler.CHROME_VERSION_SCRIPT:
            return "131.0.6778.85"
        return None

    def execute_async_script(self, script, *args):
        self.async_calls.append((script, args))
        if script == chrome_translator.CREATE_TRANSLATOR_SCRIPT:
            return self.create_response
        return self.translate_fn(args[0])

    def quit(self):
        self.quit_calls += 1
        self.events.append("quit")


def _blocking_driver():
    started = threading.Event()
    release = threading.Event()
    driver = DummyDriver()

    def slow_translate(text):
        started.set()
        release.wait(5)
        driver.events.append("translated")
        return {"ok": True, "result": text}

    driver.translate_fn = slow_translate
    return driver, started, release


def _gateway(tmp_path, driver, **kwargs):
    created = []

    def factory(headless, profile_dir):
        created.append((headless, profile_dir))
        return driver

    gateway = ChromeTranslatorGateway(
        headless=False,
        profile_dir=str(tmp_path / "profile"),
        start_url="https://example.test",
        settle_delay=0,
        driver_factory=factory,
        **kwargs,
    )
    return gateway, created


def test_create_translate_and_close(tmp_path):
    driver = DummyDriver()
    gateway, created = _gateway(tmp_path, driver)

    async def scenario():
        await gateway.create("en", "ja")
        assert gateway.is_ready
        result = await gateway.translate("software")
        await gateway.close()
        await gateway.close()
        return result

    assert asyncio.run(scenario()) == "訳:software"
    assert created == [(False, str(tmp_path / "profile"))]
    assert driver.urls == ["https://example.test"]
    assert driver.async_calls[0] == (chrome_translator.CREATE_TRANSLATOR_SCRIPT, ("en", "ja"))
    assert driver.quit_calls == 1
    assert not gateway.is_ready


def test_missing_translator_api_is_unavailable(tmp_path):
    driver = DummyDriver(available=False)
    gateway, _ = _gateway(tmp_path, driver)

    with pytest.raises(GatewayUnavailableError) as exc_info:
        asyncio.run(gateway.create("en", "ja"))

    assert exc_info.value.code == "api_unavailable"
    assert driver.quit_calls == 1


def test_rejected_language_pair_is_unavailable(tmp_path):
    driver = DummyDriver(create_response={"ok": False, "error": "Unsupported language pair"})
    gateway, _ = _gateway(tmp_path, driver)

    with pytest.raises(GatewayUnavailableError) as exc_info:
        asyncio.run(gateway.create("en", "xx"))

    assert "Unsupported language pair" in str(exc_info.value)


def test_browser_start_failure_is_unavailable(tmp_path):
    def broken_factory(headless, profile_dir):
        raise RuntimeError("chromedriver not found")

    gateway = ChromeTranslatorGateway(
        profile_dir=str(tmp_path / "profile"), settle_delay=0, driver_factory=broken_factory,
    )

    with pytest.raises(GatewayUnavailableError) as exc_info:
        asyncio.run(gateway.create("en", "ja"))

    assert exc_info.value.code == "browser_start_failed"


def test_browser_error_becomes_translation_error(tmp_path):
    driver = DummyDriver(translate_fn=lambda text: {"ok": False, "error": "model not downloaded"})
    gateway, _ = _gateway(tmp_path, driver)

    async def scenario():
        await gateway.create("en", "ja")
        try:
            await gateway.translate("software")
        finally:
            await gateway.close()

    with pytest.raises(TranslationError) as exc_info:
        asyncio.run(scenario())

    assert "model not downloaded" in str(exc_info.value)


def test_translate_before_create_is_rejected(tmp_path):
    gateway, _ = _gateway(tmp_path, DummyDriver())

    with pytest.raises(TranslationError) as exc_info:
        asyncio.run(gateway.translate("software"))

    assert exc_info.value.code == "not_ready"


def test_chrome_options_enable_translator_api(tmp_path):
    options = selenium_handler.build_chrome_options(headless=False, profile_dir=str(tmp_path))

    assert "--enable-features=TranslationAPI" in options.arguments
    assert "--enable-experimental-web-platform-features" in options.arguments
    assert f"--user-data-dir={tmp_path}" in options.arguments
    assert not any(arg.startswith("--headless") for arg in options.arguments)


def test_prepare_profile_dir_reuses_writable_directory(tmp_path):
    path, cleanup = selenium_handler._prepare_profile_dir(str(tmp_path / "profile"))

    assert path == str(tmp_path / "profile")
    assert cleanup is False
    assert list((tmp_path / "profile").iterdir()) == []


def test_close_waits_for_script_of_cancelled_translation(tmp_path):
    driver, started, release = _blocking_driver()
    gateway, _ = _gateway(tmp_path, driver)

    async def scenario():
        await gateway.create("en", "ja")
        task = asyncio.create_task(gateway.translate("software"))
        await asyncio.to_thread(started.wait, 5)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        asyncio.get_running_loop().call_later(0.05, release.set)
        await gateway.close()

    asyncio.run(scenario())

    assert driver.events == ["translated", "quit"]


def test_close_gives_up_waiting_after_timeout(tmp_path, caplog):
    driver, started, release = _blocking_driver()
    gateway, _ = _gateway(tmp_path, driver, shutdown_timeout=0.05)

    async def scenario():
        await gateway.create("en", "ja")
        task = asyncio.create_task(gateway.translate("software"))
        await asyncio.to_thread(started.wait, 5)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        try:
            await gateway.close()
        finally:
            release.set()

    with caplog.at_level(logging.WARNING):
        asyncio.run(scenario())

    assert driver.events[0] == "quit"
    assert "closing browser anyway" in caplog.text
