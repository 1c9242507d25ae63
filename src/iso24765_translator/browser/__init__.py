"""
Browser module for the glossary translator.

This module drives Chrome's built-in Translator API through Selenium and
exposes it as a TranslationGateway.

Submodules:
    selenium_handler: WebDriver setup, cleanup and API probes.
    chrome_translator: ChromeTranslatorGateway implementation.
"""

from .selenium_handler import (
    initialize_webdriver,
    is_translator_api_available,
    get_chrome_version,
)
from .chrome_translator import ChromeTranslatorGateway
