"""
Configuration settings for the glossary translator.

This module centralizes all configuration constants, file paths, and
default values used throughout the pipeline. Settings are grouped by
their functional area for easy maintenance.

Configuration includes:
    - Dataset, output and report file paths
    - Batch processing and checkpoint settings
    - Retry and adaptive pacing settings
    - Translation (language pair, context, length limit) settings
    - Chrome/Selenium settings for the Translator API

Note:
    Most values can be overridden through environment variables so the
    same code runs on a workstation and inside a container.

Author: Leonardo Pacciani-Mori
License: MIT
"""

import os


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


# =============================================================================
# FILE PATHS
# =============================================================================

# English glossary extracted from ISO/IEC/IEEE 24765.
DEFAULT_INPUT_PATH = os.getenv(
    "GLOSSARY_INPUT_PATH", "input/iso24765-terminology.json"
)

# Bilingual glossary produced by the translate and resume commands.
DEFAULT_OUTPUT_PATH = os.getenv(
    "GLOSSARY_OUTPUT_PATH", "output/iso24765-translated-terminology.json"
)

# Plain-text report produced by the validate command.
DEFAULT_REPORT_PATH = os.getenv(
    "GLOSSARY_REPORT_PATH", "output/validation-report.txt"
)

# Checkpoint files are written next to the output file using this suffix,
# e.g. "iso24765-translated-terminology.backup-100.json".
CHECKPOINT_SUFFIX_TEMPLATE = ".backup-{count}"

# =============================================================================
# BATCH PROCESSING CONFIGURATION
# =============================================================================

# Number of terms translated concurrently per batch.
# Kept small to bound the load on the browser translation session.
BATCH_SIZE = int(os.getenv("GLOSSARY_BATCH_SIZE", "10"))

# A checkpoint is written every time this many terms have been completed.
CHECKPOINT_INTERVAL = int(os.getenv("GLOSSARY_CHECKPOINT_INTERVAL", "100"))

# Number of error messages shown in the end-of-run statistics.
ERROR_SUMMARY_LIMIT = 10

# =============================================================================
# RETRY AND PACING CONFIGURATION
# =============================================================================

# Total attempts per sub-field translation before falling back to the source.
TRANSLATION_RETRY_COUNT = int(os.getenv("GLOSSARY_RETRY_COUNT", "3"))

# Base delay in seconds for exponential backoff between attempts.
TRANSLATION_RETRY_DELAY = float(os.getenv("GLOSSARY_RETRY_DELAY", "1.0"))

# Base delay in seconds inserted between batches.
BATCH_BASE_DELAY = float(os.getenv("GLOSSARY_BASE_DELAY", "1.0"))

# Failure-rate thresholds and multipliers for the adaptive batch delay.
# These are tuning knobs, not properties of the Translator API.
MODERATE_FAILURE_RATE = 0.1
HIGH_FAILURE_RATE = 0.2
MODERATE_DELAY_FACTOR = 2
HIGH_DELAY_FACTOR = 3

# =============================================================================
# TRANSLATION CONFIGURATION
# =============================================================================

SOURCE_LANGUAGE = "en"
TARGET_LANGUAGE = "ja"

# Longest text (after context wrapping) sent to the Translator API.
MAX_TEXT_LENGTH = 5000

# =============================================================================
# BROWSER CONFIGURATION
# =============================================================================

# The Translator API is not exposed in headless Chrome, so the browser is
# visible unless explicitly requested otherwise.
TRANSLATOR_HEADLESS = _env_flag("TRANSLATOR_HEADLESS", "false")

# Page opened before the Translator API is probed. The API requires a
# secure context, so about:blank is not sufficient.
TRANSLATOR_START_URL = os.getenv("TRANSLATOR_START_URL", "https://www.google.com")

# Seconds to wait after the start page has loaded.
TRANSLATOR_PAGE_SETTLE_DELAY = float(os.getenv("TRANSLATOR_PAGE_SETTLE_DELAY", "2.0"))

# Timeout in seconds for a single execute_async_script call.
TRANSLATOR_SCRIPT_TIMEOUT = int(os.getenv("TRANSLATOR_SCRIPT_TIMEOUT", "60"))

# Timeout in seconds for the start page load.
TRANSLATOR_PAGE_LOAD_TIMEOUT = int(os.getenv("TRANSLATOR_PAGE_LOAD_TIMEOUT", "30"))

# Persistent profile directory, so the on-device language model is
# downloaded only once.
TRANSLATOR_PROFILE_DIR = os.getenv(
    "TRANSLATOR_PROFILE_DIR", "/tmp/chrome-translator-profile"
)

# Chrome flags that expose the Translator API.
TRANSLATOR_CHROME_FLAGS = [
    "--enable-experimental-web-platform-features",
    "--enable-features=TranslationAPI",
    "--enable-blink-features=TranslationAPI",
    "--no-sandbox",
    "--disable-dev-shm-usage",
]

TRANSLATOR_WINDOW_SIZE = "1280,720"
