"""
Logging configuration for the glossary translator.

This module provides centralized logging setup used across all pipeline
components. It configures consistent log formatting, log levels, and
handlers for the entire application.

The logging configuration follows these conventions:
    - Consistent timestamp format across all modules
    - Module name included in log messages for traceability
    - Log level indicator for quick scanning
    - Suppression of verbose third-party library logs

Usage:
    from iso24765_translator.config.logging_config import setup_logging, get_logger

    # At application startup
    setup_logging()

    # In each module
    logger = get_logger(__name__)
    logger.info("Processing started")

Author: Leonardo Pacciani-Mori
License: MIT
"""

import logging
import sys
from typing import Optional


# =============================================================================
# DEFAULT CONFIGURATION
# =============================================================================

# Default log format string.
# Includes: timestamp, logger name, log level, and the actual message.
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Default date format for timestamps in log messages.
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Default logging level for the application.
DEFAULT_LOG_LEVEL = logging.INFO

# Third-party loggers that are lowered to WARNING by default.
THIRD_PARTY_LOGGERS = [
    # Selenium WebDriver status messages
    "selenium",
    "selenium.webdriver",
    "selenium.webdriver.remote.remote_connection",

    # HTTP plumbing used by the WebDriver client
    "urllib3",
    "urllib3.connectionpool",

    # Async event loop debugging
    "asyncio",
]


# =============================================================================
# FUNCTION DEFINITIONS
# =============================================================================

def setup_logging(
    level: int = DEFAULT_LOG_LEVEL,
    log_format: str = DEFAULT_LOG_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
    suppress_third_party: bool = True
) -> None:
    """
    Configure logging for the entire application.

    This function sets up the root logger with consistent formatting and
    optionally suppresses verbose logging from third-party libraries.
    It should be called once at application startup, before any logging
    calls are made.

    Args:
        level: The logging level threshold. Defaults to INFO.
        log_format: The format string for log messages.
        date_format: The strftime format string for timestamps.
        suppress_third_party: If True, sets Selenium, urllib3 and asyncio
            loggers to WARNING level to reduce noise.

    Example:
        >>> setup_logging(level=logging.DEBUG)
        >>> logger = get_logger(__name__)
        >>> logger.debug("Debug message will now be shown")
    """
    logging.basicConfig(
        level=level,
        format=log_format,
        datefmt=date_format,
        handlers=[
            # Progress bars render on stderr, so log lines go to stdout.
            logging.StreamHandler(sys.stdout)
        ],
        force=True,
    )

    if suppress_third_party:
        _suppress_third_party_logging()


def _suppress_third_party_logging() -> None:
    """Set the loggers listed in THIRD_PARTY_LOGGERS to WARNING."""
    for logger_name in THIRD_PARTY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    The returned logger inherits settings from the root logger configured
    by setup_logging(). It should be called at module level with __name__.

    Args:
        name: The name of the logger, typically the module's __name__.
            If None, returns the root logger.

    Returns:
        logging.Logger: A logger instance for the specified name.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Translating term %s", "3.2")
        2025-01-15 10:30:45 - iso24765_translator.translation.processor - INFO - Translating term 3.2
    """
    return logging.getLogger(name)
