"""
Configuration module for the glossary translator.

This module provides centralized configuration settings and logging setup
used throughout the pipeline.

Submodules:
    settings: All configuration constants, file paths, and defaults.
    logging_config: Centralized logging configuration.
"""

from .settings import *
from .logging_config import setup_logging
