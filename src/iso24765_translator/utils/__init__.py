"""
Utility module for the glossary translator.

Submodules:
    progress: Rich-based live progress display and run summaries.
"""

from .progress import (
    TranslationProgressDisplay,
    format_duration,
    print_run_summary,
    print_validation_summary,
)
