"""
Validation module for the glossary translator.

This module checks a translated dataset against the English original and
renders the findings as a plain-text report.

Submodules:
    validator: Structural, content, completeness and quality checks.
    report: Report rendering and saving.
"""

from .validator import (
    ValidationResult,
    ValidationStatistics,
    validate,
    validate_files,
)
from .report import generate_report, save_report
