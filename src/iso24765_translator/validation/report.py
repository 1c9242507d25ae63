"""
Plain-text validation report.

Author: Leonardo Pacciani-Mori
License: MIT
"""

from pathlib import Path
from typing import Union

from ..config.logging_config import get_logger
from .validator import ValidationResult

# Module-level logger for consistent logging.
logger = get_logger(__name__)

# Warnings beyond this count are summarized in a single line.
MAX_REPORTED_WARNINGS = 50


def generate_report(result: ValidationResult) -> str:
    """
    Render a ValidationResult as text.

    Every error is listed; warnings are truncated to the first
    MAX_REPORTED_WARNINGS entries.
    """
    stats = result.statistics
    lines = [
        "=== Translation Validation Report ===",
        "",
        f"Status: {'VALID' if result.is_valid else 'INVALID'}",
        f"Total Errors: {len(result.errors)}",
        f"Total Warnings: {len(result.warnings)}",
        "",
        "=== Statistics ===",
        f"Total Words: {stats.total_words}",
        f"Translated Words: {stats.translated_words}",
        f"Missing Translations: {stats.missing_translations}",
        f"Empty Translations: {stats.empty_translations}",
        f"Completion Rate: {stats.completion_rate:.1f}%",
        "",
    ]

    if result.errors:
        lines.append("=== Errors ===")
        lines.extend(f"{index}. {error}" for index, error in enumerate(result.errors, start=1))
        lines.append("")

    if result.warnings:
        lines.append("=== Warnings ===")
        shown = result.warnings[:MAX_REPORTED_WARNINGS]
        lines.extend(f"{index}. {warning}" for index, warning in enumerate(shown, start=1))
        if len(result.warnings) > MAX_REPORTED_WARNINGS:
            lines.append(f"... and {len(result.warnings) - MAX_REPORTED_WARNINGS} more warnings")
        lines.append("")

    return "\n".join(lines) + "\n"


def save_report(result: ValidationResult, file_path: Union[str, Path]) -> None:
    """Write the report as UTF-8 text, creating parent directories."""
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(generate_report(result), encoding="utf-8")
    logger.info(f"Validation report saved to: {path}")
