"""
Validation of translated glossary datasets.

The validator compares an original dataset with its translation and runs
four independent passes:

    - Structural: matching ids and counts, required fields, and parallel
      cardinality of the optional "_ja" fields.
    - Content: empty translations, translations identical to the source,
      and suspicious patterns (context remnants, runaway length, markup).
    - Completeness: optional source fields whose "_ja" counterpart is
      missing. Reported as warnings only.
    - Quality: duplicate translated headwords and suspiciously short
      translations.

Errors make a dataset invalid; warnings flag items for human review.
Inputs may be model objects or raw JSON records. Malformed records are
reported, never raised.

Author: Leonardo Pacciani-Mori
License: MIT
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..config.logging_config import get_logger
from ..core.dataset import load_json_array
from ..core.exceptions import DatasetError
from ..core.models import (
    ALIAS_JA_KEYS,
    ALIAS_KEYS,
    ID_KEYS,
    RELATED_JA_KEYS,
    RELATED_KEYS,
)
from ..translation.context import find_context_remnants

# Module-level logger for consistent logging.
logger = get_logger(__name__)

# Characters that should not appear in a translated headword.
MARKUP_CHARACTERS = ("&", "<", ">")

# name_ja longer than this multiple of name is reported.
MAX_LENGTH_RATIO = 3

# name_ja shorter than SHORT_TRANSLATION_LENGTH is reported when name is
# longer than SHORT_SOURCE_LENGTH.
SHORT_TRANSLATION_LENGTH = 2
SHORT_SOURCE_LENGTH = 5


@dataclass
class ValidationStatistics:
    total_words: int = 0
    translated_words: int = 0
    missing_translations: int = 0
    empty_translations: int = 0

    @property
    def completion_rate(self) -> float:
        """Percentage of original terms with a non-empty translated headword."""
        if self.total_words == 0:
            return 0.0
        return (self.translated_words - self.empty_translations) / self.total_words * 100


@dataclass
class ValidationResult:
    """Outcome of one validation run. is_valid is True iff errors is empty."""
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    statistics: ValidationStatistics = field(default_factory=ValidationStatistics)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# =============================================================================
# RECORD ACCESS HELPERS
# =============================================================================

def _as_record(item: Any) -> Dict[str, Any]:
    if hasattr(item, "to_dict"):
        return item.to_dict()
    if isinstance(item, dict):
        return item
    return {}


def _get(record: Dict[str, Any], keys: Tuple[str, ...]) -> Any:
    for key in keys:
        if key in record:
            return record[key]
    return None


def _term_id(record: Dict[str, Any]) -> Optional[str]:
    value = _get(record, ID_KEYS)
    return value if isinstance(value, str) and value else None


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _definitions(record: Dict[str, Any]) -> List[Dict[str, Any]]:
    value = record.get("definitions")
    if not isinstance(value, list):
        return []
    return [d if isinstance(d, dict) else {} for d in value]


def _unique(values: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(values))


def _index_by_id(records: List[Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    # Later records win, matching the "last write" semantics of a JSON map.
    return {tid: r for r in records if (tid := _term_id(r)) is not None}


# =============================================================================
# VALIDATION PASSES
# =============================================================================

def validate_term_structure(record: Dict[str, Any]) -> List[str]:
    """Required fields and "_ja" parity for one translated record."""
    errors = []
    term_id = _term_id(record)
    label = term_id or "unknown"

    if not term_id:
        errors.append("Term missing number field")
    if not _text(record.get("name")):
        errors.append(f"Term {label} missing name field")
    if not _text(record.get("name_ja")):
        errors.append(f"Term {label} missing name_ja field")

    definitions = record.get("definitions")
    if not isinstance(definitions, list) or not definitions:
        errors.append(f"Term {label} missing or empty definitions")

    for index, definition in enumerate(_definitions(record), start=1):
        if not _text(definition.get("text")):
            errors.append(f"Term {label} definition {index} missing text")
        if not _text(definition.get("text_ja")):
            errors.append(f"Term {label} definition {index} missing text_ja")

    for source_keys, translated_keys, name in (
        (ALIAS_KEYS, ALIAS_JA_KEYS, "alias"),
        (RELATED_KEYS, RELATED_JA_KEYS, "confer"),
    ):
        source = _get(record, source_keys)
        translated = _get(record, translated_keys)
        malformed = False
        for key, value in ((name, source), (f"{name}_ja", translated)):
            if value is not None and not isinstance(value, list):
                errors.append(f"Term {label} {key} is not a list")
                malformed = True
        if malformed:
            continue
        # Empty lists count as absent.
        if (source or translated) and len(source or []) != len(translated or []):
            errors.append(f"Term {label} {name} and {name}_ja length mismatch")

    for name in ("example", "note"):
        source = record.get(name)
        translated = record.get(f"{name}_ja")
        if source and not translated:
            errors.append(f"Term {label} has {name} but missing {name}_ja")
        elif translated and not source:
            errors.append(f"Term {label} has {name}_ja but missing {name}")

    return errors


def validate_structure(
    original: List[Dict[str, Any]],
    translated: List[Dict[str, Any]],
) -> Tuple[List[str], List[str]]:
    """Counts, missing and extra ids, and per-record structure."""
    errors: List[str] = []
    warnings: List[str] = []

    if len(original) != len(translated):
        errors.append(
            f"Data length mismatch: original has {len(original)} terms, "
            f"translated has {len(translated)} terms"
        )

    original_ids = _unique(tid for r in original if (tid := _term_id(r)) is not None)
    translated_ids = _unique(tid for r in translated if (tid := _term_id(r)) is not None)
    original_set = set(original_ids)
    translated_set = set(translated_ids)

    for term_id in original_ids:
        if term_id not in translated_set:
            errors.append(f"Missing translated term: {term_id}")

    for term_id in translated_ids:
        if term_id not in original_set:
            warnings.append(f"Extra translated term found: {term_id}")

    for record in translated:
        errors.extend(validate_term_structure(record))

    return errors, warnings


def check_suspicious_patterns(record: Dict[str, Any]) -> List[str]:
    """Context remnants, runaway length and markup in name_ja."""
    warnings = []
    label = _term_id(record) or "unknown"
    name = _text(record.get("name"))
    name_ja = _text(record.get("name_ja"))

    for _ in find_context_remnants(name_ja):
        warnings.append(f"Term {label} name_ja contains context prefix remnant")

    if len(name_ja) > len(name) * MAX_LENGTH_RATIO:
        warnings.append(f"Term {label} name_ja unusually long compared to original")

    if any(char in name_ja for char in MARKUP_CHARACTERS):
        warnings.append(f"Term {label} name_ja contains HTML entities or special characters")

    return warnings


def validate_content(translated: List[Dict[str, Any]]) -> Tuple[List[str], List[str]]:
    """Empty and identical translations plus suspicious patterns."""
    errors: List[str] = []
    warnings: List[str] = []

    for record in translated:
        label = _term_id(record) or "unknown"
        name = _text(record.get("name"))
        name_ja = record.get("name_ja")

        if isinstance(name_ja, str):
            if not name_ja.strip():
                errors.append(f"Term {label} has empty name_ja")
            elif name_ja == name:
                warnings.append(f'Term {label} name_ja identical to original name: "{name}"')

        for index, definition in enumerate(_definitions(record), start=1):
            text_ja = definition.get("text_ja")
            if not isinstance(text_ja, str):
                continue
            if not text_ja.strip():
                errors.append(f"Term {label} definition {index} has empty text_ja")
            elif text_ja == definition.get("text"):
                warnings.append(f"Term {label} definition {index} text_ja identical to original text")

        warnings.extend(check_suspicious_patterns(record))

    return errors, warnings


def validate_completeness(
    original: List[Dict[str, Any]],
    translated: List[Dict[str, Any]],
) -> Tuple[List[str], List[str]]:
    """
    Optional source fields without a "_ja" counterpart.

    Always warnings: a fallback to the source text still satisfies the
    structural contract even when a field is semantically untranslated.
    Missing terms are reported by the structural pass.
    """
    warnings: List[str] = []
    translated_by_id = _index_by_id(translated)

    for record in original:
        term_id = _term_id(record)
        candidate = translated_by_id.get(term_id) if term_id else None
        if candidate is None:
            continue

        checks = (
            ("alias", _get(record, ALIAS_KEYS), _get(candidate, ALIAS_JA_KEYS)),
            ("confer", _get(record, RELATED_KEYS), _get(candidate, RELATED_JA_KEYS)),
            ("example", record.get("example"), candidate.get("example_ja")),
            ("note", record.get("note"), candidate.get("note_ja")),
        )
        for name, source_value, translated_value in checks:
            if source_value and not translated_value:
                warnings.append(
                    f"Term {term_id} original has {name} but translation is missing {name}_ja"
                )

    return [], warnings


def validate_quality(translated: List[Dict[str, Any]]) -> Tuple[List[str], List[str]]:
    """Duplicate and suspiciously short translated headwords."""
    warnings: List[str] = []

    groups: Dict[str, List[str]] = {}
    for record in translated:
        key = _text(record.get("name_ja")).strip().lower()
        groups.setdefault(key, []).append(_term_id(record) or "unknown")

    for translation, term_ids in groups.items():
        if len(term_ids) > 1 and translation != "":
            warnings.append(
                f'Duplicate translation "{translation}" found in terms: {", ".join(term_ids)}'
            )

    for record in translated:
        name = _text(record.get("name"))
        name_ja = _text(record.get("name_ja"))
        if len(name_ja) < SHORT_TRANSLATION_LENGTH and len(name) > SHORT_SOURCE_LENGTH:
            warnings.append(
                f'Term {_term_id(record) or "unknown"} has very short translation: "{name_ja}"'
            )

    return [], warnings


def calculate_statistics(
    original: List[Dict[str, Any]],
    translated: List[Dict[str, Any]],
) -> ValidationStatistics:
    translated_by_id = _index_by_id(translated)
    missing = 0
    empty = 0

    for record in original:
        term_id = _term_id(record)
        candidate = translated_by_id.get(term_id) if term_id else None
        if candidate is None:
            missing += 1
        elif not _text(candidate.get("name_ja")).strip():
            empty += 1

    return ValidationStatistics(
        total_words=len(original),
        translated_words=len(translated),
        missing_translations=missing,
        empty_translations=empty,
    )


# =============================================================================
# ENTRY POINT
# =============================================================================

def validate(original: Iterable[Any], translated: Iterable[Any]) -> ValidationResult:
    """
    Validate a translated dataset against its original.

    Args:
        original: Term objects or raw original records.
        translated: TranslatedTerm objects or raw translated records.

    Returns:
        ValidationResult with errors, warnings and statistics. The same
        inputs always produce the same result.
    """
    original_records = [_as_record(item) for item in original]
    translated_records = [_as_record(item) for item in translated]

    errors: List[str] = []
    warnings: List[str] = []

    for pass_errors, pass_warnings in (
        validate_structure(original_records, translated_records),
        validate_content(translated_records),
        validate_completeness(original_records, translated_records),
        validate_quality(translated_records),
    ):
        errors.extend(pass_errors)
        warnings.extend(pass_warnings)

    statistics = calculate_statistics(original_records, translated_records)
    logger.info(
        f"Validation finished: {len(errors)} errors, {len(warnings)} warnings "
        f"over {statistics.total_words} terms"
    )

    return ValidationResult(
        is_valid=not errors,
        errors=errors,
        warnings=warnings,
        statistics=statistics,
    )


def validate_files(original_path, translated_path) -> ValidationResult:
    """
    Load two dataset files and validate them.

    A file that cannot be loaded produces an invalid result with a single
    error and zero statistics instead of an exception.
    """
    try:
        original = load_json_array(original_path)
        translated = load_json_array(translated_path)
    except DatasetError as e:
        logger.error(f"Validation failed: {e}")
        return ValidationResult(
            is_valid=False,
            errors=[f"Failed to load files: {e}"],
        )
    return validate(original, translated)
