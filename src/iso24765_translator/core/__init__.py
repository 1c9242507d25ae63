"""
Core module for the glossary translator.

This module provides the data model, dataset I/O and exception hierarchy
shared by the translation pipeline and the validator.

Submodules:
    exceptions: Fatal and recoverable error classes.
    models: Term and TranslatedTerm dataclasses with JSON conversion.
    dataset: JSON loading, atomic saving and checkpoint path helpers.
"""

from .exceptions import (
    GlossaryTranslatorError,
    ConfigurationError,
    DatasetError,
    GatewayUnavailableError,
    TranslationError,
    TextTooLongError,
)
from .models import Definition, Term, TranslatedDefinition, TranslatedTerm
from .dataset import (
    load_json_array,
    load_terms,
    load_translated_terms,
    save_translated_terms,
    write_json_atomic,
    checkpoint_path,
)
