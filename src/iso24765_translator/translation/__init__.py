"""
Translation submodule for the glossary translator.

This submodule provides English to Japanese translation of glossary terms
through an injectable gateway, with support for:
- Domain context wrapping and unwrapping
- Per-field retry with exponential backoff and source-text fallback
- Batched runs with checkpoints and adaptive pacing
- Resuming from a checkpoint

Author: Leonardo Pacciani-Mori
License: MIT
"""

from .context import wrap, unwrap, CONTEXT_PREFIX, CONTEXT_TEMPLATE
from .gateway import TranslationGateway, TranslationOutcome
from .status import RunStatus, RunStatistics
from .term_translator import TermTranslator, TermTranslation, FieldFailure
from .processor import BatchProcessor, ProcessorConfig
from .resume import resume, remaining_terms, find_extraneous, find_stale

__all__ = [
    # Context wrapping
    "wrap",
    "unwrap",
    "CONTEXT_PREFIX",
    "CONTEXT_TEMPLATE",
    # Gateway interface
    "TranslationGateway",
    "TranslationOutcome",
    # Run status
    "RunStatus",
    "RunStatistics",
    # Term translation
    "TermTranslator",
    "TermTranslation",
    "FieldFailure",
    # Batch processing
    "BatchProcessor",
    "ProcessorConfig",
    # Resume
    "resume",
    "remaining_terms",
    "find_extraneous",
    "find_stale",
]
