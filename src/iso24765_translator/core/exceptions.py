"""
Exception classes for the glossary translator.

Fatal errors (configuration, dataset, gateway start-up) propagate to the
command line and stop the run. Translation errors are recoverable and are
absorbed by the term translator, which falls back to the source text.

Author: Leonardo Pacciani-Mori
License: MIT
"""


class GlossaryTranslatorError(Exception):
    """Base error with optional code and details."""

    def __init__(self, message: str, code: str = None, details: dict = None):
        super().__init__(message)
        self.code = code
        self.details = details or {}


class ConfigurationError(GlossaryTranslatorError):
    """Invalid processor or command-line configuration."""


class DatasetError(GlossaryTranslatorError):
    """Dataset file missing, unreadable, or not a well-formed term array."""


class GatewayUnavailableError(GlossaryTranslatorError):
    """The translation capability could not be initialized."""


class TranslationError(GlossaryTranslatorError):
    """A single translation call failed."""


class TextTooLongError(TranslationError):
    """Text exceeds the maximum length accepted by the translation gateway."""
