"""
Translation gateway interface.

The pipeline never talks to the browser directly. It depends on this
interface, which the Selenium-backed ChromeTranslatorGateway implements
and which tests replace with in-memory fakes.

A gateway is created once per run and reused for every call. The
orchestrator owns it for the duration of the run and closes it exactly
once.

Author: Leonardo Pacciani-Mori
License: MIT
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass
class TranslationOutcome:
    """
    Result of one translation call.

    Attributes:
        translated_text: The translation, or an empty string on failure.
        original_text: The text that was submitted (without context).
        success: Whether a usable translation was produced.
        error: Failure description when success is False.
    """
    translated_text: str
    original_text: str
    success: bool
    error: Optional[str] = None

    @classmethod
    def failure(cls, original_text: str, error: str) -> "TranslationOutcome":
        return cls(translated_text="", original_text=original_text, success=False, error=error)


class TranslationGateway(ABC):
    """
    Opaque English-to-Japanese translation capability.

    Implementations raise GatewayUnavailableError from create() when the
    capability cannot be initialized, and TranslationError from
    translate() when a single call fails.
    """

    @abstractmethod
    async def create(self, source_language: str, target_language: str) -> None:
        """Initialize the translation session for a language pair."""

    @abstractmethod
    async def translate(self, text: str) -> str:
        """Translate text and return the translated string."""

    async def close(self) -> None:
        """Release the translation session."""

    @property
    def is_ready(self) -> bool:
        """Whether create() has completed and close() has not been called."""
        return True
