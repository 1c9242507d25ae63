"""
Per-term translation with retry and source-text fallback.

Every translatable field of a term (name, aliases, definition texts,
related terms, example, note) goes through the same helper: wrap the
text in the domain context, check the length limit, call the gateway,
strip the context and reject empty results. Failed calls are retried
with exponential backoff. When every attempt fails the source text is
used for that field only, so a term is always returned with complete
and parallel "_ja" fields.

Nothing in this module raises TranslationError to its caller.

Author: Leonardo Pacciani-Mori
License: MIT
"""

import asyncio
from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, Optional, Tuple

from ..config.logging_config import get_logger
from ..config.settings import (
    MAX_TEXT_LENGTH,
    TRANSLATION_RETRY_COUNT,
    TRANSLATION_RETRY_DELAY,
)
from ..core.exceptions import TextTooLongError, TranslationError
from ..core.models import Term, TranslatedDefinition, TranslatedTerm
from .context import CONTEXT_TEMPLATE, unwrap, wrap
from .gateway import TranslationGateway, TranslationOutcome

# Module-level logger for consistent logging.
logger = get_logger(__name__)

# Errors that fail the same way on every attempt.
NON_RETRYABLE_CODES = {"empty_text", "text_too_long"}


@dataclass
class FieldFailure:
    """A sub-field that fell back to its source text."""
    term_id: str
    field: str
    attempts: int
    error: str

    def __str__(self) -> str:
        return f"{self.term_id} [{self.field}]: {self.error} (attempts: {self.attempts})"


@dataclass
class TermTranslation:
    """A translated term together with the sub-fields that fell back."""
    term: TranslatedTerm
    failures: List[FieldFailure] = field(default_factory=list)

    @property
    def used_fallback(self) -> bool:
        return bool(self.failures)


class TermTranslator:
    """
    Translates all fields of a glossary term through a gateway.

    Args:
        gateway: An initialized TranslationGateway.
        retry_count: Total attempts per sub-field before falling back.
        retry_delay: Base backoff delay in seconds; attempt n waits
            retry_delay * 2 ** (n - 1) before attempt n + 1.
        max_text_length: Longest accepted text after context wrapping.
        context_template: Template with a "{text}" placeholder.
        sleep: Awaitable sleep function, replaceable in tests.
    """

    def __init__(
        self,
        gateway: TranslationGateway,
        retry_count: int = TRANSLATION_RETRY_COUNT,
        retry_delay: float = TRANSLATION_RETRY_DELAY,
        max_text_length: int = MAX_TEXT_LENGTH,
        context_template: str = CONTEXT_TEMPLATE,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.gateway = gateway
        self.retry_count = max(1, retry_count)
        self.retry_delay = retry_delay
        self.max_text_length = max_text_length
        self.context_template = context_template
        self._sleep = sleep

    async def _attempt(self, text: str) -> str:
        """Run one wrap, translate, unwrap cycle. Raises TranslationError."""
        if not text or not text.strip():
            raise TranslationError("Empty text provided for translation", code="empty_text")

        wrapped = wrap(text, self.context_template)
        if len(wrapped) > self.max_text_length:
            raise TextTooLongError(
                f"Text too long for translation (>{self.max_text_length} characters)",
                code="text_too_long",
                details={"length": len(wrapped)},
            )

        try:
            result = await self.gateway.translate(wrapped)
        except TranslationError:
            raise
        except Exception as e:
            raise TranslationError(f"Browser translation error: {e}", code="gateway_error")

        if not result or not isinstance(result, str):
            raise TranslationError("Empty or invalid translation result", code="empty_result")

        final_text = unwrap(result)
        if not final_text.strip():
            raise TranslationError(
                "Translation result is empty after context removal", code="empty_result"
            )
        return final_text

    async def _translate_with_retry(self, text: str) -> Tuple[TranslationOutcome, int]:
        last_error = "Translation failed"
        attempts = 0
        for attempt in range(1, self.retry_count + 1):
            attempts = attempt
            try:
                translated = await self._attempt(text)
                return TranslationOutcome(translated, text, True), attempts
            except TranslationError as e:
                last_error = str(e)
                if e.code in NON_RETRYABLE_CODES:
                    break
                logger.debug(f"Translation attempt {attempt} failed for {text[:50]!r}: {last_error}")
                if attempt < self.retry_count:
                    await self._sleep(self.retry_delay * 2 ** (attempt - 1))

        if attempts > 1:
            last_error = f"All {attempts} retry attempts failed. Last error: {last_error}"
        return TranslationOutcome.failure(text, last_error), attempts

    async def translate_field(
        self,
        text: str,
        term_id: str = "",
        field_name: str = "",
    ) -> Tuple[str, Optional[FieldFailure]]:
        """
        Translate one sub-field, falling back to the source text.

        Every field of translate_term() goes through this helper.

        Returns:
            Tuple of (text to store, failure or None).
        """
        if not text or not text.strip():
            # Nothing to translate; keep the value to preserve parity.
            return text, None

        outcome, attempts = await self._translate_with_retry(text)
        if outcome.success:
            return outcome.translated_text, None

        failure = FieldFailure(term_id, field_name, attempts, outcome.error or "Translation failed")
        logger.warning(f"Using source text for term {failure}")
        return text, failure

    async def translate_term(self, term: Term) -> TermTranslation:
        """
        Translate every field of a term.

        Sub-field calls are issued concurrently and collected by position.
        The returned term mirrors the presence and length of every optional
        source field.
        """
        aliases = term.aliases or []
        related = term.related_terms or []

        jobs = [self.translate_field(term.name, term.id, "name")]
        jobs += [
            self.translate_field(alias, term.id, f"alias[{i}]")
            for i, alias in enumerate(aliases)
        ]
        jobs += [
            self.translate_field(definition.text, term.id, f"definitions[{i}].text")
            for i, definition in enumerate(term.definitions)
        ]
        jobs += [
            self.translate_field(item, term.id, f"confer[{i}]")
            for i, item in enumerate(related)
        ]
        if term.example is not None:
            jobs.append(self.translate_field(term.example, term.id, "example"))
        if term.note is not None:
            jobs.append(self.translate_field(term.note, term.id, "note"))

        results = await asyncio.gather(*jobs)
        texts = [text for text, _ in results]
        failures = [failure for _, failure in results if failure is not None]

        position = 0

        def take(count: int) -> List[str]:
            nonlocal position
            chunk = texts[position:position + count]
            position += count
            return chunk

        name_ja = take(1)[0]
        aliases_ja = take(len(aliases))
        definitions_ja = take(len(term.definitions))
        related_ja = take(len(related))
        example_ja = take(1)[0] if term.example is not None else None
        note_ja = take(1)[0] if term.note is not None else None

        translated = TranslatedTerm(
            id=term.id,
            name=term.name,
            name_ja=name_ja,
            definitions=[
                TranslatedDefinition(d.text, text_ja, d.reference)
                for d, text_ja in zip(term.definitions, definitions_ja)
            ],
            aliases=list(term.aliases) if term.aliases is not None else None,
            aliases_ja=aliases_ja if term.aliases is not None else None,
            related_terms=list(term.related_terms) if term.related_terms is not None else None,
            related_terms_ja=related_ja if term.related_terms is not None else None,
            example=term.example,
            example_ja=example_ja,
            note=term.note,
            note_ja=note_ja,
        )
        return TermTranslation(term=translated, failures=failures)

    async def translate(self, term: Term) -> TranslatedTerm:
        """Translate a term and return only the TranslatedTerm."""
        result = await self.translate_term(term)
        return result.term
