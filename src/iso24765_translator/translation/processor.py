"""
Batch processor for glossary translation runs.

The BatchProcessor owns a translation run from start to finish:

1. Opens the gateway session; a failure here aborts the run before any
   term is processed.
2. Splits the terms into sequential batches and translates the terms of a
   batch concurrently, appending the results in input order.
3. Updates the RunStatus after every batch and hands a snapshot to the
   optional progress callback.
4. Writes a checkpoint each time another checkpoint_interval terms have
   been completed.
5. Waits between batches for a delay that grows with the share of
   fallbacks in the batch just finished, which slows the request rate
   when the Translator API starts to struggle.
6. Writes the final output, logs statistics and closes the gateway.

On an interrupt the accumulated results are saved as a best-effort
checkpoint and the gateway is closed before the interrupt propagates.

Author: Leonardo Pacciani-Mori
License: MIT
"""

import asyncio
import math
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Awaitable, Callable, List, Optional, Sequence, Union

from ..config.logging_config import get_logger
from ..config.settings import (
    BATCH_BASE_DELAY,
    BATCH_SIZE,
    CHECKPOINT_INTERVAL,
    ERROR_SUMMARY_LIMIT,
    HIGH_DELAY_FACTOR,
    HIGH_FAILURE_RATE,
    MAX_TEXT_LENGTH,
    MODERATE_DELAY_FACTOR,
    MODERATE_FAILURE_RATE,
    SOURCE_LANGUAGE,
    TARGET_LANGUAGE,
    TRANSLATION_RETRY_COUNT,
    TRANSLATION_RETRY_DELAY,
)
from ..core.dataset import checkpoint_path, save_translated_terms
from ..core.exceptions import ConfigurationError, GatewayUnavailableError
from ..core.models import Term, TranslatedTerm
from .gateway import TranslationGateway
from .status import RunStatistics, RunStatus
from .term_translator import TermTranslation, TermTranslator

# Module-level logger for consistent logging.
logger = get_logger(__name__)

ProgressCallback = Callable[[RunStatus], None]


@dataclass
class ProcessorConfig:
    """
    Options for a translation run. Delays are in seconds.

    Raises:
        ConfigurationError: If a size or count is below 1 or a delay,
            rate or factor is negative.
    """
    batch_size: int = BATCH_SIZE
    retry_count: int = TRANSLATION_RETRY_COUNT
    retry_delay: float = TRANSLATION_RETRY_DELAY
    checkpoint_interval: int = CHECKPOINT_INTERVAL
    base_delay: float = BATCH_BASE_DELAY
    moderate_failure_rate: float = MODERATE_FAILURE_RATE
    high_failure_rate: float = HIGH_FAILURE_RATE
    moderate_delay_factor: float = MODERATE_DELAY_FACTOR
    high_delay_factor: float = HIGH_DELAY_FACTOR
    max_text_length: int = MAX_TEXT_LENGTH
    source_language: str = SOURCE_LANGUAGE
    target_language: str = TARGET_LANGUAGE
    error_summary_limit: int = ERROR_SUMMARY_LIMIT

    def __post_init__(self):
        for name in ("batch_size", "retry_count", "checkpoint_interval", "max_text_length"):
            if getattr(self, name) < 1:
                raise ConfigurationError(
                    f"{name} must be at least 1, got {getattr(self, name)}",
                    code="invalid_config",
                    details={"option": name},
                )
        for name in (
            "retry_delay", "base_delay", "moderate_failure_rate", "high_failure_rate",
            "moderate_delay_factor", "high_delay_factor", "error_summary_limit",
        ):
            if getattr(self, name) < 0:
                raise ConfigurationError(
                    f"{name} must not be negative, got {getattr(self, name)}",
                    code="invalid_config",
                    details={"option": name},
                )


class BatchProcessor:
    """
    Runs the batched, checkpointed translation of a list of terms.

    Args:
        gateway: Translation gateway, not yet created. The processor
            creates it at the start of run() and closes it at the end.
        config: Run options; defaults come from config.settings.
        progress_callback: Called with a RunStatus snapshot at the start
            and after every batch.
        sleep: Awaitable sleep function, replaceable in tests.
    """

    def __init__(
        self,
        gateway: TranslationGateway,
        config: Optional[ProcessorConfig] = None,
        progress_callback: Optional[ProgressCallback] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.gateway = gateway
        self.config = config or ProcessorConfig()
        self.progress_callback = progress_callback
        self._sleep = sleep
        self._status = RunStatus()
        self.term_translator = TermTranslator(
            gateway,
            retry_count=self.config.retry_count,
            retry_delay=self.config.retry_delay,
            max_text_length=self.config.max_text_length,
            sleep=sleep,
        )

    @property
    def status(self) -> RunStatus:
        """Snapshot of the current run status."""
        return self._status.snapshot()

    def statistics(self) -> RunStatistics:
        return RunStatistics.from_status(self._status, self.config.error_summary_limit)

    def calculate_adaptive_delay(self, failures: int, batch_length: int) -> float:
        """
        Delay before the next batch, based on the fallback rate of the last one.

        Args:
            failures: Number of sub-field fallbacks in the batch.
            batch_length: Number of terms in the batch.

        Returns:
            Delay in seconds.
        """
        if batch_length <= 0:
            return self.config.base_delay
        failure_rate = failures / batch_length

        if failure_rate > self.config.high_failure_rate:
            return self.config.base_delay * self.config.high_delay_factor
        if failure_rate > self.config.moderate_failure_rate:
            return self.config.base_delay * self.config.moderate_delay_factor
        return self.config.base_delay

    async def _open_gateway(self) -> None:
        try:
            await self.gateway.create(self.config.source_language, self.config.target_language)
        except GatewayUnavailableError:
            raise
        except Exception as e:
            raise GatewayUnavailableError(
                f"Failed to initialize translation gateway: {e}",
                code="gateway_unavailable",
            ) from e
        logger.info(
            f"Translation gateway ready ({self.config.source_language} -> "
            f"{self.config.target_language})"
        )

    async def _close_gateway(self) -> None:
        try:
            await self.gateway.close()
        except Exception as e:
            logger.warning(f"Error closing translation gateway: {e}")

    def _notify(self) -> None:
        if self.progress_callback:
            self.progress_callback(self._status.snapshot())

    async def _translate_one(self, term: Term) -> TermTranslation:
        self._status.current_term_id = term.id
        return await self.term_translator.translate_term(term)

    def _record(self, translation: TermTranslation) -> None:
        self._status.completed_count += 1
        if translation.failures:
            self._status.failed_terms += 1
            self._status.failed_count += len(translation.failures)
            self._status.errors.extend(str(failure) for failure in translation.failures)

    def _write_checkpoint(
        self,
        results: Sequence[TranslatedTerm],
        output_path: Union[str, Path],
    ) -> Optional[Path]:
        path = checkpoint_path(output_path, len(results))
        try:
            save_translated_terms(results, path)
        except OSError as e:
            logger.error(f"Failed to write checkpoint {path}: {e}")
            return None
        logger.info(f"Checkpoint saved: {path}")
        return path

    async def run(
        self,
        terms: Sequence[Term],
        output_path: Optional[Union[str, Path]] = None,
        already_translated: Optional[Sequence[TranslatedTerm]] = None,
    ) -> List[TranslatedTerm]:
        """
        Translate terms in batches.

        Args:
            terms: Terms to translate, in output order.
            output_path: Final output file. Checkpoints are derived from it.
                When None, nothing is written to disk.
            already_translated: Terms carried over from a checkpoint. They
                head the result list and count towards progress and
                checkpoint intervals.

        Returns:
            already_translated followed by the newly translated terms.

        Raises:
            GatewayUnavailableError: If the gateway cannot be created.
        """
        results: List[TranslatedTerm] = list(already_translated or [])
        batch_size = self.config.batch_size
        interval = self.config.checkpoint_interval

        self._status = RunStatus(
            total=len(results) + len(terms),
            completed_count=len(results),
            total_batches=math.ceil(len(terms) / batch_size),
            start_time=datetime.now(),
        )
        next_checkpoint = (len(results) // interval + 1) * interval
        start_time = time.time()

        try:
            await self._open_gateway()

            logger.info(f"Starting translation of {len(terms)} terms...")
            self._notify()

            for batch_index, batch_start in enumerate(range(0, len(terms), batch_size), start=1):
                batch = terms[batch_start:batch_start + batch_size]
                self._status.current_batch = batch_index
                logger.info(
                    f"Processing batch {batch_index}/{self._status.total_batches} "
                    f"({len(batch)} terms)"
                )

                translations = await asyncio.gather(*(self._translate_one(term) for term in batch))

                batch_failures = 0
                for translation in translations:
                    results.append(translation.term)
                    self._record(translation)
                    batch_failures += len(translation.failures)

                self._notify()

                if output_path is not None and self._status.completed_count >= next_checkpoint:
                    self._write_checkpoint(results, output_path)
                    next_checkpoint = (self._status.completed_count // interval + 1) * interval

                if batch_start + batch_size < len(terms):
                    delay = self.calculate_adaptive_delay(batch_failures, len(batch))
                    if batch_failures:
                        logger.debug(
                            f"Batch {batch_index} had {batch_failures} fallbacks, "
                            f"waiting {delay:.1f}s"
                        )
                    await self._sleep(delay)

            if output_path is not None:
                save_translated_terms(results, output_path)
                logger.info(f"Translation completed. Results saved to: {output_path}")

        except (KeyboardInterrupt, asyncio.CancelledError):
            logger.warning("Translation interrupted, saving progress...")
            if output_path is not None and results:
                self._write_checkpoint(results, output_path)
            raise

        finally:
            await self._close_gateway()

        elapsed_time = time.time() - start_time
        logger.info(f"Processed {len(terms)} terms in {elapsed_time:.2f} seconds")
        self.log_statistics()
        return results

    def log_statistics(self) -> None:
        """Log totals, success rate and the first error messages."""
        stats = self.statistics()
        logger.info("=" * 60)
        logger.info("Translation Statistics")
        logger.info("=" * 60)
        logger.info(f"Total terms: {stats.total}")
        logger.info(f"Completed terms: {stats.completed}")
        logger.info(f"Terms with fallback: {stats.failed_terms}")
        logger.info(f"Failed translations: {stats.failed}")
        logger.info(f"Success rate: {stats.success_rate:.1f}%")

        if stats.errors:
            logger.info("-" * 60)
            logger.info("Error summary:")
            for index, error in enumerate(stats.errors, start=1):
                logger.info(f"  {index}. {error}")
            if stats.error_count > len(stats.errors):
                logger.info(f"  ... and {stats.error_count - len(stats.errors)} more errors")
        logger.info("=" * 60)
