"""
Resuming an interrupted translation run from a checkpoint.

The remaining work is the set difference, by id, between the dataset and
the checkpoint. Checkpoint entries are kept in their original order and
the newly translated terms follow them.

Two loose ends are reported rather than silently accepted:
    - Checkpoint ids that no longer exist in the dataset are kept in the
      output and logged.
    - Checkpoint entries whose source fields no longer match the dataset
      (the glossary changed between runs) are logged as stale and kept,
      unless retranslate_stale is set, in which case they are dropped from
      the checkpoint and translated again.

Author: Leonardo Pacciani-Mori
License: MIT
"""

from pathlib import Path
from typing import List, Optional, Sequence, Union

from ..config.logging_config import get_logger
from ..core.models import Term, TranslatedTerm
from .processor import BatchProcessor

# Module-level logger for consistent logging.
logger = get_logger(__name__)


def remaining_terms(
    checkpoint_terms: Sequence[TranslatedTerm],
    all_terms: Sequence[Term],
) -> List[Term]:
    """Terms of the dataset whose id is not in the checkpoint, in dataset order."""
    completed_ids = {term.id for term in checkpoint_terms}
    return [term for term in all_terms if term.id not in completed_ids]


def find_extraneous(
    checkpoint_terms: Sequence[TranslatedTerm],
    all_terms: Sequence[Term],
) -> List[str]:
    """Ids present in the checkpoint but absent from the dataset."""
    dataset_ids = {term.id for term in all_terms}
    return [term.id for term in checkpoint_terms if term.id not in dataset_ids]


def find_stale(
    checkpoint_terms: Sequence[TranslatedTerm],
    all_terms: Sequence[Term],
) -> List[str]:
    """Ids whose checkpointed source fields differ from the current dataset."""
    by_id = {term.id: term for term in all_terms}
    stale = []
    for translated in checkpoint_terms:
        original = by_id.get(translated.id)
        if original is not None and original.source_signature() != translated.source_signature():
            stale.append(translated.id)
    return stale


async def resume(
    checkpoint_terms: Sequence[TranslatedTerm],
    all_terms: Sequence[Term],
    processor: BatchProcessor,
    output_path: Optional[Union[str, Path]] = None,
    retranslate_stale: bool = False,
) -> List[TranslatedTerm]:
    """
    Continue a translation run from a checkpoint.

    Args:
        checkpoint_terms: Terms already translated, in checkpoint order.
        all_terms: The full English dataset.
        processor: BatchProcessor used for the remaining terms. It is not
            started at all when nothing remains.
        output_path: Final output file, passed on to the processor.
        retranslate_stale: Translate again checkpoint entries whose source
            text changed since the checkpoint was written.

    Returns:
        Checkpoint terms followed by the newly translated terms. When the
        checkpoint already covers the dataset it is returned unchanged.
    """
    carried = list(checkpoint_terms)

    extraneous = find_extraneous(carried, all_terms)
    if extraneous:
        logger.warning(
            f"Checkpoint contains {len(extraneous)} ids not in the dataset, keeping them: "
            f"{', '.join(extraneous[:10])}"
        )

    stale = find_stale(carried, all_terms)
    if stale:
        if retranslate_stale:
            logger.warning(f"Retranslating {len(stale)} stale checkpoint entries")
            stale_ids = set(stale)
            carried = [term for term in carried if term.id not in stale_ids]
        else:
            logger.warning(
                f"{len(stale)} checkpoint entries no longer match the dataset, keeping them: "
                f"{', '.join(stale[:10])}"
            )

    remaining = remaining_terms(carried, all_terms)
    logger.info(f"Resuming from {len(carried)} completed terms")
    logger.info(f"{len(remaining)} terms remaining")

    if not remaining:
        logger.info("All terms already translated")
        return carried

    return await processor.run(remaining, output_path=output_path, already_translated=carried)
