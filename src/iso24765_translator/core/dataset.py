"""
Dataset file I/O for the glossary translator.

This module reads the English glossary and translated/checkpoint files
into model objects, and writes translated datasets as pretty-printed
UTF-8 JSON. Writes go through a temporary file in the destination
directory followed by os.replace(), so a reader never sees a half-written
output or checkpoint file.

Author: Leonardo Pacciani-Mori
License: MIT
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, List, Sequence, Union

from ..config.logging_config import get_logger
from ..config.settings import CHECKPOINT_SUFFIX_TEMPLATE
from .exceptions import DatasetError
from .models import Term, TranslatedTerm

# Module-level logger for consistent logging.
logger = get_logger(__name__)

PathLike = Union[str, Path]


def load_json_array(file_path: PathLike) -> List[Any]:
    """
    Read a JSON document and check that it is an array.

    Args:
        file_path: Path to the JSON file.

    Returns:
        The decoded list.

    Raises:
        DatasetError: If the file is missing, unreadable, not valid JSON or
            not a JSON array.
    """
    path = Path(file_path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise DatasetError(
            f"Dataset file not found: {path}",
            code="file_not_found",
            details={"path": str(path)},
        )
    except json.JSONDecodeError as e:
        raise DatasetError(
            f"Invalid JSON in {path}: {e}",
            code="invalid_json",
            details={"path": str(path)},
        )
    except (OSError, UnicodeDecodeError) as e:
        raise DatasetError(
            f"Could not read {path}: {e}",
            code="unreadable",
            details={"path": str(path)},
        )

    if not isinstance(data, list):
        raise DatasetError(
            f"Invalid terminology data format in {path}: expected array of terms",
            code="not_an_array",
            details={"path": str(path)},
        )
    return data


def load_terms(file_path: PathLike) -> List[Term]:
    """
    Load the English glossary.

    Args:
        file_path: Path to a JSON array of term records.

    Returns:
        List of Term objects in file order.

    Raises:
        DatasetError: If the file cannot be loaded, a record is malformed,
            or two records share the same id.
    """
    logger.info(f"Loading terminology data from: {file_path}")
    records = load_json_array(file_path)

    terms = []
    seen_ids = set()
    for record in records:
        term = Term.from_dict(record)
        if term.id in seen_ids:
            raise DatasetError(
                f"Duplicate term id in dataset: {term.id}",
                code="duplicate_id",
                details={"id": term.id},
            )
        seen_ids.add(term.id)
        terms.append(term)

    logger.info(f"Loaded {len(terms)} terms")
    return terms


def load_translated_terms(file_path: PathLike) -> List[TranslatedTerm]:
    """
    Load a translated dataset or checkpoint file.

    Raises:
        DatasetError: If the file cannot be loaded or a record has no id.
    """
    records = load_json_array(file_path)
    terms = [TranslatedTerm.from_dict(record) for record in records]
    logger.info(f"Loaded {len(terms)} translated terms from {file_path}")
    return terms


def write_json_atomic(data: Any, file_path: PathLike) -> None:
    """
    Write data as pretty-printed JSON, replacing the target atomically.

    Args:
        data: JSON-serializable object.
        file_path: Destination path. Parent directories are created.
    """
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent)
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.write("\n")
        os.replace(tmp_name, path)
    except BaseException:
        # Leave the previous file untouched and drop the partial one.
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


def save_translated_terms(terms: Sequence[TranslatedTerm], file_path: PathLike) -> None:
    """Write translated terms to file_path as a JSON array."""
    write_json_atomic([term.to_dict() for term in terms], file_path)
    logger.info(f"Translated terminology saved to: {file_path}")


def checkpoint_path(output_path: PathLike, count: int) -> Path:
    """
    Derive the checkpoint path for a given completed-term count.

    Example:
        >>> checkpoint_path("output/result.json", 100)
        PosixPath('output/result.backup-100.json')
    """
    path = Path(output_path)
    suffix = path.suffix or ".json"
    return path.with_name(
        f"{path.stem}{CHECKPOINT_SUFFIX_TEMPLATE.format(count=count)}{suffix}"
    )
