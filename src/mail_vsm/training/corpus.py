"""
Training corpus loading and validation.

A corpus is a JSON array of objects with optional ``text``/``body``,
``subject``, ``sender`` and ``label``. Records with neither text nor subject
are skipped and counted rather than failing the run.
"""

import json
from pathlib import Path
from typing import Any, List, Tuple, Union

import structlog
from pydantic import ValidationError

from ..models.training import CorpusStats, TrainingRecord


logger = structlog.get_logger(__name__)

# Individually logged skipped records before only the aggregate is reported
MAX_SKIP_WARNINGS = 3


class CorpusError(ValueError):
    """Corpus file is unreadable or not a JSON array."""


class CorpusEmptyError(CorpusError):
    """No valid record remains after filtering."""


def load_corpus(path: Union[str, Path]) -> List[Any]:
    """
    Read a corpus JSON file.

    Args:
        path: Path to a JSON array of records

    Returns:
        The raw decoded list

    Raises:
        CorpusError: If the file is missing, not JSON, or not an array
    """
    corpus_path = Path(path)
    if not corpus_path.exists():
        raise CorpusError(f"Corpus file not found: {corpus_path}")

    try:
        with open(corpus_path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise CorpusError(f"Corpus file is not valid JSON: {e}") from e

    if not isinstance(raw, list):
        raise CorpusError(f"Corpus must be a JSON array, got {type(raw).__name__}")

    logger.info("corpus_loaded", path=str(corpus_path), records=len(raw))
    return raw


def parse_corpus(raw: List[Any]) -> Tuple[List[TrainingRecord], CorpusStats]:
    """
    Validate raw corpus items into TrainingRecords.

    Non-object items, items that fail model validation and records without
    text or subject are skipped.

    Args:
        raw: Decoded corpus items

    Returns:
        Tuple of (valid records in corpus order, counts)
    """
    records: List[TrainingRecord] = []
    skipped = 0

    for position, item in enumerate(raw):
        record = None
        if isinstance(item, dict):
            try:
                record = TrainingRecord.model_validate(item)
            except ValidationError:
                record = None

        if record is None or not record.is_valid:
            skipped += 1
            if skipped <= MAX_SKIP_WARNINGS:
                logger.warning("corpus_record_invalid", position=position)
            continue

        records.append(record)

    stats = CorpusStats(total=len(raw), valid=len(records), skipped=skipped)
    if skipped:
        logger.warning("corpus_records_skipped", skipped=skipped, valid=len(records))

    return records, stats


def require_records(records: List[TrainingRecord]) -> None:
    """
    Raise CorpusEmptyError when there is nothing to train on.
    """
    if not records:
        raise CorpusEmptyError("No valid training records: every record lacks both text and subject")
