"""
Offline training pipeline.

Stages:
1. Parse and validate corpus records
2. Build vocabulary and IDF table
3. Vectorize every record against that vocabulary
4. Average vectors per label into centroids

The result is a ModelArtifact that the runtime service loads read-only.
"""

import time
from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import numpy as np
import structlog

from ..models.artifact import ModelArtifact
from ..models.training import TrainingRecord, TrainingStats
from ..vsm.centroids import compute_centroid
from ..vsm.vectorizer import VectorSpace
from .corpus import load_corpus, parse_corpus, require_records
from .vocabulary import build_vocabulary, select_min_doc_freq


logger = structlog.get_logger(__name__)


@dataclass
class TrainingOutcome:
    """Artifact plus the statistics of the run that produced it."""

    artifact: ModelArtifact
    stats: TrainingStats


def compute_label_centroids(
    space: VectorSpace,
    records: Sequence[Any],
) -> Dict[str, np.ndarray]:
    """
    Per-label centroids over labeled records.

    Records are anything with ``content``, ``subject``, ``sender`` and
    ``label`` attributes; unlabeled ones are ignored. Labels appear in first
    occurrence order.
    """
    grouped: Dict[str, List[np.ndarray]] = defaultdict(list)
    for record in records:
        if not record.label:
            continue
        grouped[record.label].append(
            space.vectorize(record.content, record.subject or "", record.sender or "")
        )

    return {label: compute_centroid(vectors) for label, vectors in grouped.items()}


def train_model(
    records: Sequence[TrainingRecord],
    skipped: int = 0,
    min_doc_freq: Optional[int] = None,
) -> TrainingOutcome:
    """
    Train a model artifact from valid training records.

    Args:
        records: Valid records (see parse_corpus)
        skipped: Invalid records already dropped, for reporting
        min_doc_freq: Override the size-dependent pruning threshold

    Returns:
        TrainingOutcome with the artifact and run statistics

    Raises:
        CorpusEmptyError: If ``records`` is empty
    """
    start_time = time.time()
    require_records(list(records))

    logger.info("Starting training", records=len(records), skipped=skipped)

    vocabulary, idf = build_vocabulary(records, min_doc_freq=min_doc_freq)
    space = VectorSpace.from_terms(vocabulary, idf)

    centroids = compute_label_centroids(space, records)
    logger.info("centroids_computed", categories=list(centroids), dimensions=space.dimensions)

    artifact = ModelArtifact(
        vocabulary=vocabulary,
        idf=idf,
        centroids={label: vector.tolist() for label, vector in centroids.items()},
    )

    processing_time_ms = (time.time() - start_time) * 1000
    stats = TrainingStats(
        documents=len(records),
        skipped=skipped,
        vocabulary_size=len(vocabulary),
        min_doc_freq=min_doc_freq if min_doc_freq is not None else select_min_doc_freq(len(records)),
        categories=list(centroids),
        processing_time_ms=processing_time_ms,
    )

    logger.info(
        "Training complete",
        documents=stats.documents,
        vocabulary_size=stats.vocabulary_size,
        categories=len(stats.categories),
        processing_time_ms=round(processing_time_ms, 2),
    )

    return TrainingOutcome(artifact=artifact, stats=stats)


def train_from_file(path: Union[str, Path], min_doc_freq: Optional[int] = None) -> TrainingOutcome:
    """
    Load, validate and train on a corpus file.

    Raises:
        CorpusError: If the file is unreadable
        CorpusEmptyError: If no valid record remains
    """
    records, corpus_stats = parse_corpus(load_corpus(path))
    return train_model(records, skipped=corpus_stats.skipped, min_doc_freq=min_doc_freq)
