"""
Offline training pipeline.

Public API for turning a labeled corpus into a model artifact.
"""

from .corpus import CorpusEmptyError, CorpusError, load_corpus, parse_corpus
from .vocabulary import build_vocabulary, compute_idf, select_min_doc_freq
from .pipeline import TrainingOutcome, compute_label_centroids, train_from_file, train_model

__all__ = [
    "CorpusError",
    "CorpusEmptyError",
    "load_corpus",
    "parse_corpus",
    "build_vocabulary",
    "compute_idf",
    "select_min_doc_freq",
    "TrainingOutcome",
    "compute_label_centroids",
    "train_model",
    "train_from_file",
]
