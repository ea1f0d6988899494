"""
Centroid and cosine-similarity math for the vector space model.
"""

from typing import Mapping, Optional, Sequence, Tuple

import numpy as np


def compute_centroid(vectors: Sequence[np.ndarray]) -> np.ndarray:
    """
    Coordinate-wise mean of equally sized vectors.

    Args:
        vectors: Vectors built against the same vocabulary

    Returns:
        Mean vector; an empty array for an empty input

    Raises:
        ValueError: If the vectors differ in length

    Examples:
        >>> compute_centroid([np.array([1.0, 0.0]), np.array([0.0, 1.0])]).tolist()
        [0.5, 0.5]
        >>> compute_centroid([]).tolist()
        []
    """
    if len(vectors) == 0:
        return np.zeros(0, dtype=np.float64)

    lengths = {len(v) for v in vectors}
    if len(lengths) > 1:
        raise ValueError(f"Cannot average vectors of different lengths: {sorted(lengths)}")

    return np.mean(np.vstack(vectors).astype(np.float64), axis=0)


def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    """
    Cosine of the angle between two vectors.

    Returns 0.0 when either vector has zero norm or the lengths differ, so a
    stale centroid from another vocabulary can never win an argmax.

    Examples:
        >>> cosine_similarity(np.array([1.0, 0.0]), np.array([1.0, 0.0]))
        1.0
        >>> cosine_similarity(np.array([1.0, 0.0]), np.array([0.0, 0.0]))
        0.0
    """
    if len(a) != len(b):
        return 0.0

    norm = float(np.linalg.norm(a)) * float(np.linalg.norm(b))
    if norm == 0.0:
        return 0.0

    # Clip rounding noise so cos(a, a) stays within [-1, 1]
    return float(np.clip(np.dot(a, b) / norm, -1.0, 1.0))


def blend_centroid(
    existing: Optional[np.ndarray],
    update: np.ndarray,
    learning_rate: float,
) -> np.ndarray:
    """
    Exponential moving average step: ``(1 - rate) * existing + rate * update``.

    A missing existing centroid, or one of a different dimension, is replaced
    by the update outright.

    Examples:
        >>> blend_centroid(np.array([1.0, 0.0]), np.array([0.0, 1.0]), 0.2).tolist()
        [0.8, 0.2]
        >>> blend_centroid(None, np.array([0.0, 1.0]), 0.2).tolist()
        [0.0, 1.0]
    """
    if existing is None or len(existing) != len(update):
        return np.array(update, dtype=np.float64)

    return (1.0 - learning_rate) * existing + learning_rate * update


def nearest_centroid(
    vector: np.ndarray,
    centroids: Mapping[str, np.ndarray],
) -> Tuple[Optional[str], float]:
    """
    Label of the most similar centroid and its score.

    Centroids whose dimension differs from ``vector`` are skipped. Exact ties
    go to the lexicographically smallest label.

    Returns:
        Tuple of (label or None, score). Score is 0.0 when nothing is eligible.
    """
    best_label = None
    best_score = 0.0

    for label in sorted(centroids):
        centroid = centroids[label]
        if len(centroid) != len(vector):
            continue
        score = cosine_similarity(vector, centroid)
        if best_label is None or score > best_score:
            best_label = label
            best_score = score

    return best_label, best_score
