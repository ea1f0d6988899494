"""
Field-weighted TF-IDF vectorizer.

Subject, sender and body are tokenized independently and merged into one
weighted term-frequency accumulator (sender terms weigh most, body terms
least). Vectors are dense numpy arrays over a fixed vocabulary; two vectors
are only comparable when built from the same VectorSpace.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from ..config import settings
from .tokenizer import tokenize

VECTORIZER_VERSION = "field-weighted-tfidf-1.0.0"


def default_field_weights() -> Dict[str, float]:
    """Field weights from settings: body, subject, sender."""
    return {
        "body": settings.weight_body,
        "subject": settings.weight_subject,
        "sender": settings.weight_sender,
    }


def weighted_term_frequencies(
    body: str,
    subject: str,
    sender: str,
    weights: Optional[Mapping[str, float]] = None,
) -> Tuple[Dict[str, float], float]:
    """
    Build the weighted term accumulator for one message.

    Args:
        body: Message body
        subject: Subject line
        sender: Sender address
        weights: Per-field multipliers (default: settings weights)

    Returns:
        Tuple of (term -> weighted count, total weight mass). The mass is
        ``sum(weight * token_count)`` over the three fields and is never 0.

    Examples:
        >>> counts, mass = weighted_term_frequencies("", "invoice", "billing@shop.com")
        >>> counts["invoice"], counts["billing"], mass
        (5.0, 10.0, 35.0)
    """
    if weights is None:
        weights = default_field_weights()

    counts: Dict[str, float] = defaultdict(float)
    mass = 0.0
    for field_name, text in (("body", body), ("subject", subject), ("sender", sender)):
        weight = weights[field_name]
        tokens = tokenize(text or "")
        for token in tokens:
            counts[token] += weight
        mass += weight * len(tokens)

    return dict(counts), (mass or 1.0)


@dataclass(frozen=True)
class VectorSpace:
    """
    Immutable vocabulary + IDF pair defining vector dimensions.

    Built once per model artifact; the term index and IDF weight array are
    derived at construction so vectorization does a single pass over the
    message's terms instead of the whole vocabulary.
    """

    vocabulary: Tuple[str, ...]
    idf: Mapping[str, float]
    _index: Dict[str, int] = field(init=False, repr=False, compare=False)
    _idf_weights: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index: Dict[str, int] = {}
        for i, term in enumerate(self.vocabulary):
            index.setdefault(term, i)
        weights = np.array(
            [float(self.idf.get(term, 0.0)) for term in self.vocabulary], dtype=np.float64
        )
        object.__setattr__(self, "_index", index)
        object.__setattr__(self, "_idf_weights", weights)

    @classmethod
    def from_terms(cls, vocabulary: Sequence[str], idf: Mapping[str, float]) -> "VectorSpace":
        return cls(vocabulary=tuple(vocabulary), idf=dict(idf))

    @property
    def dimensions(self) -> int:
        return len(self.vocabulary)

    def zeros(self) -> np.ndarray:
        return np.zeros(self.dimensions, dtype=np.float64)

    def vectorize(
        self,
        body: str,
        subject: str,
        sender: str,
        weights: Optional[Mapping[str, float]] = None,
    ) -> np.ndarray:
        """
        Vectorize a message: ``vector[i] = weighted_tf(term_i) * idf(term_i)``.

        Terms outside the vocabulary are ignored but still count toward the
        weight mass.
        """
        counts, mass = weighted_term_frequencies(body, subject, sender, weights)
        vector = self.zeros()
        for term, count in counts.items():
            i = self._index.get(term)
            if i is not None:
                vector[i] = count / mass
        return vector * self._idf_weights


def vectorize(
    body: str,
    subject: str,
    sender: str,
    vocabulary: Sequence[str],
    idf: Mapping[str, float],
) -> np.ndarray:
    """
    Vectorize a single message against an explicit vocabulary and IDF table.

    Convenience wrapper around VectorSpace for one-off calls; build a
    VectorSpace once when vectorizing many messages.

    Examples:
        >>> v = vectorize("", "invoice", "", ["invoice", "meeting"], {"invoice": 0.5, "meeting": 1.0})
        >>> v.tolist()
        [0.5, 0.0]
    """
    return VectorSpace.from_terms(vocabulary, idf).vectorize(body, subject, sender)


def vectorize_many(space: VectorSpace, messages: List[Tuple[str, str, str]]) -> List[np.ndarray]:
    """Vectorize (body, subject, sender) triples against one VectorSpace."""
    return [space.vectorize(body, subject, sender) for body, subject, sender in messages]
