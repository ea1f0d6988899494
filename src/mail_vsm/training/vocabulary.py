"""
Vocabulary and IDF construction for the offline trainer.

Each valid record becomes one document (subject, sender and text tokenized
together). Terms seen in fewer than ``min_doc_freq`` documents are pruned; on
small corpora nothing is pruned so the vocabulary cannot collapse to empty.

IDF uses ``log10(N / (1 + df))``: a term in every document gets a slightly
negative weight, a term in N-1 documents gets exactly zero.
"""

import math
from collections import Counter
from typing import Dict, List, Optional, Sequence, Tuple

import structlog

from ..config import settings
from ..models.training import TrainingRecord
from ..vsm.tokenizer import tokenize
from .corpus import require_records


logger = structlog.get_logger(__name__)


def document_tokens(record: TrainingRecord) -> List[str]:
    """Tokenize a record as a single document: subject, sender, then text."""
    return tokenize(f"{record.subject or ''} {record.sender or ''} {record.content}")


def select_min_doc_freq(
    corpus_size: int,
    min_doc_freq: Optional[int] = None,
    large_corpus_size: Optional[int] = None,
) -> int:
    """
    Pruning threshold for a corpus of the given size.

    Examples:
        >>> select_min_doc_freq(101)
        3
        >>> select_min_doc_freq(100)
        1
    """
    if min_doc_freq is None:
        min_doc_freq = settings.vocabulary_min_doc_freq
    if large_corpus_size is None:
        large_corpus_size = settings.vocabulary_large_corpus_size

    return min_doc_freq if corpus_size > large_corpus_size else 1


def document_frequencies(documents: Sequence[Sequence[str]]) -> Tuple[List[str], Counter]:
    """
    Distinct terms in first-occurrence order and their document frequencies.
    """
    order: Dict[str, None] = {}
    doc_freq: Counter = Counter()
    for tokens in documents:
        unique = dict.fromkeys(tokens)
        for term in unique:
            order.setdefault(term, None)
        doc_freq.update(unique.keys())
    return list(order), doc_freq


def compute_idf(vocabulary: Sequence[str], doc_freq: Counter, n_documents: int) -> Dict[str, float]:
    """
    IDF table for the vocabulary.

    Examples:
        >>> compute_idf(["invoice"], Counter({"invoice": 1}), 3)
        {'invoice': 0.17609125905568124}
    """
    return {term: math.log10(n_documents / (1 + doc_freq[term])) for term in vocabulary}


def build_vocabulary(
    records: Sequence[TrainingRecord],
    min_doc_freq: Optional[int] = None,
) -> Tuple[List[str], Dict[str, float]]:
    """
    Build the pruned vocabulary and IDF table from valid training records.

    Args:
        records: Valid training records (see parse_corpus)
        min_doc_freq: Override the size-dependent pruning threshold

    Returns:
        Tuple of (vocabulary in first-occurrence order, idf per term)

    Raises:
        CorpusEmptyError: If ``records`` is empty
    """
    require_records(list(records))

    documents = [document_tokens(record) for record in records]
    threshold = min_doc_freq if min_doc_freq is not None else select_min_doc_freq(len(documents))

    terms, doc_freq = document_frequencies(documents)
    vocabulary = [term for term in terms if doc_freq[term] >= threshold]

    logger.info(
        "vocabulary_built",
        documents=len(documents),
        distinct_terms=len(terms),
        vocabulary_size=len(vocabulary),
        min_doc_freq=threshold,
    )

    idf = compute_idf(vocabulary, doc_freq, len(documents))
    logger.debug("idf_computed", terms=len(idf))

    return vocabulary, idf
