"""
Vector space model core.

Tokenization, field-weighted TF-IDF vectorization and centroid geometry shared
by the offline trainer and the runtime classifier.
"""

from .stopwords import STOPWORDS, STOPLIST_VERSION
from .tokenizer import TOKENIZER_VERSION, bigrams, clean_text, is_valid_token, tokenize
from .vectorizer import (
    VECTORIZER_VERSION,
    VectorSpace,
    vectorize,
    vectorize_many,
    weighted_term_frequencies,
)
from .centroids import blend_centroid, compute_centroid, cosine_similarity, nearest_centroid

__all__ = [
    "STOPWORDS",
    "STOPLIST_VERSION",
    "TOKENIZER_VERSION",
    "VECTORIZER_VERSION",
    "tokenize",
    "clean_text",
    "is_valid_token",
    "bigrams",
    "VectorSpace",
    "vectorize",
    "vectorize_many",
    "weighted_term_frequencies",
    "compute_centroid",
    "cosine_similarity",
    "blend_centroid",
    "nearest_centroid",
]
