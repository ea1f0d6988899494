"""
Deterministic email tokenizer with noise filtering and synthetic bigrams.

Pipeline:
1. Truncate the input (bounded work on pathological mail)
2. Drop <style>, <script> and comment blocks with their content
3. Drop remaining HTML tags
4. Lowercase, replace everything but word characters and Vietnamese
   diacritics with whitespace
5. Keep words by length, digits, stop-word and underscore rules
6. Append ``w1_w2`` bigrams over adjacent kept words
"""

import re
from typing import List, Optional

from ..config import settings
from .stopwords import STOPWORDS

TOKENIZER_VERSION = "vsm-tokenizer-1.0.0"

_BLOCK_PATTERNS = [
    re.compile(r"<style[^>]*>.*?</style>", re.IGNORECASE | re.DOTALL),
    re.compile(r"<script[^>]*>.*?</script>", re.IGNORECASE | re.DOTALL),
    re.compile(r"<!--.*?-->", re.DOTALL),
]
_TAG_PATTERN = re.compile(r"<[^>]+>")

# ASCII word characters plus Latin-1 Supplement .. Latin Extended Additional
_NON_WORD_PATTERN = re.compile(r"[^A-Za-z0-9_\sÀ-ỹ]")
_DIGIT_PATTERN = re.compile(r"[0-9]")


def clean_text(text: str, max_length: Optional[int] = None) -> str:
    """
    Strip markup and punctuation from raw email text.

    Args:
        text: Raw subject, sender or body (plain text or HTML)
        max_length: Truncation limit (default: settings.tokenizer_max_text_length)

    Returns:
        Lowercased text containing only word characters and whitespace

    Examples:
        >>> clean_text("<p>Hello <b>World</b></p>")
        ' hello  world  '
    """
    if max_length is None:
        max_length = settings.tokenizer_max_text_length

    cleaned = text[:max_length]
    for pattern in _BLOCK_PATTERNS:
        cleaned = pattern.sub(" ", cleaned)
    cleaned = _TAG_PATTERN.sub(" ", cleaned)
    cleaned = cleaned.lower()
    return _NON_WORD_PATTERN.sub(" ", cleaned)


def is_valid_token(
    word: str,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
) -> bool:
    """
    Check a cleaned word against the unigram filters.

    A word is kept when its length is strictly between ``min_length`` and
    ``max_length``, it has no digit, is not a stop word and does not start
    with an underscore.
    """
    if min_length is None:
        min_length = settings.tokenizer_min_token_length
    if max_length is None:
        max_length = settings.tokenizer_max_token_length

    return (
        min_length < len(word) < max_length
        and word not in STOPWORDS
        and not _DIGIT_PATTERN.search(word)
        and not word.startswith("_")
    )


def bigrams(
    tokens: List[str],
    limit: Optional[int] = None,
    min_word_length: Optional[int] = None,
) -> List[str]:
    """
    Join adjacent tokens into ``w1_w2`` bigrams.

    Only the first ``limit`` positions are scanned, and a pair is emitted only
    when both words are longer than ``min_word_length``.

    Examples:
        >>> bigrams(["verify", "account", "now"])
        ['verify_account']
    """
    if limit is None:
        limit = settings.tokenizer_bigram_limit
    if min_word_length is None:
        min_word_length = settings.tokenizer_bigram_min_word_length

    result = []
    for i in range(min(len(tokens) - 1, limit)):
        w1, w2 = tokens[i], tokens[i + 1]
        if len(w1) > min_word_length and len(w2) > min_word_length:
            result.append(f"{w1}_{w2}")
    return result


def tokenize(text: str, max_length: Optional[int] = None) -> List[str]:
    """
    Tokenize email text into filtered unigrams followed by bigrams.

    Args:
        text: Raw text; non-string or empty input yields no tokens
        max_length: Truncation limit (default: settings.tokenizer_max_text_length)

    Returns:
        Unigrams in document order, then bigrams in document order

    Examples:
        >>> tokenize("Meeting notes for the quarterly review")
        ['meeting', 'notes', 'quarterly', 'review', 'meeting_notes', 'notes_quarterly', 'quarterly_review']
        >>> tokenize("")
        []
    """
    if not text or not isinstance(text, str):
        return []

    tokens = [w for w in clean_text(text, max_length).split() if is_valid_token(w)]
    tokens.extend(bigrams(tokens))
    return tokens
