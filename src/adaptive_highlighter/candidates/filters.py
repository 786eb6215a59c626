"""
Hard filters deciding which n-grams may become phrase candidates.

Applies deterministic rules to drop:
- Stopword unigrams and unigrams below the minimum length
- Multi-word phrases that start or end with a stopword
- Phrases made only of numbers
"""

import re
from typing import FrozenSet, List, Optional

from .stopwords import STOPWORDS_EN

NUMERIC_PATTERN = re.compile(r"^[\d\-']+$")


def is_candidate_phrase(
    words: List[str],
    stopwords: Optional[FrozenSet[str]] = None,
    min_unigram_length: int = 3,
) -> bool:
    """
    Decide whether an n-gram is eligible to be scored.

    Interior stopwords are allowed ("depth of field"), edge stopwords are not
    ("of field", "depth of").

    Args:
        words: Tokens of the n-gram
        stopwords: Custom stopword set (default: STOPWORDS_EN)
        min_unigram_length: Minimum character length for single words

    Returns:
        True when the n-gram should become a candidate

    Examples:
        >>> is_candidate_phrase(["depth", "of", "field"])
        True
        >>> is_candidate_phrase(["of", "field"])
        False
        >>> is_candidate_phrase(["the"])
        False
    """
    if stopwords is None:
        stopwords = STOPWORDS_EN
    if not words:
        return False

    if all(NUMERIC_PATTERN.match(w) for w in words):
        return False

    if len(words) == 1:
        word = words[0]
        return word not in stopwords and len(word) >= min_unigram_length

    return words[0] not in stopwords and words[-1] not in stopwords
