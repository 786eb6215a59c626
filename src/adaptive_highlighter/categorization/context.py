"""
Context windows around phrase occurrences.
"""

from typing import FrozenSet, List, Optional

from ..candidates.stopwords import STOPWORDS_EN
from ..candidates.tokenizer import tokenize


def extract_context(text: str, start: int, end: int, window_chars: int = 100) -> str:
    """
    Text surrounding an occurrence, with the occurrence itself left out.

    Args:
        text: Full (corrected) text
        start: Occurrence start offset
        end: Occurrence end offset (exclusive)
        window_chars: Characters to take on each side

    Returns:
        Left and right context joined by a space

    Examples:
        >>> extract_context("soft light and deep shadow", 5, 10, 5)
        'soft   and '
    """
    if not text or window_chars <= 0:
        return ""
    left = text[max(0, start - window_chars) : start]
    right = text[end : end + window_chars]
    return f"{left} {right}"


def context_terms(context: str, stopwords: Optional[FrozenSet[str]] = None) -> List[str]:
    """
    Distinct content words of a context window, in order of first appearance.

    Examples:
        >>> context_terms("the soft light of the soft moon")
        ['soft', 'light', 'moon']
    """
    if stopwords is None:
        stopwords = STOPWORDS_EN
    seen = set()
    terms = []
    for token in tokenize(context):
        if token in stopwords or token in seen:
            continue
        seen.add(token)
        terms.append(token)
    return terms
