"""
Statistical scores for phrase candidates: TF, IDF and PMI.

All functions are pure: they read CorpusStats and never mutate it.
"""

import math
from typing import List, Optional

from ..models.corpus import CorpusStats


def term_frequency(count: int, total_tokens: int) -> float:
    """
    Occurrences of a term divided by the document's token count.

    Examples:
        >>> term_frequency(2, 10)
        0.2
    """
    if total_tokens <= 0:
        return 0.0
    return count / total_tokens


def inverse_document_frequency(term: str, stats: CorpusStats) -> float:
    """
    Laplace-smoothed IDF: ln((1 + N) / (1 + df)) + 1.

    Always >= 1 for unseen terms and well defined on the very first document.

    Examples:
        >>> inverse_document_frequency("bokeh", CorpusStats())
        1.0
    """
    df = stats.document_frequency.get(term, 0)
    return math.log((1 + stats.total_documents) / (1 + df)) + 1.0


def pmi_denominator(stats: CorpusStats) -> float:
    """Shared Laplace denominator: total tokens + unigram types + 1."""
    return stats.total_tokens + stats.unigram_types() + 1


def _smoothed_probability(count: int, denominator: float) -> float:
    return (count + 1) / denominator


def pair_pmi(
    first: str, second: str, stats: CorpusStats, denominator: Optional[float] = None
) -> float:
    """
    Pointwise mutual information of two adjacent words, in bits.

    Counts come from the corpus unigram/bigram totals; every probability is
    Laplace-smoothed with the same denominator so an empty corpus yields 0.
    """
    if denominator is None:
        denominator = pmi_denominator(stats)
    p_pair = _smoothed_probability(stats.total_frequency.get(f"{first} {second}", 0), denominator)
    p_first = _smoothed_probability(stats.total_frequency.get(first, 0), denominator)
    p_second = _smoothed_probability(stats.total_frequency.get(second, 0), denominator)
    return math.log2(p_pair / (p_first * p_second))


def ngram_pmi(
    words: List[str], stats: CorpusStats, denominator: Optional[float] = None
) -> float:
    """
    Mean PMI over the adjacent word pairs of an n-gram (n >= 2).

    Examples:
        >>> ngram_pmi(["depth", "of", "field"], CorpusStats())
        0.0
    """
    if len(words) < 2:
        return 0.0
    if denominator is None:
        denominator = pmi_denominator(stats)
    pair_scores = [
        pair_pmi(first, second, stats, denominator) for first, second in zip(words, words[1:])
    ]
    return sum(pair_scores) / len(pair_scores)


def final_score(
    tf: float, idf: float, pmi: Optional[float], pmi_normalizer: float = 5.0
) -> float:
    """
    Combine TF-IDF with a positive-PMI boost for multi-word phrases.

    Non-positive PMI leaves the TF-IDF score unboosted (demoted relative to
    real collocations, never discarded).
    """
    base = tf * idf
    if pmi is None:
        return base
    return base * (1.0 + max(0.0, pmi) / pmi_normalizer)
