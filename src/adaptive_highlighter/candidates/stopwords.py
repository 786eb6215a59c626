"""
English stopword list used by the tokenizer, extractor and fuzzy matcher.
"""

from typing import FrozenSet

from ..version import STOPLIST_VERSION

STOPWORDS_EN: FrozenSet[str] = frozenset(
    {
        # Articles, conjunctions, prepositions
        "a", "an", "the", "and", "or", "but", "nor", "so", "yet",
        "in", "on", "at", "to", "for", "of", "with", "by", "from", "as",
        "into", "onto", "over", "under", "about", "above", "below", "between",
        "through", "during", "before", "after", "against", "among", "within",
        "without", "upon", "off", "out", "up", "down", "than", "then",
        # Auxiliaries and modals
        "is", "was", "are", "were", "been", "be", "being", "am",
        "have", "has", "had", "having", "do", "does", "did", "doing",
        "will", "would", "should", "could", "may", "might", "must", "can", "shall",
        # Pronouns and determiners
        "i", "you", "he", "she", "it", "we", "they", "me", "him", "her", "us", "them",
        "my", "your", "his", "its", "our", "their", "mine", "yours", "ours", "theirs",
        "this", "that", "these", "those", "there", "here", "which", "who", "whom",
        "whose", "what", "where", "when", "while", "why", "how",
        "all", "any", "each", "every", "some", "such", "no", "not", "only", "own",
        "same", "other", "both", "few", "more", "most", "very", "just", "too",
        "also", "again", "once", "if", "because", "until",
    }
)

__all__ = ["STOPWORDS_EN", "STOPLIST_VERSION"]
