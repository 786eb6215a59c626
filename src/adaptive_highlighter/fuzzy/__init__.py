"""
Fuzzy spelling correction against the canonical domain dictionary.
"""

from .dictionary import (
    DOMAIN_VOCABULARY,
    build_dictionary,
    load_dictionary_file,
    load_english_lexicon,
)
from .matcher import CorrectionSuggestion, FuzzyMatcher, MatchResult

__all__ = [
    "DOMAIN_VOCABULARY",
    "build_dictionary",
    "load_dictionary_file",
    "load_english_lexicon",
    "CorrectionSuggestion",
    "FuzzyMatcher",
    "MatchResult",
]
