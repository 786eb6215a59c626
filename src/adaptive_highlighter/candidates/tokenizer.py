"""
Deterministic English tokenizer with sentence-aware n-gram generation.

Provides stable tokenization with support for:
- Intra-word apostrophes and hyphens (director's, slow-motion)
- Unicode letters and digits (4k, 24fps, café)
- Sentence splitting so n-grams never cross a sentence break
- Stable ID generation via SHA1
- A light suffix stemmer for word matching
"""

import hashlib
import re
from typing import List

from ..version import TOKENIZER_VERSION

# Word chars + optional joined parts ("slow-motion", "director's")
TOKEN_PATTERN = re.compile(r"[^\W_]+(?:['\-][^\W_]+)*")

# Terminal punctuation followed by whitespace/end, or any newline run
SENTENCE_BREAK_PATTERN = re.compile(r"[.!?;]+(?=\s|$)|\n+")

# Ordered (suffix, replacement) rules, first match wins
STEM_SUFFIXES = [
    ("ies", "y"),
    ("ing", ""),
    ("ed", ""),
    ("ly", ""),
    ("s", ""),
]


def tokenize(text: str) -> List[str]:
    """
    Tokenize text into lowercase word tokens, dropping punctuation.

    Args:
        text: Input text (any case)

    Returns:
        List of lowercase tokens

    Examples:
        >>> tokenize("Golden-hour light, f/2.8!")
        ['golden-hour', 'light', 'f', '2', '8']
        >>> tokenize("The director's cut")
        ['the', "director's", 'cut']
    """
    if not text:
        return []
    return TOKEN_PATTERN.findall(text.lower())


def split_sentences(text: str) -> List[str]:
    """
    Split text on sentence terminators (. ! ? ;) and newlines.

    A terminator only counts when followed by whitespace or the end of text,
    so decimals such as "2.8" stay inside one sentence.

    Args:
        text: Input text

    Returns:
        List of sentence strings (may contain blanks)
    """
    if not text:
        return []
    return SENTENCE_BREAK_PATTERN.split(text)


def tokenize_sentences(text: str) -> List[List[str]]:
    """
    Tokenize text sentence by sentence, skipping sentences without tokens.

    Examples:
        >>> tokenize_sentences("Soft light. Hard shadow!")
        [['soft', 'light'], ['hard', 'shadow']]
    """
    sentences = []
    for sentence in split_sentences(text):
        tokens = tokenize(sentence)
        if tokens:
            sentences.append(tokens)
    return sentences


def ngrams(tokens: List[str], n: int) -> List[str]:
    """
    Generate n-grams from token list.

    Args:
        tokens: List of tokens
        n: N-gram size

    Returns:
        List of n-gram strings (space-joined)

    Examples:
        >>> ngrams(["depth", "of", "field"], 2)
        ['depth of', 'of field']
    """
    if n < 1 or n > len(tokens):
        return []
    return [" ".join(tokens[i : i + n]) for i in range(len(tokens) - n + 1)]


def stem(word: str) -> str:
    """
    Strip one common English suffix from words longer than four letters.

    Examples:
        >>> stem("lighting")
        'light'
        >>> stem("shadows")
        'shadow'
        >>> stem("glass")
        'glass'
    """
    word = word.lower()
    if len(word) <= 4:
        return word
    for suffix, replacement in STEM_SUFFIXES:
        if word.endswith(suffix):
            if suffix == "s" and word.endswith("ss"):
                return word
            return word[: -len(suffix)] + replacement
    return word


def stable_id(*parts: str) -> str:
    """
    Generate deterministic ID from parts using SHA1.

    Returns:
        Hex SHA1 digest (first 12 chars for brevity)
    """
    raw = "|".join(parts).encode("utf-8")
    return hashlib.sha1(raw).hexdigest()[:12]


__all__ = [
    "TOKENIZER_VERSION",
    "tokenize",
    "split_sentences",
    "tokenize_sentences",
    "ngrams",
    "stem",
    "stable_id",
]
