"""
Dictionary-based spelling correction for near-miss domain terms.

Uses optimal string alignment distance (Levenshtein plus adjacent
transposition) from rapidfuzz, so "bokhe" is one edit away from "bokeh".
"""

import math
import re
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Optional

import structlog
from rapidfuzz.distance import OSA

from ..candidates.stopwords import STOPWORDS_EN
from ..candidates.tokenizer import stem
from .dictionary import build_dictionary, load_english_lexicon

logger = structlog.get_logger(__name__)

# Letter-only words; a word touching digits or underscores is left alone
WORD_PATTERN = re.compile(r"(?<![\w'\-])[^\W\d_]+(?:['\-][^\W\d_]+)*(?![\w'\-])")


@dataclass
class MatchResult:
    """Best dictionary match for a single word."""

    match: Optional[str]
    distance: float
    confidence: int
    is_good_match: bool


@dataclass
class CorrectionSuggestion:
    """A proposed replacement for one token of a text."""

    original: str
    suggested: str
    distance: int
    confidence: int
    position: int


def _match_case(template: str, word: str) -> str:
    if len(template) > 1 and template.isupper():
        return word.upper()
    if template[:1].isupper():
        return word[:1].upper() + word[1:]
    return word


def _similarity(a: str, b: str, distance: float) -> int:
    longest = max(len(a), len(b), 1)
    return int(round(max(0.0, 1.0 - distance / longest) * 100))


class FuzzyMatcher:
    """
    Corrects near-miss spellings against a static canonical dictionary.

    A token is replaced only when a dictionary entry sharing its first letter,
    within the length band, is at most max_distance edits away and the edit
    ratio (distance / token length) stays within max_ratio. Correctly spelled
    English words (per the bundled English lexicon) are never replaced.
    """

    def __init__(
        self,
        dictionary: Optional[Iterable[str]] = None,
        max_distance: Optional[int] = None,
        max_ratio: Optional[float] = None,
        length_band: Optional[int] = None,
        min_token_length: Optional[int] = None,
        stopwords: Optional[FrozenSet[str]] = None,
        protect_english: Optional[bool] = None,
    ):
        from ..config import settings

        self.dictionary: FrozenSet[str] = (
            frozenset(w.lower() for w in dictionary)
            if dictionary is not None
            else build_dictionary(dictionary_file=settings.dictionary_file)
        )
        self.max_distance = (
            max_distance if max_distance is not None else settings.fuzzy_max_distance
        )
        self.max_ratio = max_ratio if max_ratio is not None else settings.fuzzy_max_ratio
        self.length_band = length_band if length_band is not None else settings.fuzzy_length_band
        self.min_token_length = (
            min_token_length if min_token_length is not None else settings.fuzzy_min_token_length
        )
        self.stopwords = stopwords if stopwords is not None else STOPWORDS_EN
        if protect_english is None:
            protect_english = settings.fuzzy_protect_english
        self.lexicon = load_english_lexicon() if protect_english else None

        self._by_initial: Dict[str, List[str]] = defaultdict(list)
        for entry in sorted(self.dictionary):
            self._by_initial[entry[0]].append(entry)

    def add_word(self, word: str) -> None:
        """Extend the canonical dictionary with one more word."""
        word = (word or "").strip().lower()
        if not word or word in self.dictionary:
            return
        self.dictionary = self.dictionary | {word}
        self._by_initial[word[0]] = sorted([*self._by_initial[word[0]], word])

    def _is_protected(self, word: str) -> bool:
        return (
            len(word) < self.min_token_length
            or word in self.dictionary
            or word in self.stopwords
            or stem(word) in self.dictionary
            or (self.lexicon is not None and bool(self.lexicon.known([word])))
        )

    def _best_entry(self, word: str) -> Optional[tuple]:
        best = None
        for entry in self._by_initial.get(word[0], ()):
            if abs(len(entry) - len(word)) > self.length_band:
                continue
            distance = OSA.distance(word, entry, score_cutoff=self.max_distance)
            if distance > self.max_distance or distance / len(word) > self.max_ratio:
                continue
            if best is None or (distance, entry) < best:
                best = (distance, entry)
        return best

    def correct_word(self, word: str) -> Optional[str]:
        """
        Find the safe lowercase correction for one word.

        Returns:
            The dictionary entry, or None when the word is known or no entry
            is close enough

        Examples:
            >>> FuzzyMatcher(dictionary=["bokeh"]).correct_word("bokhe")
            'bokeh'
        """
        lowered = word.lower()
        if self._is_protected(lowered):
            return None
        best = self._best_entry(lowered)
        return best[1] if best else None

    def correct(self, text: str) -> str:
        """
        Replace misspelled whole words with their dictionary entries.

        Never raises; returns the input unchanged when nothing is corrected.

        Examples:
            >>> FuzzyMatcher(dictionary=["bokeh"]).correct("bokhe effect")
            'bokeh effect'
        """
        if not isinstance(text, str) or not text:
            return text if isinstance(text, str) else ""

        corrections = 0

        def replace(match: re.Match) -> str:
            nonlocal corrections
            token = match.group(0)
            fixed = self.correct_word(token)
            if fixed is None:
                return token
            corrections += 1
            return _match_case(token, fixed)

        corrected = WORD_PATTERN.sub(replace, text)
        if corrections:
            logger.debug("fuzzy_corrections_applied", corrections=corrections)
        return corrected

    def suggest_corrections(self, text: str) -> List[CorrectionSuggestion]:
        """
        List the corrections correct() would make, with token positions.

        Args:
            text: Input text

        Returns:
            One suggestion per corrected token; position is the token index
        """
        suggestions = []
        if not text:
            return suggestions

        for position, match in enumerate(WORD_PATTERN.finditer(text)):
            token = match.group(0)
            lowered = token.lower()
            if self._is_protected(lowered):
                continue
            best = self._best_entry(lowered)
            if best is None:
                continue
            distance, entry = best
            suggestions.append(
                CorrectionSuggestion(
                    original=token,
                    suggested=entry,
                    distance=distance,
                    confidence=_similarity(lowered, entry, distance),
                    position=position,
                )
            )
        return suggestions

    def find_best_match(self, word: str, candidates: Iterable[str]) -> MatchResult:
        """
        Closest candidate to a word, case-insensitively.

        Ties keep the earliest candidate. is_good_match applies the same
        distance and ratio limits as correct().
        """
        lowered = (word or "").lower()
        best_candidate = None
        best_distance = math.inf
        for candidate in candidates:
            distance = OSA.distance(lowered, candidate.lower())
            if distance < best_distance:
                best_candidate, best_distance = candidate, distance

        if best_candidate is None:
            return MatchResult(match=None, distance=math.inf, confidence=0, is_good_match=False)

        ratio = best_distance / max(len(lowered), 1)
        return MatchResult(
            match=best_candidate,
            distance=best_distance,
            confidence=_similarity(lowered, best_candidate.lower(), best_distance),
            is_good_match=best_distance <= self.max_distance and ratio <= self.max_ratio,
        )
