"""
Unit tests for the English tokenizer.

Tests coverage:
- tokenize: lowercase word tokens, joined words, punctuation
- split_sentences / tokenize_sentences: sentence boundaries
- ngrams: n-gram generation
- stem: suffix stripping
- stable_id: deterministic IDs
"""

import pytest

from adaptive_highlighter.candidates.tokenizer import (
    TOKENIZER_VERSION,
    ngrams,
    split_sentences,
    stable_id,
    stem,
    tokenize,
    tokenize_sentences,
)


# ============================================================================
# Test Class: Tokenize
# ============================================================================


@pytest.mark.unit
class TestTokenize:
    """Tests for tokenize function."""

    def test_simple_sentence(self):
        assert tokenize("Golden hour lighting") == ["golden", "hour", "lighting"]

    def test_joined_words_stay_whole(self):
        tokens = tokenize("A slow-motion shot, the director's cut")
        assert "slow-motion" in tokens
        assert "director's" in tokens

    def test_punctuation_dropped(self):
        assert tokenize("Light! Shadow? (Glow)") == ["light", "shadow", "glow"]

    def test_unicode_letters(self):
        assert tokenize("Café noir") == ["café", "noir"]

    def test_digits_kept(self):
        assert tokenize("Shot in 4k at 24fps") == ["shot", "in", "4k", "at", "24fps"]

    def test_empty(self):
        assert tokenize("") == []
        assert tokenize(None) == []

    def test_deterministic(self):
        text = "Soft light, hard shadow."
        assert tokenize(text) == tokenize(text)


# ============================================================================
# Test Class: Sentences
# ============================================================================


@pytest.mark.unit
class TestSentences:
    """Tests for sentence splitting."""

    def test_terminators(self):
        assert tokenize_sentences("Soft light. Hard shadow! Why? Yes; no") == [
            ["soft", "light"],
            ["hard", "shadow"],
            ["why"],
            ["yes"],
            ["no"],
        ]

    def test_decimal_point_is_not_a_break(self):
        assert tokenize_sentences("Shot at f/2.8. Soft light") == [
            ["shot", "at", "f", "2", "8"],
            ["soft", "light"],
        ]

    def test_newlines_break(self):
        assert len(tokenize_sentences("first line\nsecond line\n\nthird")) == 3

    def test_empty_sentences_skipped(self):
        assert tokenize_sentences("... !!! Light.") == [["light"]]

    def test_split_sentences_empty(self):
        assert split_sentences("") == []


# ============================================================================
# Test Class: Ngrams
# ============================================================================


@pytest.mark.unit
class TestNgrams:
    """Tests for ngrams function."""

    def test_bigrams(self):
        assert ngrams(["depth", "of", "field"], 2) == ["depth of", "of field"]

    def test_full_length(self):
        assert ngrams(["depth", "of", "field"], 3) == ["depth of field"]

    def test_too_long(self):
        assert ngrams(["depth"], 2) == []

    def test_invalid_size(self):
        assert ngrams(["depth"], 0) == []


# ============================================================================
# Test Class: Stem and IDs
# ============================================================================


@pytest.mark.unit
class TestStem:
    """Tests for the suffix stemmer."""

    @pytest.mark.parametrize(
        "word,expected",
        [
            ("lighting", "light"),
            ("shadows", "shadow"),
            ("skies", "sky"),
            ("softly", "soft"),
            ("glass", "glass"),
            ("lens", "lens"),
            ("Shots", "shot"),
        ],
    )
    def test_stem(self, word, expected):
        assert stem(word) == expected


@pytest.mark.unit
class TestStableId:
    """Tests for stable_id function."""

    def test_deterministic(self):
        assert stable_id("phrase", "soft light") == stable_id("phrase", "soft light")

    def test_length(self):
        assert len(stable_id("phrase", "soft light")) == 12

    def test_distinct_inputs(self):
        assert stable_id("phrase", "soft light") != stable_id("phrase", "hard light")

    def test_version_is_set(self):
        assert TOKENIZER_VERSION
