"""
Unit tests for locating phrase occurrences in text.
"""

import pytest

from adaptive_highlighter.pipeline import find_occurrences


@pytest.mark.unit
class TestFindOccurrences:
    def test_all_occurrences(self):
        text = "Soft light, soft lighting, soft light."
        assert find_occurrences(text, "soft light") == [(0, 10), (27, 37)]

    def test_case_insensitive(self):
        assert find_occurrences("DEPTH OF  FIELD", "depth of field") == [(0, 15)]

    def test_not_inside_word(self):
        assert find_occurrences("lighting", "light") == []
        assert find_occurrences("backlight", "light") == []

    def test_not_inside_joined_word(self):
        assert find_occurrences("slow-light", "light") == []
        assert find_occurrences("slow-light", "slow") == []

    def test_joined_phrase(self):
        assert find_occurrences("A slow-motion shot", "slow-motion") == [(2, 13)]

    def test_apostrophe_phrase(self):
        assert find_occurrences("The director's cut", "director's cut") == [(4, 18)]

    def test_hyphen_is_not_a_word_gap(self):
        assert find_occurrences("Depth-of field", "depth of field") == []

    def test_comma_gap(self):
        assert find_occurrences("soft, light", "soft light") == [(0, 11)]

    def test_sentence_break_not_crossed(self):
        assert find_occurrences("soft. Light", "soft light") == []
        assert find_occurrences("soft\nlight", "soft light") == []

    def test_offsets_slice_text(self):
        text = "Warm golden hour glow over a golden hour sky"
        spans = find_occurrences(text, "golden hour")

        assert len(spans) == 2
        assert all(text[start:end].lower() == "golden hour" for start, end in spans)

    def test_empty(self):
        assert find_occurrences("", "light") == []
        assert find_occurrences("light", "  ") == []
