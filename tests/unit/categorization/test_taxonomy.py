"""
Unit tests for seed taxonomy loading.
"""

import json

import pytest

from adaptive_highlighter.categorization.taxonomy import (
    DEFAULT_TAXONOMY,
    default_categories,
    load_taxonomy,
)


@pytest.mark.unit
class TestDefaultTaxonomy:
    def test_bundled_categories(self):
        ids = [c.id for c in default_categories()]

        assert len(ids) == 9
        assert {"camera", "lighting", "technical", "emotions"} <= set(ids)

    def test_seed_words_are_lowercase(self):
        for category in default_categories():
            assert category.seed_words
            assert all(w == w.lower() for w in category.seed_words)

    def test_fresh_objects(self):
        first = default_categories()
        first[0].seed_words.add("extra")
        assert "extra" not in default_categories()[0].seed_words

    def test_no_path_uses_default(self):
        assert len(load_taxonomy("")) == len(DEFAULT_TAXONOMY)


@pytest.mark.unit
class TestLoadTaxonomy:
    def test_list_form(self, tmp_path):
        path = tmp_path / "taxonomy.json"
        path.write_text(
            json.dumps([{"id": "sound", "label": "Sound", "seed_words": ["Audio", "score"]}]),
            encoding="utf-8",
        )

        categories = load_taxonomy(str(path))

        assert len(categories) == 1
        assert categories[0].id == "sound"
        assert categories[0].seed_words == {"audio", "score"}

    def test_dict_form(self, tmp_path):
        path = tmp_path / "taxonomy.json"
        path.write_text(
            json.dumps({"sound": ["audio"], "weather": {"label": "Weather", "seed_words": ["fog"]}}),
            encoding="utf-8",
        )

        categories = {c.id: c for c in load_taxonomy(str(path))}

        assert categories["sound"].seed_words == {"audio"}
        assert categories["weather"].label == "Weather"

    def test_invalid_entries_skipped(self, tmp_path):
        path = tmp_path / "taxonomy.json"
        path.write_text(
            json.dumps([{"label": "no id"}, "junk", {"id": "sound", "seed_words": ["audio"]}]),
            encoding="utf-8",
        )

        assert [c.id for c in load_taxonomy(str(path))] == ["sound"]

    def test_malformed_json_falls_back(self, tmp_path):
        path = tmp_path / "taxonomy.json"
        path.write_text("{not json", encoding="utf-8")

        assert len(load_taxonomy(str(path))) == len(DEFAULT_TAXONOMY)

    def test_missing_file_falls_back(self, tmp_path):
        assert len(load_taxonomy(str(tmp_path / "missing.json"))) == len(DEFAULT_TAXONOMY)

    def test_empty_list_falls_back(self, tmp_path):
        path = tmp_path / "taxonomy.json"
        path.write_text("[]", encoding="utf-8")

        assert len(load_taxonomy(str(path))) == len(DEFAULT_TAXONOMY)
