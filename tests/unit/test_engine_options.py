"""
Unit tests for engine option models and version metadata.
"""

import pytest
from pydantic import ValidationError

from adaptive_highlighter.config import Settings
from adaptive_highlighter.models.options import ConfigurationResult, EngineOptions
from adaptive_highlighter.version import STATE_SCHEMA_VERSION, get_current_engine_version


@pytest.mark.unit
class TestEngineOptions:
    def test_defaults(self):
        options = EngineOptions()

        assert options.min_confidence == 50.0
        assert options.max_highlights is None
        assert options.learning_rate == 0.1
        assert options.exploration_rate == 0.15
        assert options.context_window_chars == 100

    def test_camel_case_aliases(self):
        options = EngineOptions.model_validate({"minConfidence": 60, "maxHighlights": 4})

        assert options.min_confidence == 60.0
        assert options.max_highlights == 4

    def test_snake_case_names(self):
        assert EngineOptions(exploration_rate=0.0).exploration_rate == 0.0

    @pytest.mark.parametrize(
        "field,value",
        [
            ("min_confidence", -1),
            ("min_confidence", 101),
            ("max_highlights", 0),
            ("learning_rate", 0.0),
            ("learning_rate", 1.5),
            ("exploration_rate", 1.1),
            ("context_window_chars", -5),
        ],
    )
    def test_out_of_range(self, field, value):
        with pytest.raises(ValidationError):
            EngineOptions(**{field: value})

    def test_unknown_field_forbidden(self):
        with pytest.raises(ValidationError):
            EngineOptions.model_validate({"bogus": 1})

    def test_field_name_for(self):
        assert EngineOptions.field_name_for("minConfidence") == "min_confidence"
        assert EngineOptions.field_name_for("min_confidence") == "min_confidence"
        assert EngineOptions.field_name_for("bogus") is None

    def test_from_settings(self):
        settings = Settings(default_min_confidence=65.0, default_max_highlights=8)
        options = EngineOptions.from_settings(settings)

        assert options.min_confidence == 65.0
        assert options.max_highlights == 8


@pytest.mark.unit
class TestConfigurationResult:
    def test_ok(self):
        result = ConfigurationResult()
        assert result.ok is True

        result.add_rejection("bogus", "unknown option")
        assert result.ok is False
        assert result.rejected == {"bogus": "unknown option"}


@pytest.mark.unit
class TestEngineVersion:
    def test_current_version(self):
        version = get_current_engine_version()

        assert version.state_schema_version == STATE_SCHEMA_VERSION
        assert version.tokenizer_version
        assert version.fuzzy_matcher_version
