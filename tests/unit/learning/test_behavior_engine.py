"""
Unit tests for the behavior learning engine.

Tests coverage:
- Click / ignore / shown updates of interaction records
- Confidence adjustment and the explore/exploit decision
- Engagement reports and insights
- Statistics and persistence
"""

import pytest

from adaptive_highlighter.learning import BehaviorLearningEngine, ExplorationStrategy
from adaptive_highlighter.models.interactions import InteractionRecord


def make_learner(clock, random_source) -> BehaviorLearningEngine:
    return BehaviorLearningEngine(
        learning_rate=0.1,
        exploration_rate=0.15,
        min_confidence=50.0,
        half_life_days=30.0,
        exploration=ExplorationStrategy(rng=random_source),
        clock=clock,
    )


@pytest.fixture
def learner(clock, never_explore) -> BehaviorLearningEngine:
    return make_learner(clock, never_explore)


# ============================================================================
# Test Class: Feedback events
# ============================================================================


@pytest.mark.unit
class TestFeedback:
    """Tests for record_shown, record_clicked and record_ignored."""

    def test_new_pairing_is_neutral(self, learner):
        assert learner.quality("golden hour", "lighting") == 0.5
        assert learner.get_record("golden hour", "lighting") is None

    def test_shown(self, learner, clock):
        record = learner.record_shown("golden hour", "lighting")

        assert record.shown_count == 1
        assert record.last_shown_at == clock.now
        assert record.quality_score == 0.5

    def test_click_reinforces(self, learner):
        learner.record_shown("golden hour", "lighting")
        record = learner.record_clicked("golden hour", "lighting")

        assert record.quality_score == pytest.approx(0.55)
        assert record.clicked_count == 1
        assert record.shown_count == 1

    def test_click_without_show_counts_as_shown(self, learner):
        record = learner.record_clicked("golden hour", "lighting")

        assert record.shown_count == 1
        assert record.clicked_count == 1

    def test_click_custom_learning_rate(self, learner):
        record = learner.record_clicked("golden hour", "lighting", learning_rate=0.5)
        assert record.quality_score == pytest.approx(0.75)

    def test_ignore_penalizes(self, learner):
        record = learner.record_ignored("golden hour", "lighting")

        assert record.quality_score == pytest.approx(0.475)
        assert record.ignored_count == 1
        assert record.shown_count == 0

    def test_quality_stays_in_bounds(self, learner):
        for _ in range(200):
            learner.record_clicked("golden hour", "lighting")
            learner.record_ignored("soft shadow", "lighting")

        assert 0.0 <= learner.quality("golden hour", "lighting") <= 1.0
        assert 0.0 <= learner.quality("soft shadow", "lighting") <= 1.0

    def test_ten_clicks_strictly_increase_quality(self, learner):
        learner.record_shown("golden hour", "lighting")
        previous = learner.quality("golden hour", "lighting")

        for _ in range(10):
            current = learner.record_clicked("golden hour", "lighting").quality_score
            assert previous < current < 1.0
            previous = current

        assert learner.get_record("golden hour", "lighting").clicked_count == 10

    def test_phrase_key_normalized(self, learner):
        learner.record_clicked("  Golden   HOUR ", "lighting")
        assert learner.get_record("golden hour", "lighting").clicked_count == 1

    def test_pairings_are_independent(self, learner):
        learner.record_clicked("golden hour", "lighting")
        assert learner.quality("golden hour", "camera") == 0.5


# ============================================================================
# Test Class: Decision
# ============================================================================


@pytest.mark.unit
class TestShouldShow:
    """Tests for adjust_confidence and should_show."""

    def test_adjust_neutral(self, learner):
        assert learner.adjust_confidence("golden hour", "lighting", 80.0) == pytest.approx(80.0)

    def test_adjust_is_clamped(self, learner):
        learner.record_clicked("golden hour", "lighting")
        assert learner.adjust_confidence("golden hour", "lighting", 100.0) == 100.0

    def test_adjust_after_ignores(self, learner):
        learner.record_ignored("golden hour", "lighting")
        assert learner.adjust_confidence("golden hour", "lighting", 80.0) == pytest.approx(78.0)

    def test_passes_threshold(self, learner, never_explore):
        decision = learner.should_show("golden hour", "lighting", 60.0)

        assert decision.show is True
        assert decision.explored is False
        assert decision.adjusted_confidence == pytest.approx(60.0)
        assert never_explore.calls == 1

    def test_below_threshold_hidden(self, learner):
        decision = learner.should_show("golden hour", "lighting", 30.0)

        assert decision.show is False
        assert decision.explored is False

    def test_exploration_shows_below_threshold(self, clock, always_explore):
        learner = make_learner(clock, always_explore)
        decision = learner.should_show("golden hour", "lighting", 30.0)

        assert decision.show is True
        assert decision.explored is True

    def test_exploration_on_passing_highlight_not_flagged(self, clock, always_explore):
        learner = make_learner(clock, always_explore)
        decision = learner.should_show("golden hour", "lighting", 90.0)

        assert decision.show is True
        assert decision.explored is False

    def test_zero_exploration_rate(self, clock, always_explore):
        learner = make_learner(clock, always_explore)
        decision = learner.should_show("golden hour", "lighting", 30.0, exploration_rate=0.0)

        assert decision.show is False
        assert always_explore.calls == 1

    def test_threshold_override(self, learner):
        decision = learner.should_show("golden hour", "lighting", 30.0, min_confidence=20.0)
        assert decision.show is True

    def test_learning_lifts_confidence(self, learner):
        assert learner.should_show("golden hour", "lighting", 45.0).show is False

        for _ in range(3):
            learner.record_clicked("golden hour", "lighting")

        assert learner.should_show("golden hour", "lighting", 45.0).show is True


# ============================================================================
# Test Class: Reports
# ============================================================================


@pytest.mark.unit
class TestReports:
    """Tests for engagement reports, insights and statistics."""

    def test_top_phrases(self, learner):
        learner.record_clicked("golden hour", "lighting")
        learner.record_ignored("soft shadow", "lighting")
        learner.record_shown("dolly shot", "camera")

        top = learner.get_top_phrases(n=2)

        assert [row["phrase"] for row in top] == ["golden hour", "dolly shot"]
        assert top[0]["click_rate"] == 100.0

    def test_underperforming_requires_enough_shows(self, learner):
        for _ in range(5):
            learner.record_shown("soft shadow", "lighting")
        learner.record_ignored("soft shadow", "lighting")
        learner.record_ignored("dolly shot", "camera")

        rows = learner.get_underperforming_phrases()

        assert [row["phrase"] for row in rows] == ["soft shadow"]

    def test_category_engagement(self, learner):
        learner.record_shown("golden hour", "lighting")
        learner.record_clicked("golden hour", "lighting")
        learner.record_shown("soft shadow", "lighting")
        learner.record_shown("dolly shot", "camera")

        engagement = {e.category_id: e for e in learner.get_category_engagement()}

        assert engagement["lighting"].shown == 2
        assert engagement["lighting"].clicked == 1
        assert engagement["camera"].click_rate == 0.0

    def test_category_metrics_order(self, learner):
        learner.record_clicked("golden hour", "lighting")
        learner.record_shown("dolly shot", "camera")

        metrics = learner.get_category_metrics()

        assert [row["category_id"] for row in metrics] == ["lighting", "camera"]

    def test_insights(self, learner):
        for _ in range(25):
            learner.record_shown("dolly shot", "camera")
            learner.record_clicked("golden hour", "lighting")
        learner.record_shown("fog", "environment")
        learner.record_shown("mist", "environment")
        learner.record_shown("rain", "environment")

        by_type = {item["type"]: item for item in learner.get_insights()}

        assert "camera" in by_type["warning"]["message"]
        assert "lighting" in by_type["success"]["message"]
        assert by_type["info"]["category"] == "exploration"

    def test_no_insights_without_data(self, learner):
        assert learner.get_insights() == []

    def test_statistics(self, learner):
        learner.record_shown("golden hour", "lighting")
        learner.record_shown("golden hour", "lighting")
        learner.record_clicked("golden hour", "lighting")
        learner.record_ignored("dolly shot", "camera")

        stats = learner.get_statistics()

        assert stats["total_records"] == 2
        assert stats["total_phrases"] == 2
        assert stats["total_categories"] == 2
        assert stats["total_shown"] == 2
        assert stats["total_clicked"] == 1
        assert stats["total_ignored"] == 1
        assert stats["overall_click_rate"] == 50.0
        assert stats["learning_rate"] == 0.1

    def test_empty_statistics(self, learner):
        stats = learner.get_statistics()

        assert stats["overall_click_rate"] == 0.0
        assert stats["average_quality"] == 0.5


@pytest.mark.unit
class TestPersistence:
    """Tests for to_dict / load_dict."""

    def test_round_trip(self, learner, clock, never_explore):
        learner.record_shown("golden hour", "lighting")
        learner.record_clicked("golden hour", "lighting")
        learner.record_ignored("dolly shot", "camera")

        restored = make_learner(clock, never_explore)
        restored.load_dict(learner.to_dict())

        assert restored.get_statistics() == learner.get_statistics()
        assert restored.get_record("golden hour", "lighting") == learner.get_record(
            "golden hour", "lighting"
        )

    def test_rejects_click_above_shown(self, learner):
        bad = {"records": [{"phrase_key": "x", "category_id": "c", "shown_count": 0, "clicked_count": 2}]}

        with pytest.raises(ValueError):
            learner.load_dict(bad)

    def test_rejects_non_object(self, learner):
        with pytest.raises(ValueError):
            learner.load_dict("records")

    def test_reset(self, learner):
        learner.record_clicked("golden hour", "lighting")
        learner.reset()
        assert learner.records == {}


@pytest.mark.unit
class TestExploration:
    """Tests for ExplorationStrategy."""

    def test_rate_bounds(self):
        strategy = ExplorationStrategy(seed=7)
        assert strategy.explore(0.0) is False
        assert strategy.explore(1.0) is True

    def test_seeded_is_reproducible(self):
        draws_a = ExplorationStrategy(seed=3)
        draws_b = ExplorationStrategy(seed=3)
        assert [draws_a.explore(0.5) for _ in range(20)] == [draws_b.explore(0.5) for _ in range(20)]

    def test_injected_source(self, never_explore):
        strategy = ExplorationStrategy(rng=never_explore)
        assert strategy.explore(0.5) is False
        assert never_explore.calls == 1

    def test_record_model_rejects_bad_counts(self):
        with pytest.raises(ValueError):
            InteractionRecord(phrase_key="x", category_id="c", shown_count=1, clicked_count=2)
