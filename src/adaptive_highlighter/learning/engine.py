"""
Behavior learning engine.

Turns implicit feedback (shown / clicked / ignored) on (phrase, category)
pairings into a quality score, and uses it to adjust confidence and decide
whether a highlight is shown.
"""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np
import structlog

from ..models.highlights import ShowDecision
from ..models.interactions import CategoryEngagement, InteractionRecord
from . import insights
from .exploration import ExplorationStrategy
from .interactions import decayed_quality, materialize_decay, penalize, phrase_key, reinforce

logger = structlog.get_logger(__name__)

RecordKey = Tuple[str, str]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BehaviorLearningEngine:
    """
    Per-(phrase, category) interaction records with decaying quality.

    Mutations first materialize pending time decay, then apply the event and
    move the record's decay anchor. Reads decay without mutating.
    """

    def __init__(
        self,
        learning_rate: Optional[float] = None,
        exploration_rate: Optional[float] = None,
        min_confidence: Optional[float] = None,
        half_life_days: Optional[float] = None,
        exploration: Optional[ExplorationStrategy] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        from ..config import settings

        self.learning_rate = (
            learning_rate if learning_rate is not None else settings.default_learning_rate
        )
        self.exploration_rate = (
            exploration_rate if exploration_rate is not None else settings.default_exploration_rate
        )
        self.min_confidence = (
            min_confidence if min_confidence is not None else settings.default_min_confidence
        )
        self.half_life_days = (
            half_life_days if half_life_days is not None else settings.quality_half_life_days
        )
        self.neutral_quality = settings.neutral_quality
        self.ignore_rate_factor = settings.ignore_rate_factor
        self.exploration = exploration or ExplorationStrategy(seed=settings.exploration_seed)
        self.clock = clock or utc_now

        self.records: Dict[RecordKey, InteractionRecord] = {}

    def reset(self) -> None:
        self.records = {}

    # ------------------------------------------------------------------
    # Record access
    # ------------------------------------------------------------------

    def get_record(self, phrase: str, category_id: str) -> Optional[InteractionRecord]:
        return self.records.get((phrase_key(phrase), category_id))

    def _touch(self, phrase: str, category_id: str, now: datetime) -> InteractionRecord:
        key = (phrase_key(phrase), category_id)
        record = self.records.get(key)
        if record is None:
            record = InteractionRecord(phrase_key=key[0], category_id=category_id, updated_at=now)
            self.records[key] = record
        else:
            materialize_decay(record, now, self.half_life_days, self.neutral_quality)
        return record

    def quality(self, phrase: str, category_id: str) -> float:
        """Current decayed quality (neutral for unseen pairings)."""
        record = self.get_record(phrase, category_id)
        if record is None:
            return self.neutral_quality
        return decayed_quality(record, self.clock(), self.half_life_days, self.neutral_quality)

    def time_decay(self, record: InteractionRecord, now: Optional[datetime] = None) -> float:
        """Decayed quality of a record as of now (default: clock)."""
        return decayed_quality(
            record, now or self.clock(), self.half_life_days, self.neutral_quality
        )

    # ------------------------------------------------------------------
    # Feedback events
    # ------------------------------------------------------------------

    def record_shown(self, phrase: str, category_id: str) -> InteractionRecord:
        now = self.clock()
        record = self._touch(phrase, category_id, now)
        record.shown_count += 1
        record.last_shown_at = now
        return record

    def record_clicked(
        self, phrase: str, category_id: str, learning_rate: Optional[float] = None
    ) -> InteractionRecord:
        """
        Positive feedback: quality += lr * (1 - quality).

        A click on a never-shown pairing counts it as shown so that
        clicked_count never exceeds shown_count.
        """
        now = self.clock()
        lr = self.learning_rate if learning_rate is None else learning_rate
        record = self._touch(phrase, category_id, now)

        record.clicked_count += 1
        if record.shown_count < record.clicked_count:
            record.shown_count = record.clicked_count
        record.last_clicked_at = now
        record.quality_score = reinforce(record.quality_score, lr)

        logger.debug(
            "interaction_clicked",
            phrase=record.phrase_key,
            category_id=category_id,
            quality_score=round(record.quality_score, 4),
        )
        return record

    def record_ignored(
        self, phrase: str, category_id: str, learning_rate: Optional[float] = None
    ) -> InteractionRecord:
        """Negative feedback: quality -= lr * quality * 0.5."""
        now = self.clock()
        lr = self.learning_rate if learning_rate is None else learning_rate
        record = self._touch(phrase, category_id, now)

        record.ignored_count += 1
        record.quality_score = penalize(record.quality_score, lr, self.ignore_rate_factor)

        logger.debug(
            "interaction_ignored",
            phrase=record.phrase_key,
            category_id=category_id,
            quality_score=round(record.quality_score, 4),
        )
        return record

    # ------------------------------------------------------------------
    # Decision
    # ------------------------------------------------------------------

    def adjust_confidence(self, phrase: str, category_id: str, base_confidence: float) -> float:
        """clamp(base * (0.5 + quality), 0, 100)."""
        quality = self.quality(phrase, category_id)
        return float(np.clip(base_confidence * (0.5 + quality), 0.0, 100.0))

    def should_show(
        self,
        phrase: str,
        category_id: str,
        base_confidence: float,
        min_confidence: Optional[float] = None,
        exploration_rate: Optional[float] = None,
    ) -> ShowDecision:
        """
        Explore/exploit decision for one highlight.

        One exploration draw is consumed per call. When it succeeds the
        highlight is shown regardless of quality; explored is set only when
        the threshold alone would have hidden it.
        """
        threshold = self.min_confidence if min_confidence is None else min_confidence
        rate = self.exploration_rate if exploration_rate is None else exploration_rate

        adjusted = self.adjust_confidence(phrase, category_id, base_confidence)
        passes = adjusted >= threshold
        explore = self.exploration.explore(rate)

        return ShowDecision(
            show=passes or explore,
            adjusted_confidence=adjusted,
            explored=explore and not passes,
        )

    # ------------------------------------------------------------------
    # Reports
    # ------------------------------------------------------------------

    def _scored(self) -> List[Tuple[InteractionRecord, float]]:
        now = self.clock()
        return [(record, self.time_decay(record, now)) for record in self.records.values()]

    def get_top_phrases(self, n: int = 20) -> List[Dict]:
        return insights.top_phrases(self._scored(), n)

    def get_underperforming_phrases(self, n: int = 20) -> List[Dict]:
        return insights.underperforming_phrases(self._scored(), n)

    def get_category_engagement(self) -> List[CategoryEngagement]:
        return insights.category_engagement(self.records.values())

    def get_category_metrics(self) -> List[Dict]:
        return insights.category_metrics(self.records.values())

    def get_insights(self) -> List[Dict]:
        return insights.insights(list(self.records.values()))

    def get_statistics(self) -> Dict[str, Any]:
        records = list(self.records.values())
        total_shown = sum(r.shown_count for r in records)
        total_clicked = sum(r.clicked_count for r in records)
        qualities = [quality for _, quality in self._scored()]

        return {
            "total_records": len(records),
            "total_phrases": len({r.phrase_key for r in records}),
            "total_categories": len({r.category_id for r in records}),
            "total_shown": total_shown,
            "total_clicked": total_clicked,
            "total_ignored": sum(r.ignored_count for r in records),
            "overall_click_rate": round(total_clicked / total_shown * 100, 2) if total_shown else 0.0,
            "average_quality": round(float(np.mean(qualities)), 6) if qualities else self.neutral_quality,
            "learning_rate": self.learning_rate,
            "exploration_rate": self.exploration_rate,
        }

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            "records": [
                self.records[key].model_dump(mode="json") for key in sorted(self.records)
            ]
        }

    def load_dict(self, data: Dict[str, Any]) -> None:
        """
        Replace records with persisted ones.

        Raises:
            ValueError: If any record fails validation
        """
        if not isinstance(data, dict):
            raise ValueError("interaction state must be an object")
        records = [InteractionRecord.model_validate(raw) for raw in data.get("records", [])]
        self.records = {(r.phrase_key, r.category_id): r for r in records}
