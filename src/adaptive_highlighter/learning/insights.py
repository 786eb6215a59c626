"""
Engagement reports derived from interaction records.

All functions are read-only over (record, current quality) pairs.
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Tuple

from ..models.interactions import CategoryEngagement, InteractionRecord

# Thresholds for category engagement insights
MIN_SHOWN_FOR_INSIGHT = 20
LOW_CLICK_RATE = 0.10
HIGH_CLICK_RATE = 0.30
UNDERPERFORMING_MIN_SHOWN = 5

ScoredRecord = Tuple[InteractionRecord, float]


def _percent(rate: float) -> float:
    return round(rate * 100, 1)


def _phrase_row(record: InteractionRecord, quality: float) -> Dict:
    return {
        "phrase": record.phrase_key,
        "category_id": record.category_id,
        "score": quality,
        "click_rate": _percent(record.click_rate),
        "shown": record.shown_count,
        "clicked": record.clicked_count,
        "ignored": record.ignored_count,
    }


def top_phrases(scored: Iterable[ScoredRecord], n: int = 20) -> List[Dict]:
    """Highest-quality (phrase, category) pairings."""
    ranked = sorted(scored, key=lambda item: (-item[1], item[0].phrase_key, item[0].category_id))
    return [_phrase_row(record, quality) for record, quality in ranked[:n]]


def underperforming_phrases(scored: Iterable[ScoredRecord], n: int = 20) -> List[Dict]:
    """Lowest-quality pairings among those shown often enough to judge."""
    eligible = [item for item in scored if item[0].shown_count >= UNDERPERFORMING_MIN_SHOWN]
    ranked = sorted(eligible, key=lambda item: (item[1], item[0].phrase_key, item[0].category_id))
    return [_phrase_row(record, quality) for record, quality in ranked[:n]]


def category_engagement(records: Iterable[InteractionRecord]) -> List[CategoryEngagement]:
    """Aggregate shown/clicked counts per category, sorted by id."""
    shown: Dict[str, int] = defaultdict(int)
    clicked: Dict[str, int] = defaultdict(int)
    for record in records:
        shown[record.category_id] += record.shown_count
        clicked[record.category_id] += record.clicked_count
    return [
        CategoryEngagement(category_id=category_id, shown=shown[category_id], clicked=clicked[category_id])
        for category_id in sorted(shown)
    ]


def category_metrics(records: Iterable[InteractionRecord]) -> List[Dict]:
    """Per-category engagement, best click rate first."""
    rows = [
        {
            "category_id": e.category_id,
            "shown": e.shown,
            "clicked": e.clicked,
            "click_rate": _percent(e.click_rate),
            "score": e.click_rate if e.shown else 0.5,
        }
        for e in category_engagement(records)
    ]
    return sorted(rows, key=lambda row: (-row["score"], row["category_id"]))


def insights(records: List[InteractionRecord]) -> List[Dict]:
    """
    Human-readable observations about engagement.

    Returns:
        List of {type, category, message, suggestion}
    """
    results = []
    engagement = category_engagement(records)

    low = [
        e.category_id
        for e in engagement
        if e.shown > MIN_SHOWN_FOR_INSIGHT and e.click_rate < LOW_CLICK_RATE
    ]
    if low:
        results.append(
            {
                "type": "warning",
                "category": "engagement",
                "message": f"Low engagement in categories: {', '.join(low)}",
                "suggestion": "Consider reducing highlight frequency for these categories",
            }
        )

    high = [
        e.category_id
        for e in engagement
        if e.shown > MIN_SHOWN_FOR_INSIGHT and e.click_rate > HIGH_CLICK_RATE
    ]
    if high:
        results.append(
            {
                "type": "success",
                "category": "engagement",
                "message": f"High engagement in categories: {', '.join(high)}",
                "suggestion": "These categories resonate well with users",
            }
        )

    if records:
        seen_once = sum(1 for r in records if r.shown_count == 1)
        if seen_once / len(records) > 0.5:
            results.append(
                {
                    "type": "info",
                    "category": "exploration",
                    "message": "Many phrases shown only once. Need more data to learn preferences.",
                    "suggestion": "Still exploring; patterns improve with more usage.",
                }
            )

    return results
