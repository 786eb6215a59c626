"""
Quality-score arithmetic for interaction records.

Time decay pulls quality back toward the neutral value with a configurable
half-life. Decay is measured from the record's updated_at anchor, so reading
a record never compounds decay; only mutations move the anchor.
"""

from datetime import datetime, timezone
from typing import Optional

from ..models.interactions import InteractionRecord

SECONDS_PER_DAY = 86400.0


def phrase_key(phrase: str) -> str:
    """
    Normalize a phrase into its record key.

    Examples:
        >>> phrase_key("  Golden   Hour ")
        'golden hour'
    """
    return " ".join((phrase or "").lower().split())


def _aware(moment: datetime) -> datetime:
    return moment if moment.tzinfo is not None else moment.replace(tzinfo=timezone.utc)


def decay_quality(
    quality: float,
    elapsed_seconds: float,
    half_life_days: float = 30.0,
    neutral: float = 0.5,
) -> float:
    """
    Exponentially decay a quality score toward neutral.

    quality' = neutral + (quality - neutral) * 0.5 ** (elapsed / half_life)

    Examples:
        >>> round(decay_quality(0.9, 30 * 86400, half_life_days=30.0), 6)
        0.7
        >>> decay_quality(0.9, 0)
        0.9
    """
    if elapsed_seconds <= 0 or half_life_days <= 0:
        return quality
    factor = 0.5 ** (elapsed_seconds / (half_life_days * SECONDS_PER_DAY))
    return neutral + (quality - neutral) * factor


def decayed_quality(
    record: InteractionRecord,
    now: datetime,
    half_life_days: float = 30.0,
    neutral: float = 0.5,
) -> float:
    """Quality of a record as of now, without mutating it."""
    anchor: Optional[datetime] = record.updated_at or record.last_shown_at
    if anchor is None:
        return record.quality_score
    elapsed = (_aware(now) - _aware(anchor)).total_seconds()
    return decay_quality(record.quality_score, elapsed, half_life_days, neutral)


def materialize_decay(
    record: InteractionRecord,
    now: datetime,
    half_life_days: float = 30.0,
    neutral: float = 0.5,
) -> None:
    """Apply pending decay to a record and move its anchor to now."""
    record.quality_score = decayed_quality(record, now, half_life_days, neutral)
    record.updated_at = now


def reinforce(quality: float, learning_rate: float) -> float:
    """
    Positive reinforcement, asymptotic toward 1.0.

    Examples:
        >>> reinforce(0.5, 0.1)
        0.55
    """
    return min(1.0, quality + learning_rate * (1.0 - quality))


def penalize(quality: float, learning_rate: float, factor: float = 0.5) -> float:
    """
    Negative reinforcement at a fraction of the positive rate.

    Examples:
        >>> penalize(0.5, 0.1)
        0.475
    """
    return max(0.0, quality - learning_rate * quality * factor)
