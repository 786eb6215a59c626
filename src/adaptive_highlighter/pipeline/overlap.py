"""
Deterministic overlap resolution for highlights.

Priority rules (in order):
1. Longer span wins
2. If same length, higher confidence wins
3. If same confidence, earlier start wins

Losers are discarded whole, never truncated.
"""

from typing import List

import structlog

from ..models.highlights import Highlight

logger = structlog.get_logger(__name__)


def priority_key(highlight: Highlight):
    return (-highlight.length, -highlight.confidence, highlight.start, highlight.category_id)


def resolve_overlaps(highlights: List[Highlight]) -> List[Highlight]:
    """
    Keep a pairwise non-overlapping subset of highlights.

    Highlights are visited in priority order; each is kept unless it overlaps
    one already kept.

    Args:
        highlights: Candidate highlights, possibly overlapping

    Returns:
        Surviving highlights sorted by start offset

    Examples:
        >>> a = Highlight(start=0, end=14, text="depth of field", phrase="depth of field",
        ...               category_id="technical", confidence=80)
        >>> b = Highlight(start=6, end=14, text="of field", phrase="of field",
        ...               category_id="technical", confidence=90)
        >>> [h.text for h in resolve_overlaps([b, a])]
        ['depth of field']
    """
    if not highlights:
        return []

    kept: List[Highlight] = []
    for highlight in sorted(highlights, key=priority_key):
        if any(highlight.overlaps(existing) for existing in kept):
            continue
        kept.append(highlight)

    kept.sort(key=lambda h: h.start)

    logger.debug(
        "highlight_overlap_resolved",
        original_count=len(highlights),
        kept_count=len(kept),
        removed_count=len(highlights) - len(kept),
    )

    return kept
