"""
End-to-end annotation pipeline.

Combines fuzzy correction, phrase extraction, categorization and behavior
learning into non-overlapping, confidence-scored highlights.
"""

from .confidence import SCALING_METHODS, scale_confidences
from .occurrences import find_occurrences, phrase_pattern
from .orchestrator import AnnotationEngine
from .overlap import resolve_overlaps

__all__ = [
    "AnnotationEngine",
    "SCALING_METHODS",
    "find_occurrences",
    "phrase_pattern",
    "resolve_overlaps",
    "scale_confidences",
]
