"""
Behavior learning from implicit user feedback.
"""

from .engine import BehaviorLearningEngine, utc_now
from .exploration import ExplorationStrategy
from .interactions import decay_quality, decayed_quality, penalize, phrase_key, reinforce

__all__ = [
    "BehaviorLearningEngine",
    "ExplorationStrategy",
    "decay_quality",
    "decayed_quality",
    "penalize",
    "phrase_key",
    "reinforce",
    "utc_now",
]
