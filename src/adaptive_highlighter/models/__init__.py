# Data models for the adaptive highlighting engine

from .engine_version import EngineVersion
from .corpus import CorpusStats
from .candidates import ExtractionResult, PhraseCandidate
from .taxonomy import Category, UserCorrection
from .interactions import CategoryEngagement, InteractionRecord
from .highlights import AnnotationResult, Highlight, ShowDecision
from .options import ConfigurationResult, EngineOptions
from .state import StateSnapshot

__all__ = [
    "EngineVersion",
    "CorpusStats",
    "ExtractionResult",
    "PhraseCandidate",
    "Category",
    "UserCorrection",
    "CategoryEngagement",
    "InteractionRecord",
    "AnnotationResult",
    "Highlight",
    "ShowDecision",
    "ConfigurationResult",
    "EngineOptions",
    "StateSnapshot",
]
