"""
Version constants for the annotation pipeline.

Defines every component version so persisted state and outputs can be traced
back to the algorithms that produced them.
"""

from .models.engine_version import EngineVersion

# API Version
API_VERSION = "1.0.0"

# Component versions (update these when implementations change)
TOKENIZER_VERSION = "tokenizer-en-1.0.0"
STOPLIST_VERSION = "stopwords-en-2026.1"
FUZZY_MATCHER_VERSION = "fuzzy-osa-1.0.0"
EXTRACTOR_VERSION = "tfidf-pmi-1.0.0"
CATEGORIZER_VERSION = "seed-context-1.0.0"
LEARNER_VERSION = "behavior-rl-1.0.0"
TAXONOMY_VERSION = "cinematography-v1.0"

# Bump when the shape of any persisted snapshot changes
STATE_SCHEMA_VERSION = 1


def get_current_engine_version() -> EngineVersion:
    """
    Get current engine version configuration.

    Returns:
        EngineVersion instance with current versions
    """
    return EngineVersion(
        tokenizer_version=TOKENIZER_VERSION,
        stoplist_version=STOPLIST_VERSION,
        fuzzy_matcher_version=FUZZY_MATCHER_VERSION,
        extractor_version=EXTRACTOR_VERSION,
        categorizer_version=CATEGORIZER_VERSION,
        learner_version=LEARNER_VERSION,
        taxonomy_version=TAXONOMY_VERSION,
        state_schema_version=STATE_SCHEMA_VERSION,
    )
