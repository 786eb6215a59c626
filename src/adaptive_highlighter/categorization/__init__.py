"""
Semantic categorization of phrase occurrences.

Seed taxonomy loading, context windows, and the learning categorizer.
"""

from .categorizer import UNCATEGORIZED, SemanticCategorizer, squash
from .context import context_terms, extract_context
from .taxonomy import DEFAULT_TAXONOMY, default_categories, load_taxonomy

__all__ = [
    "UNCATEGORIZED",
    "SemanticCategorizer",
    "squash",
    "context_terms",
    "extract_context",
    "DEFAULT_TAXONOMY",
    "default_categories",
    "load_taxonomy",
]
