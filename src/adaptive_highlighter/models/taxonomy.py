"""
Category models: seed-word configuration plus learned state.
"""

from datetime import datetime
from typing import Dict, List, Set

from pydantic import BaseModel, Field, field_validator


class UserCorrection(BaseModel):
    """An explicit recategorization of a phrase by a user."""

    phrase: str
    from_category: str
    to_category: str
    timestamp: datetime


class Category(BaseModel):
    """
    A semantic category.

    seed_words come from configuration; learned_cooccurrence and
    user_corrections are mutated by the categorizer and never discarded.
    """

    id: str = Field(min_length=1)
    label: str = ""
    seed_words: Set[str] = Field(default_factory=set)
    learned_cooccurrence: Dict[str, float] = Field(default_factory=dict)
    user_corrections: List[UserCorrection] = Field(default_factory=list)

    @field_validator("seed_words", mode="before")
    @classmethod
    def normalize_seed_words(cls, v):
        """Lowercase and strip seed words, dropping blanks."""
        if v is None:
            return set()
        if isinstance(v, str):
            v = [v]
        return {str(w).strip().lower() for w in v if str(w).strip()}

    @field_validator("learned_cooccurrence")
    @classmethod
    def clamp_weights(cls, v: Dict[str, float]) -> Dict[str, float]:
        """Learned weights live in [0, 1]."""
        return {phrase: min(1.0, max(0.0, float(w))) for phrase, w in v.items()}

