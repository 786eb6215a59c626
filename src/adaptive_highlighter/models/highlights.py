"""
Output models of the annotation pipeline.
"""

from typing import List

from pydantic import BaseModel, Field, model_validator


class Highlight(BaseModel):
    """
    One highlighted span of the (fuzzy-corrected) input text.

    Offsets are character offsets into AnnotationResult.corrected_text,
    half-open [start, end). Always re-derived, never persisted.
    """

    start: int = Field(ge=0)
    end: int = Field(ge=0)
    text: str = Field(description="Matched substring, original casing")
    phrase: str = Field(description="Normalized candidate phrase")
    category_id: str
    confidence: float = Field(ge=0.0, le=100.0)
    explored: bool = Field(default=False, description="Shown by exploration, not by threshold")

    @model_validator(mode="after")
    def check_span(self):
        if self.end <= self.start:
            raise ValueError(f"Invalid span [{self.start}, {self.end})")
        return self

    @property
    def length(self) -> int:
        return self.end - self.start

    def overlaps(self, other: "Highlight") -> bool:
        return not (self.end <= other.start or other.end <= self.start)


class ShowDecision(BaseModel):
    """Outcome of the explore/exploit decision for one highlight."""

    show: bool
    adjusted_confidence: float = Field(ge=0.0, le=100.0)
    explored: bool = False


class AnnotationResult(BaseModel):
    """Full result of processing one text."""

    original_text: str
    corrected_text: str
    highlights: List[Highlight] = Field(default_factory=list)
    candidates_count: int = Field(default=0, ge=0)
    processing_time_ms: float = Field(default=0.0, ge=0.0)
