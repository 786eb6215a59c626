"""
Corpus statistics accumulated across every processed document.
"""

from typing import Dict

from pydantic import BaseModel, Field, NonNegativeInt, model_validator


class CorpusStats(BaseModel):
    """
    Process-wide, monotonically growing document statistics.

    Keys of both frequency maps are space-joined n-grams (1 to 4 words).
    """

    total_documents: int = Field(default=0, ge=0, description="Documents processed so far")
    document_frequency: Dict[str, NonNegativeInt] = Field(
        default_factory=dict, description="Number of documents containing each term"
    )
    total_frequency: Dict[str, NonNegativeInt] = Field(
        default_factory=dict, description="Total occurrences of each term across documents"
    )
    total_tokens: int = Field(default=0, ge=0, description="Total unigram tokens seen")

    @model_validator(mode="after")
    def check_document_frequency_bound(self):
        """A term cannot occur in more documents than were processed."""
        for term, count in self.document_frequency.items():
            if count > self.total_documents:
                raise ValueError(
                    f"document_frequency[{term!r}] ({count}) exceeds "
                    f"total_documents ({self.total_documents})"
                )
        return self

    def unigram_types(self) -> int:
        """Number of distinct single-word terms observed."""
        return sum(1 for term in self.total_frequency if " " not in term)
