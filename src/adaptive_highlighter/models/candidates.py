"""
Data models for phrase candidate extraction.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class PhraseCandidate(BaseModel):
    """
    A scored n-gram extracted from one document.

    Ephemeral: built per call, never persisted.
    """

    candidate_id: str = Field(description="Stable SHA1-based ID of the phrase text")
    text: str = Field(description="Lowercased, space-joined n-gram")
    ngram_length: int = Field(description="Number of words", ge=1, le=4)
    count: int = Field(description="Occurrences in the document", ge=1)
    tf_score: float = Field(description="occurrences / total tokens", ge=0.0)
    idf_score: float = Field(description="Laplace-smoothed inverse document frequency", ge=0.0)
    pmi_score: Optional[float] = Field(default=None, description="Mean adjacent-pair PMI (n >= 2)")
    final_score: float = Field(description="TF*IDF, boosted by positive PMI", ge=0.0)


class ExtractionResult(BaseModel):
    """
    Complete result of candidate extraction from one document.
    """

    candidates: List[PhraseCandidate] = Field(default_factory=list)
    total_tokens: int = Field(description="Token count of the document", ge=0)
    sentence_count: int = Field(description="Sentences containing at least one token", ge=0)
    tokenizer_version: str = Field(description="Tokenizer version for reproducibility")
    stoplist_version: str = Field(description="Stopword list version")
    processing_time_ms: float = Field(description="Extraction time in milliseconds", ge=0.0)
