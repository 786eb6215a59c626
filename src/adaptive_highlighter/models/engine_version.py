"""
Engine version model for deterministic processing.

Tracks every component version so that identical versions plus identical
input state produce identical highlights.
"""

from pydantic import BaseModel, Field


class EngineVersion(BaseModel):
    """
    Immutable version contract for the annotation pipeline.

    Same version parameters guarantee same output for same input and state.
    """

    tokenizer_version: str = Field(description="Tokenizer version", examples=["tokenizer-en-1.0.0"])
    stoplist_version: str = Field(description="Stopword list version", examples=["stopwords-en-2026.1"])
    fuzzy_matcher_version: str = Field(description="Fuzzy matcher version")
    extractor_version: str = Field(description="TF-IDF/PMI extractor version")
    categorizer_version: str = Field(description="Semantic categorizer version")
    learner_version: str = Field(description="Behavior learning engine version")
    taxonomy_version: str = Field(description="Seed taxonomy version")
    state_schema_version: int = Field(description="Persisted snapshot schema version", ge=1)

    model_config = {
        "frozen": True,
    }

    def to_repr(self) -> str:
        """
        Short representation for logging.

        Returns:
            Compact string with the algorithm components.
        """
        return (
            f"Engine-{self.extractor_version}-{self.categorizer_version}-"
            f"{self.learner_version}-s{self.state_schema_version}"
        )
