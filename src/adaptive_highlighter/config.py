"""
Application configuration management.

This module handles configuration from environment variables using Pydantic Settings.
"""

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application configuration from environment variables.

    All settings can be overridden via environment variables with the same name.
    """

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # State persistence
    state_backend: str = "file"  # "memory" | "file" | "sql"
    state_dir: str = ".adaptive_highlighter"
    state_db_url: str = "sqlite:///adaptive_highlighter.db"
    state_db_echo_sql: bool = False
    auto_flush: bool = True

    # Taxonomy and dictionary sources (JSON taxonomy, newline-delimited dictionary)
    taxonomy_file: Optional[str] = None
    dictionary_file: Optional[str] = None

    # Default engine options (overridable at runtime via configure())
    default_min_confidence: float = 50.0
    default_max_highlights: Optional[int] = None
    default_learning_rate: float = 0.1
    default_exploration_rate: float = 0.15
    default_context_window_chars: int = 100

    # Fuzzy matcher
    fuzzy_max_distance: int = 2
    fuzzy_max_ratio: float = 0.34
    fuzzy_length_band: int = 2
    fuzzy_min_token_length: int = 4
    # Words known to the general English lexicon are never corrected
    fuzzy_protect_english: bool = True

    # Phrase extraction
    extractor_max_ngram: int = 4
    extractor_min_unigram_length: int = 3
    pmi_normalizer: float = 5.0

    # Categorization
    context_bonus: float = 0.2
    renormalize_interval: int = 10
    cooccurrence_steepness: float = 1.0
    max_context_terms: int = 50

    # Behavior learning
    quality_half_life_days: float = 30.0
    neutral_quality: float = 0.5
    ignore_rate_factor: float = 0.5
    exploration_seed: Optional[int] = None

    # Confidence scaling: "max_ratio" | "minmax" | "sigmoid"
    confidence_scaling: str = "max_ratio"
    sigmoid_steepness: float = 1.0

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


# Global settings instance
settings = Settings()
