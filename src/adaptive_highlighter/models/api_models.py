"""
API request and response models for FastAPI endpoints.

This module defines the Pydantic models used for API request/response validation.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .engine_version import EngineVersion
from .highlights import Highlight


class HealthResponse(BaseModel):
    """Liveness report."""

    status: str = Field(examples=["healthy"])
    version: str = Field(description="API version", examples=["1.0.0"])
    uptime_seconds: float = Field(ge=0.0)
    state_backend: str = Field(description="Configured state store", examples=["file"])
    engine_loaded: bool = Field(description="Whether the shared engine has been created")


class VersionResponse(BaseModel):
    """Version information response."""

    api_version: str = Field(description="API version")
    engine_version: EngineVersion = Field(description="Current engine component versions")


class HighlightRequest(BaseModel):
    """Text to annotate, with optional per-call option overrides."""

    text: str = Field(description="Free-form text to annotate")
    options: Optional[Dict[str, Any]] = Field(
        default=None, description="Per-call options (snake_case or camelCase keys)"
    )


class HighlightResponse(BaseModel):
    """Highlights of one text."""

    original_text: str
    corrected_text: str
    highlights: List[Highlight] = Field(default_factory=list)
    candidates_count: int
    processing_time_ms: float


class FeedbackRequest(BaseModel):
    """A click or ignore event on a shown highlight."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    phrase: str = Field(min_length=1)
    category_id: str = Field(min_length=1)


class FeedbackResponse(BaseModel):
    """Interaction record after the feedback was applied."""

    phrase_key: str
    category_id: str
    shown_count: int
    clicked_count: int
    ignored_count: int
    quality_score: float


class CorrectionRequest(BaseModel):
    """Explicit recategorization of a phrase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    phrase: str = Field(min_length=1)
    from_category: str = ""
    to_category: str = Field(min_length=1)


class CorrectionResponse(BaseModel):
    phrase: str
    from_category: str
    to_category: str
    timestamp: datetime


class SeedWordRequest(BaseModel):
    word: str = Field(min_length=1)


class SeedWordResponse(BaseModel):
    category_id: str
    word: str
    added: bool


class ConfigurationResponse(BaseModel):
    """Current options plus the outcome of the last update, if any."""

    options: Dict[str, Any]
    applied: Dict[str, Any] = Field(default_factory=dict)
    rejected: Dict[str, str] = Field(default_factory=dict)


class ResetRequest(BaseModel):
    include_configuration: bool = False


class StatisticsResponse(BaseModel):
    extractor: Dict[str, Any]
    categorizer: Dict[str, Any]
    learner: Dict[str, Any]
