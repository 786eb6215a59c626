"""
Runtime engine options and the result of configure() calls.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class EngineOptions(BaseModel):
    """
    Options recognized by AnnotationEngine.process() and configure().

    Accepts both snake_case names and camelCase aliases (minConfidence, ...).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    min_confidence: float = Field(default=50.0, ge=0.0, le=100.0)
    max_highlights: Optional[int] = Field(default=None, ge=1)
    learning_rate: float = Field(default=0.1, ge=0.01, le=1.0)
    exploration_rate: float = Field(default=0.15, ge=0.0, le=1.0)
    context_window_chars: int = Field(default=100, ge=0)

    @classmethod
    def from_settings(cls, s=None) -> "EngineOptions":
        """Build the default options from application settings."""
        if s is None:
            from adaptive_highlighter.config import settings as s

        return cls(
            min_confidence=s.default_min_confidence,
            max_highlights=s.default_max_highlights,
            learning_rate=s.default_learning_rate,
            exploration_rate=s.default_exploration_rate,
            context_window_chars=s.default_context_window_chars,
        )

    @classmethod
    def field_name_for(cls, key: str) -> Optional[str]:
        """Map a snake_case name or camelCase alias to the field name."""
        for name, info in cls.model_fields.items():
            if key == name or key == info.alias:
                return name
        return None


@dataclass
class ConfigurationResult:
    """
    Outcome of a configure() call.

    applied holds every accepted key (field name -> value); rejected
    maps each refused key, as given by the caller, to the reason.
    """

    applied: Dict[str, Any] = field(default_factory=dict)
    rejected: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.rejected

    def add_rejection(self, key: str, reason: str) -> None:
        self.rejected[key] = reason
