"""
Interaction records for user feedback on (phrase, category) pairs.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class InteractionRecord(BaseModel):
    """
    Feedback history of one (phrase, category) pairing.

    updated_at anchors time decay: it is the moment quality_score was last
    materialized (a show, click or ignore).
    """

    phrase_key: str
    category_id: str
    shown_count: int = Field(default=0, ge=0)
    clicked_count: int = Field(default=0, ge=0)
    ignored_count: int = Field(default=0, ge=0)
    last_shown_at: Optional[datetime] = None
    last_clicked_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    quality_score: float = Field(default=0.5, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def check_click_bound(self):
        """A pairing cannot be clicked more often than it was shown."""
        if self.clicked_count > self.shown_count:
            raise ValueError(
                f"clicked_count ({self.clicked_count}) exceeds shown_count ({self.shown_count})"
            )
        return self

    @property
    def click_rate(self) -> float:
        return self.clicked_count / self.shown_count if self.shown_count else 0.0


class CategoryEngagement(BaseModel):
    """Aggregate engagement of one category across all phrases."""

    category_id: str
    shown: int = Field(default=0, ge=0)
    clicked: int = Field(default=0, ge=0)

    @property
    def click_rate(self) -> float:
        return self.clicked / self.shown if self.shown else 0.0
