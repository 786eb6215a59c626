"""
Versioned envelope for persisted state snapshots.
"""

from datetime import datetime
from typing import Any, Dict

from pydantic import BaseModel, Field


class StateSnapshot(BaseModel):
    """
    JSON-serializable wrapper stored under each state key.

    version lets newer releases detect and discard incompatible data.
    """

    version: int = Field(ge=1)
    saved_at: datetime
    data: Dict[str, Any] = Field(default_factory=dict)
