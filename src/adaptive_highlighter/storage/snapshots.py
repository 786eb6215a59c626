"""
Versioned snapshot envelopes for persisted state.

Every state key stores {"version", "saved_at", "data"}. Unwrapping rejects
anything that is not a valid envelope of the current schema version.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import ValidationError

from ..errors import RecoverableStateError
from ..models.state import StateSnapshot
from ..version import STATE_SCHEMA_VERSION

# Keys under which engine state is stored
CORPUS_STATS_KEY = "corpus_stats"
CATEGORIZER_KEY = "categorizer"
INTERACTIONS_KEY = "interactions"
OPTIONS_KEY = "engine_options"

STATE_KEYS = (CORPUS_STATS_KEY, CATEGORIZER_KEY, INTERACTIONS_KEY, OPTIONS_KEY)


def wrap_snapshot(data: Dict[str, Any], saved_at: datetime) -> Dict[str, Any]:
    """Build the JSON envelope for one state bucket."""
    snapshot = StateSnapshot(version=STATE_SCHEMA_VERSION, saved_at=saved_at, data=data)
    return snapshot.model_dump(mode="json")


def unwrap_snapshot(key: str, raw: Any) -> Optional[Dict[str, Any]]:
    """
    Extract the data of a stored envelope.

    Args:
        key: State key (for error reporting)
        raw: Value read from the store

    Returns:
        The snapshot data, or None when nothing was stored

    Raises:
        RecoverableStateError: If the envelope is malformed or from another
            schema version
    """
    if raw is None:
        return None
    try:
        snapshot = StateSnapshot.model_validate(raw)
    except ValidationError as e:
        raise RecoverableStateError(key, f"invalid envelope: {e.error_count()} error(s)") from e
    if snapshot.version != STATE_SCHEMA_VERSION:
        raise RecoverableStateError(
            key, f"schema version {snapshot.version} != {STATE_SCHEMA_VERSION}"
        )
    return snapshot.data
