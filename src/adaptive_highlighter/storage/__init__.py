"""
Persistence backends for engine state.

Provides the key-value store interface, in-memory / JSON file / SQL
implementations, and versioned snapshot envelopes.
"""

import structlog

from .base import KeyValueStore
from .file_store import JsonFileStore
from .memory import InMemoryStore
from .snapshots import STATE_KEYS, unwrap_snapshot, wrap_snapshot
from .sql_store import SqlStateStore

logger = structlog.get_logger(__name__)

__all__ = [
    "KeyValueStore",
    "InMemoryStore",
    "JsonFileStore",
    "SqlStateStore",
    "STATE_KEYS",
    "create_store",
    "unwrap_snapshot",
    "wrap_snapshot",
]


def create_store(s=None) -> KeyValueStore:
    """
    Build the store selected by settings.state_backend.

    Args:
        s: Settings instance (default: global settings)

    Returns:
        KeyValueStore for "memory", "file" or "sql"

    Raises:
        ValueError: If the backend name is unknown
    """
    if s is None:
        from ..config import settings as s

    backend = s.state_backend.lower()
    if backend == "memory":
        store: KeyValueStore = InMemoryStore()
    elif backend == "file":
        store = JsonFileStore(s.state_dir)
    elif backend == "sql":
        store = SqlStateStore(url=s.state_db_url)
    else:
        raise ValueError(f"Unknown state backend: {s.state_backend!r}")

    logger.info("state_store_created", backend=backend)
    return store
