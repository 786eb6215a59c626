"""
In-process key-value store, mainly for tests and ephemeral engines.
"""

import json
from typing import Any, Dict, Optional

from .base import KeyValueStore


class InMemoryStore(KeyValueStore):
    """
    Dict-backed store holding JSON text.

    Values round-trip through JSON so callers never share mutable state with
    the store and non-serializable values fail the same way as on disk.
    """

    def __init__(self):
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[Any]:
        raw = self._data.get(key)
        return None if raw is None else json.loads(raw)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def set_raw(self, key: str, raw: str) -> None:
        """Store raw text as-is (used to simulate corrupted snapshots)."""
        self._data[key] = raw

    def keys(self):
        return sorted(self._data)
