"""
Minimal key-value store interface for persisted engine state.

Values are JSON-serializable objects (dicts, lists, scalars).
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class KeyValueStore(ABC):
    """get / set / remove over JSON-serializable values."""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Return the stored value, or None when the key is absent."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store a value, replacing any previous one."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete a key; removing an absent key is a no-op."""

    def close(self) -> None:
        """Release backend resources."""
