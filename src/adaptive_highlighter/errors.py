"""
Exceptions raised inside the annotation engine.

Neither exception escapes the public engine API: state errors are caught by
the loader and configuration errors are collected into a ConfigurationResult.
"""

from typing import Any


class RecoverableStateError(Exception):
    """A persisted snapshot could not be parsed or validated."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Unusable state snapshot '{key}': {reason}")


class InvalidConfigurationError(ValueError):
    """A configuration key was unknown or its value out of range."""

    def __init__(self, key: str, value: Any, reason: str):
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid value for '{key}' ({value!r}): {reason}")
