"""
JSON file store: one file per key inside a state directory.

Writes go to a temporary file in the same directory and are moved into place
with os.replace, so a crash never leaves a half-written snapshot.
"""

import json
import os
import re
import tempfile
from pathlib import Path
from typing import Any, Optional

import structlog

from .base import KeyValueStore

logger = structlog.get_logger(__name__)

UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


class JsonFileStore(KeyValueStore):
    """Persist each key as <state_dir>/<key>.json."""

    def __init__(self, state_dir: str):
        self.state_dir = Path(state_dir)
        self.state_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, key: str) -> Path:
        return self.state_dir / f"{UNSAFE_KEY_CHARS.sub('_', key)}.json"

    def get(self, key: str) -> Optional[Any]:
        """
        Read a key.

        Raises:
            ValueError: If the file exists but is not valid JSON
        """
        path = self.path_for(key)
        if not path.exists():
            return None
        return json.loads(path.read_text(encoding="utf-8"))

    def set(self, key: str, value: Any) -> None:
        path = self.path_for(key)
        payload = json.dumps(value, ensure_ascii=False, sort_keys=True)

        fd, tmp_name = tempfile.mkstemp(dir=self.state_dir, prefix=f".{path.stem}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, path)
        except Exception:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

        logger.debug("state_file_written", key=key, path=str(path), bytes=len(payload))

    def remove(self, key: str) -> None:
        path = self.path_for(key)
        if path.exists():
            path.unlink()
            logger.debug("state_file_removed", key=key, path=str(path))
