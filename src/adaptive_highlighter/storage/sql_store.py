"""
Key-value store backed by a SQL table (state_snapshots).
"""

from typing import Any, Optional

import structlog
from sqlalchemy.engine import Engine

from .base import KeyValueStore
from .database import build_engine, create_all_tables, get_db_session, get_engine
from .models import StateSnapshotRow

logger = structlog.get_logger(__name__)


class SqlStateStore(KeyValueStore):
    """
    Persist each key as one row of state_snapshots.

    Args:
        url: Database URL (default: the configured engine)
        engine: Existing engine to use instead of url
    """

    def __init__(self, url: Optional[str] = None, engine: Optional[Engine] = None):
        if engine is not None:
            self.engine = engine
        elif url is not None:
            self.engine = build_engine(url)
        else:
            self.engine = get_engine()
        self._owns_engine = engine is None and url is not None
        create_all_tables(self.engine)

    def get(self, key: str) -> Optional[Any]:
        with get_db_session(self.engine) as session:
            row = session.get(StateSnapshotRow, key)
            return None if row is None else row.value

    def set(self, key: str, value: Any) -> None:
        with get_db_session(self.engine) as session:
            row = session.get(StateSnapshotRow, key)
            if row is None:
                session.add(StateSnapshotRow(key=key, value=value))
            else:
                row.value = value
        logger.debug("state_row_written", key=key)

    def remove(self, key: str) -> None:
        with get_db_session(self.engine) as session:
            row = session.get(StateSnapshotRow, key)
            if row is not None:
                session.delete(row)

    def close(self) -> None:
        if self._owns_engine:
            self.engine.dispose()
