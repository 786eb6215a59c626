"""
Database connection and session management for the SQL state store.
"""

from contextlib import contextmanager
from typing import Generator, Optional

import structlog
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

logger = structlog.get_logger(__name__)

# Global singleton for the configured database
_engine: Engine | None = None


def build_engine(url: str, echo: bool = False) -> Engine:
    """
    Create an engine for a database URL.

    Examples:
        >>> build_engine("sqlite:///state.db").url.database
        'state.db'
    """
    engine = create_engine(url, echo=echo, pool_pre_ping=True)
    logger.info("state_db_engine_created", database=engine.url.database)
    return engine


def get_engine() -> Engine:
    """
    Get or create the engine for settings.state_db_url (singleton).

    Returns:
        SQLAlchemy Engine instance
    """
    global _engine

    if _engine is None:
        from ..config import settings

        _engine = build_engine(settings.state_db_url, echo=settings.state_db_echo_sql)

    return _engine


@contextmanager
def get_db_session(engine: Optional[Engine] = None) -> Generator[Session, None, None]:
    """
    Context manager for database sessions with automatic commit/rollback.

    Usage:
        >>> with get_db_session() as session:
        ...     session.merge(StateSnapshotRow(key="corpus_stats", value={}))
        ...     # Automatically commits on success, rolls back on exception

    Yields:
        SQLAlchemy Session instance

    Raises:
        Exception: Any database exception (after rollback)
    """
    session = sessionmaker(bind=engine or get_engine())()

    try:
        yield session
        session.commit()
        logger.debug("state_db_session_committed")
    except Exception as e:
        session.rollback()
        logger.error("state_db_session_rollback", error=str(e), error_type=type(e).__name__)
        raise
    finally:
        session.close()


def create_all_tables(engine: Optional[Engine] = None) -> None:
    """
    Create the state tables if they do not exist.
    """
    from .models import Base

    Base.metadata.create_all(engine or get_engine())
    logger.info("state_db_tables_created")
