"""
SQLAlchemy models for the SQL state store.
"""

from sqlalchemy import JSON, Column, String, TIMESTAMP
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class StateSnapshotRow(Base):
    """
    One persisted snapshot per state key.

    value holds the versioned snapshot envelope as JSON.
    """

    __tablename__ = "state_snapshots"

    key = Column(String, primary_key=True)  # e.g. "corpus_stats"
    value = Column(JSON, nullable=False)
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<StateSnapshotRow(key={self.key}, updated_at={self.updated_at})>"
