"""
Shared AnnotationEngine for the API process.

Routes receive the engine through FastAPI dependency injection; tests
override get_engine with an in-memory engine.
"""

import threading
from typing import Optional

import structlog

from ..pipeline import AnnotationEngine

logger = structlog.get_logger(__name__)

_engine: Optional[AnnotationEngine] = None
_engine_lock = threading.Lock()


def get_engine() -> AnnotationEngine:
    """
    Get or create the process-wide engine (singleton).

    Returns:
        AnnotationEngine backed by the configured state store
    """
    global _engine

    if _engine is None:
        with _engine_lock:
            if _engine is None:
                _engine = AnnotationEngine()
                logger.info("api_engine_created")
    return _engine


def engine_loaded() -> bool:
    return _engine is not None


def shutdown_engine() -> None:
    """Flush and release the singleton engine, if created."""
    global _engine

    with _engine_lock:
        if _engine is not None:
            _engine.close()
            _engine = None
            logger.info("api_engine_closed")
