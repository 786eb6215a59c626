"""
FastAPI application for the adaptive highlighting engine.

Serves annotation, feedback and state routes on top of one shared
AnnotationEngine; see api.dependencies for its lifecycle.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..config import settings
from ..logging_config import setup_logging
from ..version import API_VERSION, get_current_engine_version
from .dependencies import get_engine, shutdown_engine
from .middleware import setup_error_handling_middleware, setup_request_context_middleware
from .routes import feedback, health, highlights, state, version

setup_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Load persisted engine state before serving; flush it on shutdown.
    """
    engine = get_engine()
    stats = engine.get_statistics()
    logger.info(
        "api_starting",
        version=API_VERSION,
        engine_version=get_current_engine_version().to_repr(),
        state_backend=settings.state_backend,
        documents_seen=stats["extractor"]["total_documents"],
        interaction_records=stats["learner"]["total_records"],
    )
    yield
    shutdown_engine()
    logger.info("api_stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI app instance
    """
    app = FastAPI(
        title="Adaptive Highlighter",
        description="Self-learning text annotation: TF-IDF/PMI phrase extraction, "
        "semantic categorization and feedback-driven confidence",
        version=API_VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PATCH"],
        allow_headers=["*"],
    )

    # Registered last = outermost: the request context wraps error handling
    setup_error_handling_middleware(app)
    setup_request_context_middleware(app)

    app.include_router(health.router, tags=["Health"])
    app.include_router(version.router, prefix="/api/v1", tags=["Version"])
    app.include_router(highlights.router)
    app.include_router(feedback.router)
    app.include_router(state.router)

    return app


app = create_app()


def main() -> None:
    """Run the API with uvicorn (development entry point)."""
    import uvicorn

    uvicorn.run(
        "adaptive_highlighter.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
