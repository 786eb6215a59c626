"""
Liveness endpoint.
"""

import time

from fastapi import APIRouter

from ...config import settings
from ...models.api_models import HealthResponse
from ...version import API_VERSION
from ..dependencies import engine_loaded

router = APIRouter()

_started = time.monotonic()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Report liveness without touching engine state.

    engine_loaded tells whether a request has already created the shared
    engine (and so loaded its persisted state).
    """
    return HealthResponse(
        status="healthy",
        version=API_VERSION,
        uptime_seconds=round(time.monotonic() - _started, 3),
        state_backend=settings.state_backend,
        engine_loaded=engine_loaded(),
    )
