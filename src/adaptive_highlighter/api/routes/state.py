"""
Engine state endpoints: diagnostics, configuration and reset.

- GET /api/v1/statistics
- GET /api/v1/configuration
- PATCH /api/v1/configuration
- POST /api/v1/reset
"""

from typing import Any, Dict, Optional

import structlog
from fastapi import APIRouter, Body, Depends

from ...models.api_models import ConfigurationResponse, ResetRequest, StatisticsResponse
from ...pipeline import AnnotationEngine
from ..dependencies import get_engine

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/v1", tags=["state"])


@router.get("/statistics", response_model=StatisticsResponse)
def get_statistics(engine: AnnotationEngine = Depends(get_engine)) -> StatisticsResponse:
    return StatisticsResponse(**engine.get_statistics())


@router.get("/configuration", response_model=ConfigurationResponse)
def get_configuration(engine: AnnotationEngine = Depends(get_engine)) -> ConfigurationResponse:
    return ConfigurationResponse(options=engine.get_configuration().model_dump())


@router.patch("/configuration", response_model=ConfigurationResponse)
def update_configuration(
    partial: Optional[Dict[str, Any]] = Body(default=None),
    engine: AnnotationEngine = Depends(get_engine),
) -> ConfigurationResponse:
    """
    Update options key by key.

    Invalid keys are reported in "rejected" and keep their previous value;
    the request itself still succeeds.
    """
    result = engine.configure(partial or {})
    return ConfigurationResponse(
        options=engine.get_configuration().model_dump(),
        applied=result.applied,
        rejected=result.rejected,
    )


@router.post("/reset", status_code=204)
def reset_state(
    request: Optional[ResetRequest] = None,
    engine: AnnotationEngine = Depends(get_engine),
) -> None:
    include_configuration = request.include_configuration if request else False
    engine.reset(include_configuration=include_configuration)
    logger.warning("engine_reset_via_api", include_configuration=include_configuration)
