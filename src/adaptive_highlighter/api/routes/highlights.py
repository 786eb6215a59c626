"""
Text annotation endpoint.

- POST /api/v1/highlights - highlight the significant phrases of a text
"""

import structlog
from fastapi import APIRouter, Depends

from ...models.api_models import HighlightRequest, HighlightResponse
from ...pipeline import AnnotationEngine
from ..dependencies import get_engine

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/v1", tags=["highlights"])


@router.post("/highlights", response_model=HighlightResponse)
def create_highlights(
    request: HighlightRequest, engine: AnnotationEngine = Depends(get_engine)
) -> HighlightResponse:
    """
    Annotate a text.

    Examples:
        POST /api/v1/highlights
        {
            "text": "Golden hour lighting creates soft shadow play",
            "options": {"minConfidence": 60}
        }
    """
    logger.info("highlight_request_received", text_length=len(request.text))

    result = engine.process_detailed(request.text, request.options)

    return HighlightResponse(
        original_text=result.original_text,
        corrected_text=result.corrected_text,
        highlights=result.highlights,
        candidates_count=result.candidates_count,
        processing_time_ms=result.processing_time_ms,
    )
