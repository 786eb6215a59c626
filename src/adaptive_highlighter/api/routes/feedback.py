"""
User feedback endpoints.

- POST /api/v1/feedback/clicked - a shown highlight was clicked
- POST /api/v1/feedback/ignored - a shown highlight was dismissed
- POST /api/v1/corrections - a phrase was recategorized by the user
- POST /api/v1/categories/{category_id}/seed-words - a category gained a seed word
"""

import structlog
from fastapi import APIRouter, Depends

from ...models.api_models import (
    CorrectionRequest,
    CorrectionResponse,
    FeedbackRequest,
    FeedbackResponse,
    SeedWordRequest,
    SeedWordResponse,
)
from ...models.interactions import InteractionRecord
from ...pipeline import AnnotationEngine
from ..dependencies import get_engine

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/v1", tags=["feedback"])


def _feedback_response(record: InteractionRecord) -> FeedbackResponse:
    return FeedbackResponse(
        phrase_key=record.phrase_key,
        category_id=record.category_id,
        shown_count=record.shown_count,
        clicked_count=record.clicked_count,
        ignored_count=record.ignored_count,
        quality_score=record.quality_score,
    )


@router.post("/feedback/clicked", response_model=FeedbackResponse)
def feedback_clicked(
    request: FeedbackRequest, engine: AnnotationEngine = Depends(get_engine)
) -> FeedbackResponse:
    record = engine.record_clicked(request.phrase, request.category_id)
    logger.info("feedback_clicked", phrase=record.phrase_key, category_id=record.category_id)
    return _feedback_response(record)


@router.post("/feedback/ignored", response_model=FeedbackResponse)
def feedback_ignored(
    request: FeedbackRequest, engine: AnnotationEngine = Depends(get_engine)
) -> FeedbackResponse:
    record = engine.record_ignored(request.phrase, request.category_id)
    logger.info("feedback_ignored", phrase=record.phrase_key, category_id=record.category_id)
    return _feedback_response(record)


@router.post("/corrections", response_model=CorrectionResponse)
def create_correction(
    request: CorrectionRequest, engine: AnnotationEngine = Depends(get_engine)
) -> CorrectionResponse:
    """
    Recategorize a phrase.

    Unknown categories are created on first reference.
    """
    correction = engine.apply_correction(
        request.phrase, request.from_category, request.to_category
    )
    return CorrectionResponse(**correction.model_dump())


@router.post("/categories/{category_id}/seed-words", response_model=SeedWordResponse)
def add_seed_word(
    category_id: str, request: SeedWordRequest, engine: AnnotationEngine = Depends(get_engine)
) -> SeedWordResponse:
    """added is false for unknown categories and words already seeded."""
    added = engine.add_seed_word(category_id, request.word)
    return SeedWordResponse(category_id=category_id, word=request.word.strip().lower(), added=added)
