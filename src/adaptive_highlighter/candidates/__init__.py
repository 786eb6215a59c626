"""
Phrase candidate extraction module.

Public API for tokenizing a document, scoring its n-grams with TF-IDF and
PMI, and growing the corpus statistics the scores depend on.
"""

import time
from typing import Optional

import structlog

from ..models.candidates import ExtractionResult, PhraseCandidate
from ..models.corpus import CorpusStats
from .extractor import PhraseExtractor
from .stopwords import STOPLIST_VERSION, STOPWORDS_EN
from .tokenizer import TOKENIZER_VERSION, tokenize_sentences


logger = structlog.get_logger(__name__)

__all__ = [
    "extract_candidates",
    "ExtractionResult",
    "PhraseCandidate",
    "PhraseExtractor",
    "STOPWORDS_EN",
    "TOKENIZER_VERSION",
    "STOPLIST_VERSION",
]


def extract_candidates(
    text: str,
    stats: CorpusStats,
    extractor: Optional[PhraseExtractor] = None,
) -> ExtractionResult:
    """
    Complete candidate extraction pipeline for one document.

    Pipeline stages:
    1. Split sentences and tokenize
    2. Count 1..4-grams per sentence
    3. Score eligible n-grams (TF-IDF, PMI) against current stats
    4. Count the document into stats
    5. Sort by final_score descending

    Args:
        text: Document text
        stats: Corpus statistics, mutated in place
        extractor: Extractor to use (default: PhraseExtractor())

    Returns:
        ExtractionResult with the candidates and processing metadata

    Examples:
        >>> result = extract_candidates("Soft light. Hard shadow.", CorpusStats())
        >>> result.sentence_count
        2
    """
    start_time = time.time()
    extractor = extractor or PhraseExtractor()

    sentences = tokenize_sentences(text or "")
    total_tokens = sum(len(tokens) for tokens in sentences)

    logger.debug(
        "candidate_extraction_started",
        text_length=len(text or ""),
        sentences=len(sentences),
        total_tokens=total_tokens,
    )

    candidates = extractor.extract(text or "", stats)

    processing_time_ms = (time.time() - start_time) * 1000

    logger.info(
        "candidate_extraction_complete",
        candidates=len(candidates),
        total_documents=stats.total_documents,
        processing_time_ms=round(processing_time_ms, 2),
    )

    return ExtractionResult(
        candidates=candidates,
        total_tokens=total_tokens,
        sentence_count=len(sentences),
        tokenizer_version=TOKENIZER_VERSION,
        stoplist_version=STOPLIST_VERSION,
        processing_time_ms=processing_time_ms,
    )
