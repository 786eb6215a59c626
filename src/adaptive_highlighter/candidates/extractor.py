"""
TF-IDF / PMI phrase extractor.

Extracts 1- to 4-word candidates from one document with:
- Sentence-bounded n-gram generation
- Deterministic counting (Counter-based)
- Laplace-smoothed TF-IDF against the corpus seen so far
- Mean adjacent-pair PMI for collocation detection
- A corpus statistics update once the document is scored
"""

from collections import Counter
from typing import Dict, FrozenSet, List, Optional

import structlog

from ..models.candidates import PhraseCandidate
from ..models.corpus import CorpusStats
from .filters import is_candidate_phrase
from .scoring import (
    final_score,
    inverse_document_frequency,
    ngram_pmi,
    pmi_denominator,
    term_frequency,
)
from .stopwords import STOPWORDS_EN
from .tokenizer import ngrams, stable_id, tokenize_sentences

logger = structlog.get_logger(__name__)


class PhraseExtractor:
    """
    Scores statistically significant phrases and grows corpus statistics.

    The extractor itself is stateless; all learned state lives in the
    CorpusStats passed to extract().
    """

    def __init__(
        self,
        max_ngram: Optional[int] = None,
        min_unigram_length: Optional[int] = None,
        pmi_normalizer: Optional[float] = None,
        stopwords: Optional[FrozenSet[str]] = None,
    ):
        from ..config import settings

        self.max_ngram = max_ngram if max_ngram is not None else settings.extractor_max_ngram
        self.min_unigram_length = (
            min_unigram_length
            if min_unigram_length is not None
            else settings.extractor_min_unigram_length
        )
        self.pmi_normalizer = (
            pmi_normalizer if pmi_normalizer is not None else settings.pmi_normalizer
        )
        self.stopwords = stopwords if stopwords is not None else STOPWORDS_EN

    def count_ngrams(self, sentences: List[List[str]]) -> Counter:
        """
        Count every 1..max_ngram n-gram inside each sentence.

        Args:
            sentences: Tokenized sentences

        Returns:
            Counter of n-gram -> occurrences in the document
        """
        counts: Counter = Counter()
        for tokens in sentences:
            for n in range(1, self.max_ngram + 1):
                counts.update(ngrams(tokens, n))
        return counts

    def score(
        self, sentences: List[List[str]], stats: CorpusStats
    ) -> List[PhraseCandidate]:
        """
        Score the eligible n-grams of a document against unmutated stats.

        Args:
            sentences: Tokenized sentences of the document
            stats: Corpus statistics before this document is counted

        Returns:
            Candidates sorted by final_score descending, then text ascending
        """
        total_tokens = sum(len(tokens) for tokens in sentences)
        if total_tokens == 0:
            return []

        counts = self.count_ngrams(sentences)
        denominator = pmi_denominator(stats)

        candidates = []
        for term, count in counts.items():
            words = term.split(" ")
            if not is_candidate_phrase(words, self.stopwords, self.min_unigram_length):
                continue

            tf = term_frequency(count, total_tokens)
            idf = inverse_document_frequency(term, stats)
            pmi = ngram_pmi(words, stats, denominator) if len(words) > 1 else None

            candidates.append(
                PhraseCandidate(
                    candidate_id=stable_id("phrase", term),
                    text=term,
                    ngram_length=len(words),
                    count=count,
                    tf_score=tf,
                    idf_score=idf,
                    pmi_score=pmi,
                    final_score=final_score(tf, idf, pmi, self.pmi_normalizer),
                )
            )

        candidates.sort(key=lambda c: (-c.final_score, c.text))
        return candidates

    def update_statistics(self, sentences: List[List[str]], stats: CorpusStats) -> None:
        """
        Count one document into the corpus statistics.

        document_frequency grows once per distinct n-gram, total_frequency by
        its occurrences. Calling this twice counts the document twice.
        """
        counts = self.count_ngrams(sentences)
        if not counts:
            return

        for term, count in counts.items():
            stats.document_frequency[term] = stats.document_frequency.get(term, 0) + 1
            stats.total_frequency[term] = stats.total_frequency.get(term, 0) + count

        stats.total_tokens += sum(len(tokens) for tokens in sentences)
        stats.total_documents += 1

        logger.debug(
            "corpus_stats_updated",
            total_documents=stats.total_documents,
            distinct_terms=len(counts),
        )

    def extract(self, text: str, stats: CorpusStats) -> List[PhraseCandidate]:
        """
        Extract scored candidates from text and count it into stats.

        Args:
            text: Document text
            stats: Corpus statistics, mutated in place

        Returns:
            Candidates sorted by final_score descending; empty text returns []
            without touching stats

        Examples:
            >>> stats = CorpusStats()
            >>> [c.text for c in PhraseExtractor().extract("Shallow depth of field.", stats)][:2]
            ['depth', 'depth of field']
            >>> stats.total_documents
            1
        """
        sentences = tokenize_sentences(text or "")
        if not sentences:
            return []

        candidates = self.score(sentences, stats)
        self.update_statistics(sentences, stats)
        return candidates

    @staticmethod
    def get_statistics(stats: CorpusStats, top_n: int = 20) -> Dict:
        """
        Summarize learned corpus statistics.

        Returns:
            Dict with document/term totals and the most frequent terms
        """
        top_terms = sorted(
            stats.document_frequency.items(), key=lambda item: (-item[1], item[0])
        )[:top_n]
        return {
            "total_documents": stats.total_documents,
            "unique_terms": len(stats.document_frequency),
            "total_tokens": stats.total_tokens,
            "top_terms": [{"term": term, "doc_freq": freq} for term, freq in top_terms],
        }
