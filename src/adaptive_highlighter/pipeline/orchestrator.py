"""
AnnotationEngine: the end-to-end highlighting pipeline.

Pipeline stages for process():
1. Fuzzy-correct the text
2. Extract scored candidates (counts the document into corpus stats)
3. Locate every candidate occurrence
4. Categorize each occurrence (and learn from its context)
5. Scale candidate scores into base confidences
6. Explore/exploit decision per occurrence
7. Resolve overlaps, cap to max_highlights
8. Record the survivors as shown
9. Return highlights sorted by start offset

State lives in four buckets (corpus, categories, interactions, options),
each guarded by its own lock and persisted as a versioned snapshot.
"""

import threading
import time
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

import structlog
from pydantic import ValidationError

from ..candidates import extract_candidates
from ..candidates.extractor import PhraseExtractor
from ..categorization import UNCATEGORIZED, SemanticCategorizer, extract_context
from ..errors import InvalidConfigurationError, RecoverableStateError
from ..fuzzy import FuzzyMatcher, build_dictionary
from ..learning import BehaviorLearningEngine, ExplorationStrategy, utc_now
from ..models.corpus import CorpusStats
from ..models.highlights import AnnotationResult, Highlight
from ..models.interactions import InteractionRecord
from ..models.options import ConfigurationResult, EngineOptions
from ..models.taxonomy import Category, UserCorrection
from ..storage import InMemoryStore, KeyValueStore, create_store, unwrap_snapshot, wrap_snapshot
from ..storage.snapshots import (
    CATEGORIZER_KEY,
    CORPUS_STATS_KEY,
    INTERACTIONS_KEY,
    OPTIONS_KEY,
    STATE_KEYS,
)
from .confidence import scale_confidences
from .occurrences import find_occurrences
from .overlap import resolve_overlaps

logger = structlog.get_logger(__name__)

OptionsInput = Union[EngineOptions, Dict[str, Any], None]


class AnnotationEngine:
    """
    Self-learning text annotation engine.

    Args:
        store: Key-value store for persisted state (default: from settings)
        categories: Seed taxonomy (default: TAXONOMY_FILE or bundled)
        dictionary: Canonical spelling dictionary (default: domain vocabulary
            plus taxonomy seed words)
        rng: Random source for exploration, anything with random()
        clock: Callable returning the current aware datetime
        auto_flush: Persist after each mutating call (default: settings)
        load_state: Load persisted state on construction
    """

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        categories: Optional[Iterable[Category]] = None,
        dictionary: Optional[Iterable[str]] = None,
        rng: Optional[Any] = None,
        clock: Optional[Callable] = None,
        auto_flush: Optional[bool] = None,
        load_state: bool = True,
    ):
        from ..config import settings

        self.store = store if store is not None else create_store()
        self.clock = clock or utc_now
        self.auto_flush = settings.auto_flush if auto_flush is None else auto_flush
        self.confidence_scaling = settings.confidence_scaling
        self.sigmoid_steepness = settings.sigmoid_steepness

        self.extractor = PhraseExtractor()
        self.categorizer = SemanticCategorizer(categories=categories)
        extend_dictionary = dictionary is None
        if extend_dictionary:
            dictionary = build_dictionary(
                extra_terms=self.categorizer.seed_vocabulary(),
                dictionary_file=settings.dictionary_file,
            )
        self.fuzzy = FuzzyMatcher(dictionary=dictionary)
        self.learner = BehaviorLearningEngine(
            exploration=ExplorationStrategy(rng=rng, seed=settings.exploration_seed),
            clock=self.clock,
        )

        self.corpus_stats = CorpusStats()
        self._default_options = EngineOptions.from_settings(settings)
        self.options = self._default_options.model_copy()
        self._sync_learner_options()

        # Acquisition order when nesting: corpus, categories, interactions, options
        self._corpus_lock = threading.RLock()
        self._categories_lock = threading.RLock()
        self._interactions_lock = threading.RLock()
        self._options_lock = threading.RLock()

        if load_state:
            self.load()
            if extend_dictionary:
                for word in self.categorizer.seed_vocabulary():
                    self.fuzzy.add_word(word)

        logger.info(
            "annotation_engine_initialized",
            store=type(self.store).__name__,
            categories=len(self.categorizer.categories),
            dictionary_size=len(self.fuzzy.dictionary),
            auto_flush=self.auto_flush,
        )

    @classmethod
    def in_memory(cls, **kwargs) -> "AnnotationEngine":
        """Engine backed by a fresh InMemoryStore."""
        return cls(store=InMemoryStore(), **kwargs)

    # ------------------------------------------------------------------
    # State buckets
    # ------------------------------------------------------------------

    def _lock_for(self, key: str) -> threading.RLock:
        return {
            CORPUS_STATS_KEY: self._corpus_lock,
            CATEGORIZER_KEY: self._categories_lock,
            INTERACTIONS_KEY: self._interactions_lock,
            OPTIONS_KEY: self._options_lock,
        }[key]

    def _dump_bucket(self, key: str) -> Dict[str, Any]:
        if key == CORPUS_STATS_KEY:
            return self.corpus_stats.model_dump(mode="json")
        if key == CATEGORIZER_KEY:
            return self.categorizer.to_dict()
        if key == INTERACTIONS_KEY:
            return self.learner.to_dict()
        return self.options.model_dump(mode="json")

    def _apply_bucket(self, key: str, data: Dict[str, Any]) -> None:
        if key == CORPUS_STATS_KEY:
            self.corpus_stats = CorpusStats.model_validate(data)
        elif key == CATEGORIZER_KEY:
            self.categorizer.load_dict(data)
        elif key == INTERACTIONS_KEY:
            self.learner.load_dict(data)
        else:
            self.options = EngineOptions.model_validate(data)
            self._sync_learner_options()

    def _reset_bucket(self, key: str) -> None:
        if key == CORPUS_STATS_KEY:
            self.corpus_stats = CorpusStats()
        elif key == CATEGORIZER_KEY:
            self.categorizer.reset()
        elif key == INTERACTIONS_KEY:
            self.learner.reset()
        else:
            self.options = self._default_options.model_copy()
            self._sync_learner_options()

    def _restore_bucket(self, key: str, raw: Any) -> bool:
        """
        Apply one stored envelope; an unusable one resets the bucket.

        Returns:
            True if state was restored
        """
        with self._lock_for(key):
            try:
                data = unwrap_snapshot(key, raw)
                if data is None:
                    return False
                try:
                    self._apply_bucket(key, data)
                except (ValidationError, ValueError, TypeError, AttributeError) as e:
                    raise RecoverableStateError(key, str(e)) from e
            except RecoverableStateError as e:
                logger.warning("state_snapshot_discarded", key=e.key, reason=e.reason)
                self._reset_bucket(key)
                return False
        return True

    def load(self) -> List[str]:
        """
        Load every state bucket from the store.

        Returns:
            Keys that were restored
        """
        restored = []
        for key in STATE_KEYS:
            try:
                raw = self.store.get(key)
            except ValueError as e:
                logger.warning("state_snapshot_unreadable", key=key, error=str(e))
                with self._lock_for(key):
                    self._reset_bucket(key)
                continue
            if self._restore_bucket(key, raw):
                restored.append(key)

        logger.info("engine_state_loaded", restored=restored)
        return restored

    def _write(self, keys: Iterable[str]) -> None:
        now = self.clock()
        for key in keys:
            with self._lock_for(key):
                snapshot = wrap_snapshot(self._dump_bucket(key), now)
                self.store.set(key, snapshot)

    def flush(self) -> None:
        """Persist every state bucket."""
        self._write(STATE_KEYS)
        logger.debug("engine_state_flushed")

    def _persist(self, *keys: str) -> None:
        if self.auto_flush:
            self._write(keys)

    def export_state(self) -> Dict[str, Any]:
        """All state buckets as versioned snapshot envelopes."""
        now = self.clock()
        state = {}
        for key in STATE_KEYS:
            with self._lock_for(key):
                state[key] = wrap_snapshot(self._dump_bucket(key), now)
        return state

    def import_state(self, state: Dict[str, Any]) -> List[str]:
        """
        Replace state with exported envelopes.

        Missing keys are left as they are; unusable ones reset their bucket.

        Returns:
            Keys that were restored
        """
        restored = [
            key for key in STATE_KEYS if key in state and self._restore_bucket(key, state[key])
        ]
        self._persist(*STATE_KEYS)
        logger.info("engine_state_imported", restored=restored)
        return restored

    def reset(self, include_configuration: bool = False) -> None:
        """
        Forget all learned state (destructive).

        Args:
            include_configuration: Also restore default options
        """
        keys = [CORPUS_STATS_KEY, CATEGORIZER_KEY, INTERACTIONS_KEY]
        if include_configuration:
            keys.append(OPTIONS_KEY)

        for key in keys:
            with self._lock_for(key):
                self._reset_bucket(key)
            self.store.remove(key)

        logger.warning("engine_state_reset", buckets=keys)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def _sync_learner_options(self) -> None:
        self.learner.learning_rate = self.options.learning_rate
        self.learner.exploration_rate = self.options.exploration_rate
        self.learner.min_confidence = self.options.min_confidence

    @staticmethod
    def _validate_option(key: str, value: Any, current: Dict[str, Any]):
        name = EngineOptions.field_name_for(key)
        if name is None:
            raise InvalidConfigurationError(key, value, "unknown option")
        try:
            validated = EngineOptions.model_validate({**current, name: value})
        except ValidationError as e:
            raise InvalidConfigurationError(key, value, e.errors()[0]["msg"]) from e
        return name, getattr(validated, name)

    def _merge_options(
        self, base: EngineOptions, partial: Dict[str, Any], result: ConfigurationResult
    ) -> EngineOptions:
        current = base.model_dump()
        for key, value in partial.items():
            try:
                name, coerced = self._validate_option(key, value, current)
            except InvalidConfigurationError as e:
                result.add_rejection(key, e.reason)
                logger.warning("option_rejected", key=key, value=repr(value), reason=e.reason)
                continue
            current[name] = coerced
            result.applied[name] = coerced
        return EngineOptions(**current)

    def configure(self, partial: Optional[Dict[str, Any]] = None) -> ConfigurationResult:
        """
        Update options key by key.

        Each invalid key is rejected on its own and keeps its previous value.
        configure({}) changes nothing.

        Args:
            partial: Option values by snake_case name or camelCase alias

        Returns:
            ConfigurationResult with applied and rejected keys
        """
        result = ConfigurationResult()
        if not partial:
            return result

        with self._options_lock:
            self.options = self._merge_options(self.options, dict(partial), result)
            self._sync_learner_options()

        if result.applied:
            self._persist(OPTIONS_KEY)
        logger.info("engine_configured", applied=result.applied, rejected=result.rejected)
        return result

    def get_configuration(self) -> EngineOptions:
        with self._options_lock:
            return self.options.model_copy()

    def _resolve_options(self, options: OptionsInput) -> EngineOptions:
        with self._options_lock:
            base = self.options.model_copy()
        if options is None:
            return base
        if isinstance(options, EngineOptions):
            return options
        return self._merge_options(base, dict(options), ConfigurationResult())

    # ------------------------------------------------------------------
    # Processing
    # ------------------------------------------------------------------

    def process(self, text: Any, options: OptionsInput = None) -> List[Highlight]:
        """
        Highlight the significant phrases of a text.

        Args:
            text: Input text (non-strings are treated as empty)
            options: Per-call option overrides (invalid keys are ignored)

        Returns:
            Non-overlapping highlights sorted by start offset

        Examples:
            >>> engine = AnnotationEngine.in_memory()
            >>> engine.process("")
            []
        """
        return self.process_detailed(text, options).highlights

    def process_detailed(self, text: Any, options: OptionsInput = None) -> AnnotationResult:
        """Like process(), with the corrected text and processing metadata."""
        start_time = time.time()
        text = text if isinstance(text, str) else ""

        if not text.strip():
            return AnnotationResult(original_text=text, corrected_text=text)

        opts = self._resolve_options(options)
        corrected = self.fuzzy.correct(text)

        with self._corpus_lock:
            extraction = extract_candidates(corrected, self.corpus_stats, self.extractor)
        candidates = extraction.candidates

        confidences = scale_confidences(
            [c.final_score for c in candidates],
            method=self.confidence_scaling,
            steepness=self.sigmoid_steepness,
        )

        proposals = []
        with self._categories_lock:
            for candidate, base_confidence in zip(candidates, confidences):
                for start, end in find_occurrences(corrected, candidate.text):
                    context = extract_context(corrected, start, end, opts.context_window_chars)
                    category_id = self.categorizer.categorize(candidate.text, context)
                    self.categorizer.learn(candidate.text, context)
                    if category_id != UNCATEGORIZED:
                        proposals.append((candidate.text, start, end, category_id, base_confidence))

        with self._interactions_lock:
            shown = []
            for phrase, start, end, category_id, base_confidence in proposals:
                decision = self.learner.should_show(
                    phrase,
                    category_id,
                    base_confidence,
                    min_confidence=opts.min_confidence,
                    exploration_rate=opts.exploration_rate,
                )
                if not decision.show:
                    continue
                shown.append(
                    Highlight(
                        start=start,
                        end=end,
                        text=corrected[start:end],
                        phrase=phrase,
                        category_id=category_id,
                        confidence=decision.adjusted_confidence,
                        explored=decision.explored,
                    )
                )

            highlights = resolve_overlaps(shown)
            if opts.max_highlights is not None and len(highlights) > opts.max_highlights:
                highlights = sorted(highlights, key=lambda h: (-h.confidence, h.start))
                highlights = sorted(highlights[: opts.max_highlights], key=lambda h: h.start)

            for highlight in highlights:
                self.learner.record_shown(highlight.phrase, highlight.category_id)

        self._persist(CORPUS_STATS_KEY, CATEGORIZER_KEY, INTERACTIONS_KEY)

        processing_time_ms = (time.time() - start_time) * 1000
        logger.info(
            "text_annotated",
            text_length=len(text),
            candidates=len(candidates),
            occurrences=len(proposals),
            shown=len(shown),
            highlights=len(highlights),
            processing_time_ms=round(processing_time_ms, 2),
        )

        return AnnotationResult(
            original_text=text,
            corrected_text=corrected,
            highlights=highlights,
            candidates_count=len(candidates),
            processing_time_ms=processing_time_ms,
        )

    # ------------------------------------------------------------------
    # Feedback and corrections
    # ------------------------------------------------------------------

    def record_clicked(self, phrase: str, category_id: str) -> InteractionRecord:
        with self._interactions_lock:
            record = self.learner.record_clicked(phrase, category_id).model_copy()
        self._persist(INTERACTIONS_KEY)
        return record

    def record_ignored(self, phrase: str, category_id: str) -> InteractionRecord:
        with self._interactions_lock:
            record = self.learner.record_ignored(phrase, category_id).model_copy()
        self._persist(INTERACTIONS_KEY)
        return record

    def apply_correction(
        self, phrase: str, from_category: str, to_category: str
    ) -> UserCorrection:
        with self._categories_lock:
            correction = self.categorizer.apply_correction(
                phrase, from_category, to_category, timestamp=self.clock()
            )
        self._persist(CATEGORIZER_KEY)
        return correction

    def add_seed_word(self, category_id: str, word: str) -> bool:
        """
        Teach an existing category a new seed word.

        The word also joins the spelling dictionary so it is never corrected
        away.

        Returns:
            True if added, False for unknown categories or known seed words
        """
        with self._categories_lock:
            added = self.categorizer.add_seed_word(category_id, word)
        if added:
            self.fuzzy.add_word(word)
            self._persist(CATEGORIZER_KEY)
            logger.info("seed_word_added", category_id=category_id, word=word.strip().lower())
        return added

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def get_statistics(self) -> Dict[str, Any]:
        """Read-only diagnostics: {extractor, categorizer, learner}."""
        with self._corpus_lock:
            extractor_stats = PhraseExtractor.get_statistics(self.corpus_stats)
        with self._categories_lock:
            categorizer_stats = self.categorizer.get_statistics()
        with self._interactions_lock:
            learner_stats = self.learner.get_statistics()
        return {
            "extractor": extractor_stats,
            "categorizer": categorizer_stats,
            "learner": learner_stats,
        }

    def close(self) -> None:
        """Flush pending state and release the store."""
        if not self.auto_flush:
            self.flush()
        self.store.close()
