"""
Semantic categorizer: seed-word overlap, learned co-occurrence and context.

Scoring for a phrase occurrence and category c:

    score[c] = |phrase words matching c's seeds|
             + c.learned_cooccurrence[phrase]
             + context_bonus if any of c's seeds appears in the context window

A phrase word matches a seed when equal to it or when both share a stem
("lighting" matches "light"). Ties go to the most recent user correction of
the exact phrase, then to the smallest category id.
"""

import math
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

import structlog

from ..candidates.tokenizer import stem, tokenize
from ..models.taxonomy import Category, UserCorrection
from .context import context_terms
from .taxonomy import load_taxonomy

logger = structlog.get_logger(__name__)

UNCATEGORIZED = "uncategorized"


def _normalize_phrase(phrase: str) -> str:
    return " ".join(tokenize(phrase or ""))


def _seed_index(category: Category) -> Tuple[Set[str], Set[str]]:
    seeds = category.seed_words
    return seeds, {stem(s) for s in seeds}


def _matches(word: str, seeds: Set[str], seed_stems: Set[str]) -> bool:
    return word in seeds or stem(word) in seed_stems


def squash(x: float, steepness: float = 1.0) -> float:
    """
    Logistic squash of a non-negative ratio into [0, 1).

    Examples:
        >>> squash(0.0)
        0.0
        >>> round(squash(1.0), 3)
        0.462
    """
    return 2.0 / (1.0 + math.exp(-steepness * x)) - 1.0


class SemanticCategorizer:
    """
    Assigns categories to phrase occurrences and learns from their contexts.

    Owns the category state (seed words, learned weights, corrections) and
    the per-phrase context co-occurrence counts used to renormalize weights.
    """

    def __init__(
        self,
        categories: Optional[Iterable[Category]] = None,
        context_bonus: Optional[float] = None,
        renormalize_interval: Optional[int] = None,
        steepness: Optional[float] = None,
        max_context_terms: Optional[int] = None,
    ):
        from ..config import settings

        taxonomy = list(categories) if categories is not None else load_taxonomy()
        self._taxonomy = [c.model_copy(deep=True) for c in taxonomy]

        self.context_bonus = context_bonus if context_bonus is not None else settings.context_bonus
        self.renormalize_interval = max(
            1,
            renormalize_interval
            if renormalize_interval is not None
            else settings.renormalize_interval,
        )
        self.steepness = steepness if steepness is not None else settings.cooccurrence_steepness
        self.max_context_terms = (
            max_context_terms if max_context_terms is not None else settings.max_context_terms
        )

        self.categories: Dict[str, Category] = {}
        self.context_counts: Dict[str, Dict[str, int]] = {}
        self.observations: Dict[str, int] = {}
        self.learning_steps = 0
        self.reset()

    def reset(self) -> None:
        """Drop all learned state, keeping the configured taxonomy."""
        self.categories = {c.id: c.model_copy(deep=True) for c in self._taxonomy}
        self.context_counts = {}
        self.observations = {}
        self.learning_steps = 0

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def score(
        self,
        phrase: str,
        context_window: str = "",
        categories: Optional[Iterable[Category]] = None,
    ) -> Dict[str, float]:
        """
        Score every category for one phrase occurrence.

        Args:
            phrase: Candidate phrase
            context_window: Surrounding text, occurrence excluded
            categories: Categories to score (default: own state)

        Returns:
            Dict category_id -> score (malformed entries skipped)
        """
        key = _normalize_phrase(phrase)
        phrase_words = set(key.split())
        context_words = set(tokenize(context_window or ""))
        if categories is None:
            categories = self.categories.values()

        scores: Dict[str, float] = {}
        for category in categories:
            if not isinstance(category, Category):
                logger.debug("category_entry_skipped", entry_type=type(category).__name__)
                continue
            seeds, seed_stems = _seed_index(category)

            overlap = sum(1 for w in phrase_words if _matches(w, seeds, seed_stems))
            learned = category.learned_cooccurrence.get(key, 0.0)
            bonus = (
                self.context_bonus
                if any(_matches(w, seeds, seed_stems) for w in context_words)
                else 0.0
            )
            scores[category.id] = overlap + learned + bonus
        return scores

    def _latest_corrections(self, phrase_key: str) -> List[UserCorrection]:
        corrections = [
            correction
            for category in self.categories.values()
            for correction in category.user_corrections
            if correction.phrase == phrase_key
        ]
        return sorted(corrections, key=lambda c: c.timestamp, reverse=True)

    def categorize(
        self,
        phrase: str,
        context_window: str = "",
        categories: Optional[Iterable[Category]] = None,
    ) -> str:
        """
        Pick the category for one phrase occurrence.

        Returns:
            Winning category id, or "uncategorized" when no score is positive

        Examples:
            >>> lighting = Category(id="lighting", seed_words=["light", "shadow"])
            >>> SemanticCategorizer(categories=[lighting]).categorize("soft lighting")
            'lighting'
        """
        scores = self.score(phrase, context_window, categories)
        if not scores:
            return UNCATEGORIZED

        best = max(scores.values())
        if best <= 0:
            return UNCATEGORIZED

        tied = {category_id for category_id, s in scores.items() if math.isclose(s, best)}
        if len(tied) > 1:
            for correction in self._latest_corrections(_normalize_phrase(phrase)):
                if correction.to_category in tied:
                    return correction.to_category
        return min(tied)

    # ------------------------------------------------------------------
    # Learning
    # ------------------------------------------------------------------

    def learn(self, phrase: str, context_window: str) -> None:
        """
        Record one observation of a phrase with its context words.

        Every renormalize_interval steps the learned weights of all tracked
        phrases are recomputed.
        """
        key = _normalize_phrase(phrase)
        if not key:
            return

        self.observations[key] = self.observations.get(key, 0) + 1
        counts = self.context_counts.setdefault(key, {})
        for word in context_terms(context_window or ""):
            counts[word] = counts.get(word, 0) + 1

        if len(counts) > self.max_context_terms:
            kept = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
            self.context_counts[key] = dict(kept[: self.max_context_terms])

        self.learning_steps += 1
        if self.learning_steps % self.renormalize_interval == 0:
            self.renormalize()

    def _pinned(self) -> Dict[str, Tuple[str, str]]:
        """phrase -> (to_category, from_category) of its latest correction."""
        latest: Dict[str, UserCorrection] = {}
        for category in self.categories.values():
            for correction in category.user_corrections:
                current = latest.get(correction.phrase)
                if current is None or correction.timestamp >= current.timestamp:
                    latest[correction.phrase] = correction
        return {p: (c.to_category, c.from_category) for p, c in latest.items()}

    def renormalize(self) -> None:
        """
        Recompute learned weights from context co-occurrence counts.

        weight = squash(seed hits in context / observations of the phrase).
        Weights pinned by the latest user correction are left untouched.
        """
        pinned = self._pinned()
        updated = 0

        for phrase, counts in self.context_counts.items():
            observed = self.observations.get(phrase, 0)
            if observed <= 0:
                continue
            pinned_ids = pinned.get(phrase, ())
            for category in self.categories.values():
                if category.id in pinned_ids:
                    continue
                seeds, seed_stems = _seed_index(category)
                hits = sum(n for word, n in counts.items() if _matches(word, seeds, seed_stems))
                weight = squash(hits / observed, self.steepness)
                if weight > 0:
                    category.learned_cooccurrence[phrase] = weight
                    updated += 1
                else:
                    category.learned_cooccurrence.pop(phrase, None)

        logger.debug(
            "cooccurrence_renormalized",
            learning_steps=self.learning_steps,
            tracked_phrases=len(self.context_counts),
            weights=updated,
        )

    # ------------------------------------------------------------------
    # Explicit mutations
    # ------------------------------------------------------------------

    def _get_or_create(self, category_id: str) -> Category:
        category = self.categories.get(category_id)
        if category is None:
            category = Category(id=category_id, label=category_id)
            self.categories[category_id] = category
            logger.info("category_created", category_id=category_id)
        return category

    def apply_correction(
        self,
        phrase: str,
        from_category: str,
        to_category: str,
        timestamp: Optional[datetime] = None,
    ) -> UserCorrection:
        """
        Recategorize a phrase on explicit user request.

        The target's weight for the phrase is pinned at 1.0 and the source's
        at 0.0. Unknown categories are created without seed words.
        """
        key = _normalize_phrase(phrase)
        correction = UserCorrection(
            phrase=key,
            from_category=from_category,
            to_category=to_category,
            timestamp=timestamp or datetime.now(timezone.utc),
        )

        target = self._get_or_create(to_category)
        target.user_corrections.append(correction)
        target.learned_cooccurrence[key] = 1.0
        if from_category and from_category != to_category:
            self._get_or_create(from_category).learned_cooccurrence[key] = 0.0

        logger.info(
            "user_correction_applied",
            phrase=key,
            from_category=from_category,
            to_category=to_category,
        )
        return correction

    def add_seed_word(self, category_id: str, word: str) -> bool:
        """
        Add a seed word to an existing category.

        Returns:
            True if added, False for unknown categories or known words
        """
        category = self.categories.get(category_id)
        word = (word or "").strip().lower()
        if category is None or not word or word in category.seed_words:
            return False
        category.seed_words.add(word)
        return True

    def seed_vocabulary(self) -> Set[str]:
        """All seed words of all categories."""
        return {w for category in self.categories.values() for w in category.seed_words}

    # ------------------------------------------------------------------
    # Diagnostics and persistence
    # ------------------------------------------------------------------

    def get_statistics(self) -> Dict[str, Any]:
        return {
            "categories": len(self.categories),
            "seed_words": sum(len(c.seed_words) for c in self.categories.values()),
            "learned_patterns": sum(
                1
                for c in self.categories.values()
                for w in c.learned_cooccurrence.values()
                if w > 0
            ),
            "user_corrections": sum(len(c.user_corrections) for c in self.categories.values()),
            "tracked_phrases": len(self.context_counts),
            "learning_steps": self.learning_steps,
        }

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serializable learned state."""
        return {
            "categories": [
                c.model_dump(mode="json")
                for _, c in sorted(self.categories.items())
            ],
            "context_counts": {p: dict(c) for p, c in self.context_counts.items()},
            "observations": dict(self.observations),
            "learning_steps": self.learning_steps,
        }

    def load_dict(self, data: Dict[str, Any]) -> None:
        """
        Restore learned state on top of the configured taxonomy.

        Raises:
            ValueError: If the data does not validate (pydantic ValidationError
                is a ValueError subclass)
        """
        if not isinstance(data, dict):
            raise ValueError("categorizer state must be an object")

        loaded = [Category.model_validate(raw) for raw in data.get("categories", [])]
        context_counts = {
            str(phrase): {str(w): int(n) for w, n in counts.items()}
            for phrase, counts in (data.get("context_counts") or {}).items()
        }
        observations = {str(p): int(n) for p, n in (data.get("observations") or {}).items()}
        learning_steps = int(data.get("learning_steps", 0))

        self.reset()
        for category in loaded:
            existing = self.categories.get(category.id)
            if existing is None:
                self.categories[category.id] = category
                continue
            existing.seed_words |= category.seed_words
            existing.learned_cooccurrence = dict(category.learned_cooccurrence)
            existing.user_corrections = list(category.user_corrections)

        self.context_counts = context_counts
        self.observations = observations
        self.learning_steps = learning_steps
