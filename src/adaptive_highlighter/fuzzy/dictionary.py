"""
Canonical dictionary for spelling correction.

The bundled vocabulary covers cinematography and visual-description terms;
taxonomy seed words and an optional newline-delimited file extend it. The
general English lexicon only marks words as already correct.
"""

from functools import lru_cache
from pathlib import Path
from typing import FrozenSet, Iterable, Optional, Set

import structlog
from spellchecker import SpellChecker

logger = structlog.get_logger(__name__)

DOMAIN_VOCABULARY: FrozenSet[str] = frozenset(
    {
        # Camera and optics
        "camera", "lens", "lenses", "focus", "focal", "aperture", "bokeh", "zoom",
        "tracking", "dolly", "crane", "tilt", "handheld", "steadicam", "gimbal",
        "angle", "frame", "framing", "composition", "close-up", "wide", "telephoto",
        "anamorphic", "macro", "aerial", "drone", "shot", "shots",
        # Light
        "light", "lighting", "shadow", "shadows", "silhouette", "highlight",
        "backlight", "backlit", "exposure", "contrast", "illumination", "sunlight",
        "moonlight", "golden", "hour", "glow", "glowing", "reflection", "diffused",
        "soft", "hard", "warm", "shallow",
        "volumetric", "lens-flare", "flare",
        # Post-production and format
        "cinematic", "cinematography", "resolution", "grain", "grading", "graded",
        "saturation", "desaturated", "codec", "format", "depth", "field",
        "motion", "slow-motion", "timelapse", "framerate",
        # Colour
        "color", "colour", "palette", "teal", "orange", "crimson", "amber",
        "monochrome", "pastel", "vibrant", "neon",
        # Atmosphere and mood
        "atmosphere", "atmospheric", "fog", "mist", "haze", "rain", "storm",
        "clouds", "dramatic", "mysterious", "melancholic", "nostalgic", "serene",
        "ethereal", "moody",
        # Subjects and action
        "portrait", "landscape", "cityscape", "silhouetted", "foreground",
        "background", "walking", "running", "dancing",
    }
)


def load_dictionary_file(path: str) -> Set[str]:
    """
    Read one term per line, ignoring blanks and '#' comments.

    Args:
        path: Path to a UTF-8 text file

    Returns:
        Set of lowercased terms (empty if the file cannot be read)
    """
    file_path = Path(path)
    try:
        lines = file_path.read_text(encoding="utf-8").splitlines()
    except OSError as e:
        logger.warning("dictionary_file_unreadable", path=str(file_path), error=str(e))
        return set()

    terms = {line.strip().lower() for line in lines}
    return {t for t in terms if t and not t.startswith("#")}


def build_dictionary(
    extra_terms: Optional[Iterable[str]] = None, dictionary_file: Optional[str] = None
) -> FrozenSet[str]:
    """
    Assemble the canonical single-word dictionary.

    Multi-word entries are split into their words.

    Args:
        extra_terms: Additional terms (e.g. taxonomy seed words)
        dictionary_file: Optional newline-delimited term file

    Returns:
        Frozen set of lowercase words
    """
    terms: Set[str] = set(DOMAIN_VOCABULARY)
    if extra_terms:
        terms.update(str(t).lower() for t in extra_terms)
    if dictionary_file:
        terms.update(load_dictionary_file(dictionary_file))

    words = {word for term in terms for word in term.split() if word}
    return frozenset(words)


@lru_cache(maxsize=1)
def load_english_lexicon() -> SpellChecker:
    """
    General English word list bundled with pyspellchecker.

    Loaded once per process; only membership lookups are used.
    """
    lexicon = SpellChecker(language="en", distance=1)
    logger.debug("english_lexicon_loaded", words=lexicon.word_frequency.unique_words)
    return lexicon
