"""
Seed taxonomy for semantic categorization.

The bundled taxonomy describes cinematography prompts. A JSON file of the form
[{"id": ..., "label": ..., "seed_words": [...]}, ...] (or an object keyed by
id) replaces it through the TAXONOMY_FILE setting.
"""

import json
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import structlog
from pydantic import ValidationError

from ..models.taxonomy import Category

logger = structlog.get_logger(__name__)

DEFAULT_TAXONOMY: Dict[str, Dict] = {
    "camera": {
        "label": "Camera",
        "seed_words": [
            "camera", "shot", "lens", "angle", "view", "zoom", "pan", "tilt",
            "tracking", "dolly", "crane", "focus", "frame", "composition",
        ],
    },
    "lighting": {
        "label": "Lighting",
        "seed_words": [
            "light", "lighting", "shadow", "bright", "dark", "glow", "illumination",
            "exposure", "contrast", "highlight", "backlight", "ray", "sunlight",
            "moonlight",
        ],
    },
    "subjects": {
        "label": "Subjects",
        "seed_words": [
            "person", "people", "figure", "character", "building", "architecture",
            "object", "scene", "landscape", "cityscape", "background", "foreground",
            "subject",
        ],
    },
    "actions": {
        "label": "Actions",
        "seed_words": [
            "walking", "running", "moving", "motion", "movement", "emerging",
            "passing", "approaching", "gesture", "action", "dynamic", "flowing",
        ],
    },
    "technical": {
        "label": "Technical",
        "seed_words": [
            "fps", "resolution", "aperture", "bokeh", "depth", "field", "grain",
            "compression", "codec", "format", "lut", "grading", "anamorphic", "4k", "8k",
        ],
    },
    "colors": {
        "label": "Colors",
        "seed_words": [
            "red", "blue", "green", "yellow", "orange", "purple", "pink", "white",
            "black", "color", "hue", "saturation", "tone", "neon", "vibrant",
        ],
    },
    "environment": {
        "label": "Environment",
        "seed_words": [
            "fog", "mist", "rain", "weather", "atmospheric", "air", "wind", "storm",
            "clouds", "sky", "environment", "ambient", "atmosphere",
        ],
    },
    "emotions": {
        "label": "Emotions",
        "seed_words": [
            "mood", "emotion", "feeling", "peaceful", "tense", "mysterious",
            "dramatic", "intimate", "lonely", "nostalgic", "melancholic", "serene",
        ],
    },
    "descriptive": {
        "label": "Descriptive",
        "seed_words": [
            "beautiful", "stunning", "elegant", "modern", "vintage", "cinematic",
            "artistic", "professional", "detailed", "quality", "style",
        ],
    },
}


def default_categories() -> List[Category]:
    """Fresh Category objects for the bundled taxonomy."""
    return [
        Category(id=category_id, label=entry["label"], seed_words=entry["seed_words"])
        for category_id, entry in DEFAULT_TAXONOMY.items()
    ]


def _parse_entries(raw) -> Iterable[Dict]:
    if isinstance(raw, dict):
        for category_id, entry in raw.items():
            if isinstance(entry, dict):
                yield {"id": category_id, **entry}
            else:
                yield {"id": category_id, "seed_words": entry}
    elif isinstance(raw, list):
        yield from (entry for entry in raw if isinstance(entry, dict))


def load_taxonomy(path: Optional[str] = None) -> List[Category]:
    """
    Load the seed taxonomy.

    Malformed entries are skipped with a warning; an unreadable or empty file
    falls back to the bundled taxonomy.

    Args:
        path: JSON taxonomy file (default: settings.taxonomy_file)

    Returns:
        List of categories with empty learned state
    """
    if path is None:
        from ..config import settings

        path = settings.taxonomy_file
    if not path:
        return default_categories()

    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("taxonomy_file_unreadable", path=path, error=str(e))
        return default_categories()

    categories: List[Category] = []
    for entry in _parse_entries(raw):
        try:
            categories.append(
                Category(
                    id=entry.get("id"),
                    label=entry.get("label") or "",
                    seed_words=entry.get("seed_words") or entry.get("seeds") or [],
                )
            )
        except ValidationError as e:
            logger.warning("taxonomy_entry_invalid", entry=entry, error=str(e))

    if not categories:
        logger.warning("taxonomy_file_empty", path=path)
        return default_categories()

    logger.info("taxonomy_loaded", path=path, categories=len(categories))
    return categories
