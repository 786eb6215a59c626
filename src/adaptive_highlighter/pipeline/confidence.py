"""
Base confidence scaling for a batch of candidate scores.

Maps final_score values of one document onto [0, 100]. Every method is
monotonic (a higher score never gets a lower confidence) and depends only on
the batch itself, so identical inputs always scale identically.

Methods:
- max_ratio (default): 100 * score / max_score; a uniform batch is all 100
- minmax: 100 * (score - min) / (max - min); a uniform batch is all 100
- sigmoid: logistic of the z-score, 100 / (1 + exp(-k * z))
"""

from typing import List, Sequence

import numpy as np

SCALING_METHODS = ("max_ratio", "minmax", "sigmoid")


def scale_confidences(
    scores: Sequence[float], method: str = "max_ratio", steepness: float = 1.0
) -> List[float]:
    """
    Scale a batch of scores to confidences in [0, 100].

    Args:
        scores: Candidate final scores (non-negative)
        method: One of SCALING_METHODS
        steepness: Logistic steepness for "sigmoid"

    Returns:
        Confidences in the input order

    Raises:
        ValueError: If method is unknown

    Examples:
        >>> scale_confidences([0.2, 0.1])
        [100.0, 50.0]
        >>> scale_confidences([0.3, 0.3], method="minmax")
        [100.0, 100.0]
    """
    if method not in SCALING_METHODS:
        raise ValueError(f"Unknown confidence scaling method: {method!r}")

    values = np.asarray(scores, dtype=float)
    if values.size == 0:
        return []

    high = values.max()
    low = values.min()

    if method == "max_ratio":
        if high <= 0:
            scaled = np.full_like(values, 100.0)
        else:
            scaled = 100.0 * values / high
    elif method == "minmax":
        if np.isclose(high, low):
            scaled = np.full_like(values, 100.0)
        else:
            scaled = 100.0 * (values - low) / (high - low)
    else:
        std = values.std()
        if np.isclose(std, 0.0):
            scaled = np.full_like(values, 50.0)
        else:
            z = (values - values.mean()) / std
            scaled = 100.0 / (1.0 + np.exp(-steepness * z))

    return [float(c) for c in np.clip(scaled, 0.0, 100.0)]
