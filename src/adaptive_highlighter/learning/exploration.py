"""
Explore/exploit strategy with an injectable random source.
"""

from typing import Any, Optional

import numpy as np


class ExplorationStrategy:
    """
    Bernoulli exploration draw.

    The random source is anything with a random() method returning floats in
    [0, 1): numpy Generators, random.Random, or a test double.

    Examples:
        >>> ExplorationStrategy(seed=7).explore(0.0)
        False
        >>> ExplorationStrategy(seed=7).explore(1.0)
        True
    """

    def __init__(self, rng: Optional[Any] = None, seed: Optional[int] = None):
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def explore(self, exploration_rate: float) -> bool:
        """One draw: True with probability exploration_rate."""
        return float(self.rng.random()) < exploration_rate
