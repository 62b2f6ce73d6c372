"""
ZIL Runtime Randomness

RANDOM, PICK-ONE and PROB over a seedable generator owned by the game.
"""

from __future__ import annotations

import random as _random
from typing import Any, Optional, Sequence


class Randomizer:
    """Seedable source for the game's random primitives."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = _random.Random(seed)

    def reseed(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self._rng.seed(seed)

    def random(self, n: int) -> int:
        """
        Uniform draw.

        n > 0 gives [1, n]; n < 0 gives [n, -1]; n == 0 gives 0.
        """
        if n > 0:
            return self._rng.randint(1, n)
        if n < 0:
            return -self._rng.randint(1, -n)
        return 0

    def pick_one(self, seq: Sequence[Any]) -> Optional[Any]:
        if not seq:
            return None
        return seq[self._rng.randrange(len(seq))]

    def prob(self, percent: float) -> bool:
        """True with probability percent/100."""
        return self._rng.randrange(100) < percent
