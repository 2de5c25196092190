"""Random Source used by the program's easy strategy and the first-player draw.

Anything with a `next_u32()` method works, so tests can hand in a scripted
sequence instead of real randomness.
"""

from __future__ import annotations

import random
from typing import Protocol

from pebbles.config import PebblesSettings


class RandomSource(Protocol):
    def next_u32(self) -> int:
        """Return a uniformly distributed integer in [0, 2**32)."""
        ...


class SystemRandomSource:
    def __init__(self) -> None:
        self._rng = random.SystemRandom()

    def next_u32(self) -> int:
        return self._rng.getrandbits(32)


class SeededRandomSource:
    def __init__(self, seed: int) -> None:
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def seed(self) -> int:
        return self._seed

    def next_u32(self) -> int:
        return self._rng.getrandbits(32)


def random_source_from_settings(settings: PebblesSettings) -> RandomSource:
    if settings.random_seed is None:
        return SystemRandomSource()
    return SeededRandomSource(settings.random_seed)
