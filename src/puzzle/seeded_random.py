"""
Seeded sequence generator.

Everything about the geometry of a puzzle (tab shapes, scrambled positions, rotations) is drawn from here,
so the seed alone is enough to reconstruct a puzzle: same seed + same draw order --> same puzzle.
"""

import time
from dataclasses import dataclass, field

from src.core.exceptions import PuzzleError

# Linear congruential recurrence: state = (a * state + c) mod m
LCG_MULTIPLIER = 25214903917
LCG_INCREMENT = 11
LCG_MODULUS = 2**48


@dataclass
class SeededRandom:
    """Unbounded stream of floats in [0, 1). Can only be restarted by creating a new one with the same seed."""

    seed: int
    state: int = field(init=False)
    draws: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        # bool is a subclass of int, but never a meaningful seed
        if isinstance(self.seed, bool) or not isinstance(self.seed, int):
            raise PuzzleError(f"Seed must be an integer, got {self.seed!r}")
        self.state = self.seed

    def random(self) -> float:
        """Advance the recurrence once and return the new state scaled into [0, 1)."""
        self.state = (LCG_MULTIPLIER * self.state + LCG_INCREMENT) % LCG_MODULUS
        self.draws += 1
        return self.state / LCG_MODULUS


class WallClockSeedSource:
    """
    Seeds derived from the wall clock (milliseconds since the epoch).
    ---

    NOTE two calls within the same millisecond would collide, so the next seed is always bumped past the last one handed out.
    """

    def __init__(self) -> None:
        self._last_seed = 0

    def __call__(self) -> int:
        seed = max(time.time_ns() // 1_000_000, self._last_seed + 1)
        self._last_seed = seed
        return seed
