"""Seedable RNG wrapper for deterministic map generation and search."""

import random


class GameRNG:
    """Wrapper around Python's random.Random for deterministic behavior.

    All randomness in map generation and in the search agents should go
    through this class so that a fixed seed reproduces a match or a decision.
    A seed of None draws entropy from the OS.
    """

    def __init__(self, seed: int | None = None):
        """Initialize RNG with given seed.

        Args:
            seed: Integer seed for deterministic randomness, or None
        """
        self.seed = seed
        self.rng = random.Random(seed)

    def randrange(self, n: int) -> int:
        """Return random integer in range [0, n)."""
        return self.rng.randrange(n)

    def uniform(self, a: float, b: float) -> float:
        """Return random float in [a, b]."""
        return self.rng.uniform(a, b)

    def choice(self, seq):
        """Choose random element from non-empty sequence.

        Args:
            seq: Sequence to choose from

        Returns:
            Random element from sequence
        """
        return self.rng.choice(seq)

    def random(self) -> float:
        """Return random float in [0.0, 1.0)."""
        return self.rng.random()

