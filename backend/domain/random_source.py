"""
Random sources for the game engine.

Every probabilistic decision in the engine draws from a single RandomSource
handed to the session at construction, so a run can be replayed exactly.
"""

import random
from typing import Iterable, List, Optional, Sequence


class RandomSource:
    """
    Interface for uniform randoms in [0, 1).
    """

    def random(self) -> float:
        raise NotImplementedError("Subclasses should implement this method.")

    def randrange(self, n: int) -> int:
        """Return an integer in [0, n) derived from a single draw."""
        if n <= 0:
            raise ValueError(f"randrange() needs a positive bound, got {n}")
        return min(int(self.random() * n), n - 1)

    def chance(self, probability: float) -> bool:
        """True with the given probability. Never draws for p <= 0."""
        if probability <= 0:
            return False
        return self.random() < probability


class SystemRandomSource(RandomSource):
    """Backed by a private random.Random, optionally seeded."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def random(self) -> float:
        return self._rng.random()


class SequenceRandomSource(RandomSource):
    """
    Replays a fixed sequence of values, cycling when it runs out.

    Useful for tests and for reproducing a recorded run.
    """

    def __init__(self, values: Iterable[float]):
        self.values: List[float] = list(values)
        if not self.values:
            raise ValueError("SequenceRandomSource needs at least one value")
        for value in self.values:
            if not 0.0 <= value < 1.0:
                raise ValueError(f"Random values must lie in [0, 1), got {value}")
        self.draws = 0

    def random(self) -> float:
        value = self.values[self.draws % len(self.values)]
        self.draws += 1
        return value


class FixedRandomSource(SequenceRandomSource):
    """Always returns the same value."""

    def __init__(self, value: float):
        super().__init__([value])


class ScriptedRandomSource(RandomSource):
    """
    Returns scripted values first, then falls back to another source.
    """

    def __init__(self, script: Sequence[float], fallback: RandomSource):
        self.script = list(script)
        self.fallback = fallback

    def push(self, *values: float) -> None:
        self.script.extend(values)

    def random(self) -> float:
        if self.script:
            return self.script.pop(0)
        return self.fallback.random()
