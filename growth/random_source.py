"""
Random number sources injected into the growth engine.

Anything with a ``random() -> float`` method returning values in [0, 1)
can drive the engine; the classes here cover the common cases.
"""

from typing import Optional, Protocol, Sequence

import numpy as np


class RandomSource(Protocol):
    def random(self) -> float:
        ...


class NumpyRandom:
    """Uniform floats from a numpy Generator, optionally seeded."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def random(self) -> float:
        return float(self._rng.random())

    def reseed(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = np.random.default_rng(seed)


class SequenceRandom:
    """
    Replays a fixed list of draws, cycling when exhausted.

    Useful for reproducing a particular branch evolution exactly.
    """

    def __init__(self, values: Sequence[float]):
        if not values:
            raise ValueError("SequenceRandom needs at least one value")
        for v in values:
            if not 0.0 <= v < 1.0:
                raise ValueError(f"random draw {v} outside [0, 1)")
        self.values = list(values)
        self.calls = 0

    def random(self) -> float:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value
