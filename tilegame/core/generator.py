"""
Injectable sources of uniform random numbers.

Every random decision taken by the engine (tile spawns) and by the agents (rollouts,
random baselines) goes through a ``RandomGenerator``, so a whole search is a pure
function of its inputs once the generator is seeded.
"""

from typing import Protocol, runtime_checkable

from numpy.random import PCG64DXSM, default_rng


@runtime_checkable
class RandomGenerator(Protocol):
    """Source of uniform floats in ``[0, 1)``."""

    def next(self) -> float:
        """Return the next uniform float in ``[0, 1)``."""


class NumpyGenerator:
    """
    Random generator backed by a NumPy ``PCG64DXSM`` bit generator.

    Parameters
    ----------
    seed : int, optional
        Seed for reproducible sequences. Fresh OS entropy is used when omitted.
    """

    def __init__(self, seed: int | None = None):
        self.seed = seed
        self._generator = default_rng(PCG64DXSM(seed))

    def next(self) -> float:
        return float(self._generator.random())


class LinearCongruentialGenerator:
    """
    Legacy seeded generator of the browser game.

    Reproduces the tile sequences of games recorded with the browser benchmark
    seeds: ``seed = (seed * 9301 + 49297) % 233280``.

    Parameters
    ----------
    seed : int
        Initial state of the generator.
    """

    MULTIPLIER = 9301
    INCREMENT = 49297
    MODULUS = 233280

    def __init__(self, seed: int):
        self._state = seed

    def next(self) -> float:
        self._state = (self._state * self.MULTIPLIER + self.INCREMENT) % self.MODULUS
        return self._state / self.MODULUS


def make_generator(seed: int | None = None) -> RandomGenerator:
    """
    Build the default generator.

    Parameters
    ----------
    seed : int, optional
        Seed for reproducibility; ``None`` gives a non-deterministic generator.

    Returns
    -------
    RandomGenerator
        A NumPy-backed generator.
    """
    return NumpyGenerator(seed)
