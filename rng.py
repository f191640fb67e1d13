"""
Random sources for team randomization.

Randomized team assignment draws from a RandomSource passed in explicitly.
Seeded games use a fresh Mulberry32 generator per call so that the same seed
always reproduces the same teams and concurrent calls never share state.
Unseeded games use a random.Random instance.
"""

import random
from typing import Protocol, TypeVar

from constants import SEED_MASK

T = TypeVar("T")

_MULBERRY_INCREMENT = 0x6D2B79F5
_TWO_POW_32 = 4294967296


class RandomSource(Protocol):
    """Anything that produces floats in [0, 1)."""

    def random(self) -> float: ...


def _imul(a: int, b: int) -> int:
    """32-bit integer multiplication (wraps on overflow)."""
    return (a * b) & SEED_MASK


class Mulberry32:
    """Mulberry32 pseudo-random generator with 32 bits of state."""

    def __init__(self, seed: int):
        self._state = seed & SEED_MASK

    def random(self) -> float:
        self._state = (self._state + _MULBERRY_INCREMENT) & SEED_MASK
        t = self._state
        r = _imul(t ^ (t >> 15), 1 | t)
        r = (r ^ ((r + _imul(r ^ (r >> 7), 61 | r)) & SEED_MASK)) & SEED_MASK
        return ((r ^ (r >> 14)) & SEED_MASK) / _TWO_POW_32


def make_random_source(seed: int | None) -> RandomSource:
    """Returns a new seeded generator, or an unseeded one when seed is None."""
    if seed is None:
        return random.Random()
    return Mulberry32(seed)


def shuffle_in_place(items: list[T], source: RandomSource) -> None:
    """Fisher-Yates shuffle drawing from the given random source."""
    for i in range(len(items) - 1, 0, -1):
        j = int(source.random() * (i + 1))
        items[i], items[j] = items[j], items[i]
