"""
Randomness sources for the generators.

Every random decision the engine makes is a uniform draw of an index in
``[0, n)``. Funnelling all of them through one small interface lets tests
script the exact draws and lets the CLI reproduce a result from a seed.
"""

from __future__ import annotations

import itertools
import random
from collections.abc import Iterable
from typing import Protocol, runtime_checkable


@runtime_checkable
class RandomSource(Protocol):
    """Source of uniform integer draws."""

    def randbelow(self, n: int) -> int:
        """Return an integer drawn uniformly from ``[0, n)``. ``n`` must be positive."""
        ...


class SystemRandomSource:
    """
    RandomSource backed by :class:`random.Random`.

    Args:
        seed: Optional seed; the same seed reproduces the same draws
    """

    def __init__(self, seed: int | None = None):
        self._random = random.Random(seed)

    def randbelow(self, n: int) -> int:
        if n <= 0:
            raise ValueError(f"randbelow() requires a positive bound, got {n}")
        return self._random.randrange(n)


class SequenceRandomSource:
    """
    RandomSource that replays a fixed sequence of draws.

    Args:
        draws: Indices to return, in order
        repeat: Cycle through ``draws`` forever instead of failing when exhausted

    Raises:
        ValueError: From randbelow() if a scripted draw is outside ``[0, n)``
        IndexError: From randbelow() if the sequence is exhausted
    """

    def __init__(self, draws: Iterable[int], repeat: bool = False):
        draws = list(draws)
        if repeat and not draws:
            raise ValueError("A repeating sequence needs at least one draw")
        self._draws = itertools.cycle(draws) if repeat else iter(draws)
        self.calls: list[int] = []

    def randbelow(self, n: int) -> int:
        try:
            draw = next(self._draws)
        except StopIteration:
            raise IndexError(
                f"Scripted random sequence exhausted after {len(self.calls)} draws"
            ) from None
        if not 0 <= draw < n:
            raise ValueError(f"Scripted draw {draw} is outside [0, {n})")
        self.calls.append(n)
        return draw
