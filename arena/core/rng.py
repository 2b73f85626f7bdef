"""
Injectable random source.

The boss's action roll and the demo strike roll are the only
non-deterministic inputs to a battle. Everything that rolls takes a
RandomSource so tests can pass a seeded generator or a scripted fake.
"""

from __future__ import annotations

import random
from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class RandomSource(Protocol):
    """The subset of random.Random the battle core relies on."""

    def randrange(self, stop: int) -> int:
        """Return an integer in [0, stop)."""
        ...

    def randint(self, a: int, b: int) -> int:
        """Return an integer in [a, b]."""
        ...


def create_rng(seed: Optional[int] = None) -> random.Random:
    """
    Build a generator for one battle.

    Args:
        seed: Fixed seed for reproducible runs, None for OS entropy

    Returns:
        A random.Random instance (satisfies RandomSource)
    """
    return random.Random(seed)
