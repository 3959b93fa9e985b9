"""Injectable RNG wrapper built on top of random.Random."""
from __future__ import annotations

from random import Random


class RNG:
    """Wrapper around random.Random used for (random:) draws.

    Passing a seed makes every draw reproducible; omitting it seeds from
    system entropy like the module-level generator.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._random = Random(seed)

    def randint(self, a: int, b: int) -> int:
        """Return a random integer N such that a <= N <= b.

        Reversed bounds are accepted and swapped.
        """
        if a > b:
            a, b = b, a
        return self._random.randint(a, b)


_DEFAULT_RNG = RNG()


def default_rng() -> RNG:
    """Return the process-wide generator used when none is injected."""
    return _DEFAULT_RNG
