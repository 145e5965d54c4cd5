"""Injectable randomness.

Every stochastic formula takes a RandomSource instead of calling the global
`random` module, so a seeded source reproduces a run exactly.
`random.Random` already satisfies the Protocol.
"""

import random
from collections.abc import Sequence
from typing import Protocol, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    def random(self) -> float: ...

    def uniform(self, a: float, b: float) -> float: ...

    def randint(self, a: int, b: int) -> int: ...

    def choice(self, seq: Sequence[T]) -> T: ...

    def sample(self, population: Sequence[T], k: int) -> list[T]: ...


def make_random_source(seed: int | None = None) -> random.Random:
    """Seeded source for reproducible runs; None seeds from OS entropy."""
    return random.Random(seed)
