from __future__ import annotations

import random
from typing import Optional, Protocol, Sequence, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    """The randomness the generator consumes. ``random.Random`` satisfies it."""

    def random(self) -> float: ...

    def randint(self, a: int, b: int) -> int: ...

    def choice(self, seq: Sequence[T]) -> T: ...


def make_random(seed: Optional[int] = None) -> random.Random:
    return random.Random(seed)
