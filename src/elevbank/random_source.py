from __future__ import annotations

import random
from typing import Optional, Protocol


class RandomSource(Protocol):
    """Supplies every random decision a tick needs."""

    def should_spawn(self, probability: float) -> bool:
        ...

    def choose_origin(self, floor_count: int) -> int:
        ...

    def choose_destination(self, floor_count: int, origin: int) -> int:
        ...


class SeededRandomSource:
    """``random.Random`` backed source; equal seeds replay equal runs."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self.random = random.Random(seed)

    def should_spawn(self, probability: float) -> bool:
        return self.random.random() < probability

    def choose_origin(self, floor_count: int) -> int:
        return self.random.randrange(floor_count)

    def choose_destination(self, floor_count: int, origin: int) -> int:
        possible_floors = [f for f in range(floor_count) if f != origin]
        return self.random.choice(possible_floors)
