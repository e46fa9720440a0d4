from __future__ import annotations

from typing import Iterable, List

import pytest


class ScriptedRandomSource:
    """Replays fixed spawn decisions and floors; stops spawning once exhausted."""

    def __init__(
        self,
        spawns: Iterable[bool] = (),
        origins: Iterable[int] = (),
        destinations: Iterable[int] = (),
    ) -> None:
        self.spawns: List[bool] = list(spawns)
        self.origins: List[int] = list(origins)
        self.destinations: List[int] = list(destinations)
        self.probabilities: List[float] = []

    def should_spawn(self, probability: float) -> bool:
        self.probabilities.append(probability)
        return self.spawns.pop(0) if self.spawns else False

    def choose_origin(self, floor_count: int) -> int:
        return self.origins.pop(0)

    def choose_destination(self, floor_count: int, origin: int) -> int:
        return self.destinations.pop(0)


@pytest.fixture
def never_spawn() -> ScriptedRandomSource:
    return ScriptedRandomSource()


@pytest.fixture
def scripted_source():
    def factory(
        spawns: Iterable[bool] = (),
        origins: Iterable[int] = (),
        destinations: Iterable[int] = (),
    ) -> ScriptedRandomSource:
        return ScriptedRandomSource(spawns, origins, destinations)

    return factory
