"""Tagged state variants for cabins, doors and passengers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


@dataclass(frozen=True)
class Standing:
    floor: int


@dataclass(frozen=True)
class Moving:
    from_floor: int
    to_floor: int

    def __post_init__(self) -> None:
        if self.from_floor == self.to_floor:
            raise ValueError(f"Moving cabin needs distinct floors, got {self.from_floor} twice")

    @property
    def direction(self) -> int:
        return 1 if self.to_floor > self.from_floor else -1


@dataclass(frozen=True)
class Holding:
    floor: int


CabinState = Union[Standing, Moving, Holding]


def cabin_floor(state: CabinState) -> int:
    """Floor the cabin counts as being at; the departure floor while moving."""
    if isinstance(state, Moving):
        return state.from_floor
    return state.floor


class DoorState(str, Enum):
    CLOSED = "closed"
    OPENING = "opening"
    OPEN = "open"
    CLOSING = "closing"


@dataclass(frozen=True)
class Idle:
    floor: int


@dataclass(frozen=True)
class Entering:
    pass


@dataclass(frozen=True)
class InCabin:
    pass


@dataclass(frozen=True)
class Exiting:
    pass


PassengerState = Union[Idle, Entering, InCabin, Exiting]


def describe_cabin(state: CabinState) -> dict:
    if isinstance(state, Standing):
        return {"kind": "standing", "floor": state.floor}
    if isinstance(state, Moving):
        return {"kind": "moving", "from": state.from_floor, "to": state.to_floor}
    if isinstance(state, Holding):
        return {"kind": "holding", "floor": state.floor}
    raise TypeError(f"Unknown cabin state {state!r}")
