from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .states import Exiting, Idle, InCabin, PassengerState


@dataclass
class Passenger:
    """Represents a rider moving between floors."""

    passenger_id: int
    origin: int
    destination: int
    arrival_time: int = 0
    board_time: Optional[int] = None
    alight_time: Optional[int] = None
    state: PassengerState = field(init=False)

    def __post_init__(self) -> None:
        if self.destination == self.origin:
            raise ValueError(
                f"Passenger {self.passenger_id} destination must differ from origin {self.origin}"
            )
        self.state = Idle(self.origin)

    @property
    def direction(self) -> int:
        """Return +1 for up, -1 for down."""
        return 1 if self.destination > self.origin else -1

    @property
    def is_waiting(self) -> bool:
        return isinstance(self.state, Idle)

    def waiting_at(self, floor: int) -> bool:
        return isinstance(self.state, Idle) and self.state.floor == floor

    def record_boarding(self, time_step: int) -> None:
        self.board_time = time_step
        self.state = InCabin()

    def record_alighting(self, time_step: int) -> None:
        self.state = Exiting()
        self.alight_time = time_step

    @property
    def wait_time(self) -> Optional[int]:
        if self.board_time is None:
            return None
        return self.board_time - self.arrival_time

    @property
    def ride_time(self) -> Optional[int]:
        if self.board_time is None or self.alight_time is None:
            return None
        return self.alight_time - self.board_time
