from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Protocol


@dataclass(frozen=True)
class ElevatorSnapshot:
    """Lightweight view of an elevator for scheduling decisions.

    ``moving_to`` is set only while the cabin is travelling between two
    floors; ``floor`` is then the floor it departed from.
    """

    elevator_id: int
    floor: int
    load: int
    capacity: int
    moving_to: Optional[int] = None

    @property
    def available_capacity(self) -> int:
        return max(0, self.capacity - self.load)

    @property
    def is_moving(self) -> bool:
        return self.moving_to is not None

    @property
    def direction(self) -> int:
        if self.moving_to is None:
            return 0
        return 1 if self.moving_to > self.floor else -1


@dataclass(frozen=True)
class PendingRequest:
    """One waiting passenger as seen by schedulers."""

    passenger_id: int
    origin: int
    direction: int


class Scheduler(Protocol):
    """Strategy interface for dispatching elevators to waiting passengers."""

    def select_calls(
        self,
        elevator_state: Iterable[ElevatorSnapshot],
        pending_requests: Iterable[PendingRequest],
    ) -> Dict[int, List[int]]:
        """
        Return mapping of elevator_id -> list of pickup floors to queue.

        Requests no elevator can take this tick are left out; they are
        offered again on the next dispatch.
        """
        ...
