from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Tuple

from elevdispatch import scan_order

from .passenger import Passenger
from .states import CabinState, DoorState, Entering, Holding, Moving, Standing, cabin_floor

if TYPE_CHECKING:  # pragma: no cover - import cycle safe typing
    from .building import Building
    from .metrics import MetricsTracker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ElevatorView:
    """Read-only copy of an elevator for renderers and loggers."""

    elevator_id: int
    cabin_state: CabinState
    door_state: DoorState
    boarded: Tuple[int, ...]
    destinations: Tuple[int, ...]


@dataclass
class Exchange:
    """Riders who left and entered during one dwell."""

    elevator_id: int
    floor: int
    alighted: List[Passenger] = field(default_factory=list)
    boarded: List[Passenger] = field(default_factory=list)


@dataclass
class Elevator:
    """A car with a cabin/door state machine and a SCAN-ordered stop list.

    Each call to :meth:`advance` performs exactly one transition: a cabin
    move, a door step, or dropping a stop nobody needs any more.
    """

    elevator_id: int
    capacity: int
    start_floor: int = 0
    min_open_ticks: int = 1
    max_open_ticks: int = 3
    cabin_state: CabinState = field(init=False)
    door_state: DoorState = DoorState.CLOSED
    targets: List[int] = field(default_factory=list)
    passengers: List[Passenger] = field(default_factory=list)
    door_open_ticks: int = 0

    def __post_init__(self) -> None:
        if self.capacity < 1:
            raise ValueError(f"Elevator {self.elevator_id} capacity must be positive, got {self.capacity}")
        if self.start_floor < 0:
            raise ValueError(f"Elevator {self.elevator_id} cannot start below floor 0")
        if self.min_open_ticks < 1:
            raise ValueError(f"Elevator {self.elevator_id} min_open_ticks must be positive, got {self.min_open_ticks}")
        if self.max_open_ticks < self.min_open_ticks:
            raise ValueError(f"Elevator {self.elevator_id} max_open_ticks must not be smaller than min_open_ticks")
        self.cabin_state = Standing(self.start_floor)

    @property
    def floor(self) -> int:
        return cabin_floor(self.cabin_state)

    @property
    def is_full(self) -> bool:
        return len(self.passengers) >= self.capacity

    def assign_target(self, floor: int) -> None:
        if floor in self.targets:
            return
        self.targets.append(floor)
        self.targets = scan_order(self.targets, self.floor)

    def view(self) -> ElevatorView:
        return ElevatorView(
            elevator_id=self.elevator_id,
            cabin_state=self.cabin_state,
            door_state=self.door_state,
            boarded=tuple(p.passenger_id for p in self.passengers),
            destinations=tuple(self.targets),
        )

    def advance(
        self,
        building: "Building",
        current_time: int,
        metrics: Optional["MetricsTracker"] = None,
    ) -> Optional[Exchange]:
        """Run one transition; returns the exchange when doors just opened."""
        state = self.cabin_state
        if isinstance(state, Standing):
            self._advance_standing(state, building)
        elif isinstance(state, Moving):
            self._advance_moving(state, building)
        elif isinstance(state, Holding):
            return self._advance_door(state, building, current_time, metrics)
        else:
            raise TypeError(f"Unknown cabin state {state!r}")
        return None

    def _advance_standing(self, state: Standing, building: "Building") -> None:
        if not self.targets:
            return
        target = self.targets[0]
        if not self._stop_warranted(target, building):
            logger.debug("Elevator %d dropping stale stop %d", self.elevator_id, target)
            self.targets.pop(0)
            return
        if target == state.floor:
            self.cabin_state = Holding(target)
            self.door_state = DoorState.OPENING
        else:
            self.cabin_state = Moving(state.floor, target)
        logger.debug("Elevator %d -> %s", self.elevator_id, self.cabin_state)

    def _advance_moving(self, state: Moving, building: "Building") -> None:
        new_floor = state.from_floor + state.direction
        if new_floor != state.to_floor:
            # Between floors for one tick only; the next stop is re-read from the queue.
            self.cabin_state = Standing(new_floor)
        elif self._stop_warranted(new_floor, building):
            self.cabin_state = Holding(new_floor)
        else:
            logger.debug("Elevator %d passing stale stop %d", self.elevator_id, new_floor)
            self._drop_target(new_floor)
            self.cabin_state = Standing(new_floor)
        logger.debug("Elevator %d -> %s", self.elevator_id, self.cabin_state)

    def _advance_door(
        self,
        state: Holding,
        building: "Building",
        current_time: int,
        metrics: Optional["MetricsTracker"],
    ) -> Optional[Exchange]:
        door = self.door_state
        if door is DoorState.CLOSED:
            self.door_state = DoorState.OPENING
        elif door is DoorState.OPENING:
            self.door_state = DoorState.OPEN
            self.door_open_ticks = 1
            return self._handle_stop(state.floor, building, current_time, metrics)
        elif door is DoorState.OPEN:
            ready = self.door_open_ticks >= self.min_open_ticks and not self.is_full
            if ready or self.door_open_ticks >= self.max_open_ticks:
                self.door_state = DoorState.CLOSING
            else:
                self.door_open_ticks += 1
        elif door is DoorState.CLOSING:
            self.door_state = DoorState.CLOSED
            self.door_open_ticks = 0
            self._drop_target(state.floor)
            self.cabin_state = Standing(state.floor)
        else:
            raise TypeError(f"Unknown door state {door!r}")
        return None

    def _stop_warranted(self, floor: int, building: "Building") -> bool:
        if any(p.destination == floor for p in self.passengers):
            return True
        return building.has_waiting_at(floor)

    def _drop_target(self, floor: int) -> None:
        if floor in self.targets:
            self.targets.remove(floor)

    def _handle_stop(
        self,
        floor: int,
        building: "Building",
        current_time: int,
        metrics: Optional["MetricsTracker"],
    ) -> Exchange:
        exchange = Exchange(elevator_id=self.elevator_id, floor=floor)

        # Alight
        remaining_passengers: List[Passenger] = []
        for passenger in self.passengers:
            if passenger.destination == floor:
                passenger.record_alighting(current_time)
                building.remove_passenger(passenger)
                exchange.alighted.append(passenger)
                if metrics is not None:
                    metrics.record_alighting(passenger, self.elevator_id)
                logger.info(
                    "Passenger %d left elevator %d at floor %d",
                    passenger.passenger_id,
                    self.elevator_id,
                    floor,
                )
            else:
                remaining_passengers.append(passenger)
        self.passengers = remaining_passengers

        # Board
        for passenger in building.waiting_at(floor):
            if self.is_full:
                break
            passenger.state = Entering()
            passenger.record_boarding(current_time)
            self.passengers.append(passenger)
            self.assign_target(passenger.destination)
            exchange.boarded.append(passenger)
            if metrics is not None:
                metrics.record_boarding(passenger)
            logger.info(
                "Passenger %d entered elevator %d at floor %d bound for %d",
                passenger.passenger_id,
                self.elevator_id,
                floor,
                passenger.destination,
            )
        return exchange
