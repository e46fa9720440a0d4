from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from .elevator import Elevator
from .passenger import Passenger
from .states import Moving, describe_cabin
from elevdispatch import ElevatorSnapshot, PendingRequest, Scheduler, get_scheduler

logger = logging.getLogger(__name__)


@dataclass
class Building:
    """Container for elevators and the passengers not yet delivered."""

    num_floors: int
    elevators: List[Elevator] = field(default_factory=list)
    scheduler_name: str = "on_the_way"
    scheduler: Scheduler = field(init=False)
    passengers: List[Passenger] = field(init=False, default_factory=list)
    _issued_ids: Set[int] = field(init=False, default_factory=set)

    def __post_init__(self) -> None:
        if self.num_floors < 2:
            raise ValueError(f"A building needs at least 2 floors, got {self.num_floors}")
        for index, elevator in enumerate(self.elevators):
            if elevator.elevator_id != index:
                raise ValueError(
                    f"Elevator at position {index} has id {elevator.elevator_id}; ids must match list order"
                )
            self._check_floor(elevator.floor, f"Elevator {elevator.elevator_id} start floor")
        self.scheduler = get_scheduler(self.scheduler_name)

    def add_passenger(self, passenger: Passenger) -> None:
        if passenger.passenger_id in self._issued_ids:
            raise ValueError(f"Passenger id {passenger.passenger_id} already used")
        self._check_floor(passenger.origin, "Origin")
        self._check_floor(passenger.destination, "Destination")
        self._issued_ids.add(passenger.passenger_id)
        self.passengers.append(passenger)

    def remove_passenger(self, passenger: Passenger) -> None:
        self.passengers.remove(passenger)

    def waiting_passengers(self) -> List[Passenger]:
        return [p for p in self.passengers if p.is_waiting]

    def waiting_at(self, floor: int) -> List[Passenger]:
        waiting = [p for p in self.passengers if p.waiting_at(floor)]
        return sorted(waiting, key=lambda p: p.passenger_id)

    def has_waiting_at(self, floor: int) -> bool:
        return any(p.waiting_at(floor) for p in self.passengers)

    def dispatch(self, current_time: int) -> None:
        requests = self._collect_pending_requests()
        if not requests:
            return
        snapshots = self._snapshot_elevators()
        assignments = self.scheduler.select_calls(snapshots, requests)
        for elevator_id, targets in assignments.items():
            elevator = self._get_elevator(elevator_id)
            if elevator is None:
                continue
            for target in targets:
                logger.debug("t=%d assigning pickup %d to elevator %d", current_time, target, elevator_id)
                elevator.assign_target(target)

    def snapshot(self) -> dict:
        waiting: Dict[int, int] = {}
        for passenger in self.waiting_passengers():
            waiting[passenger.origin] = waiting.get(passenger.origin, 0) + 1
        return {
            "floors": [waiting.get(floor, 0) for floor in range(self.num_floors)],
            "elevators": [
                {
                    "id": elevator.elevator_id,
                    "cabin": describe_cabin(elevator.cabin_state),
                    "door_state": elevator.door_state.value,
                    "targets": list(elevator.targets),
                    "passengers": [p.passenger_id for p in elevator.passengers],
                    "capacity": elevator.capacity,
                }
                for elevator in self.elevators
            ],
        }

    def _collect_pending_requests(self) -> List[PendingRequest]:
        return [
            PendingRequest(
                passenger_id=passenger.passenger_id,
                origin=passenger.origin,
                direction=passenger.direction,
            )
            for passenger in self.waiting_passengers()
        ]

    def _snapshot_elevators(self) -> List[ElevatorSnapshot]:
        snapshots: List[ElevatorSnapshot] = []
        for elevator in self.elevators:
            state = elevator.cabin_state
            snapshots.append(
                ElevatorSnapshot(
                    elevator_id=elevator.elevator_id,
                    floor=elevator.floor,
                    load=len(elevator.passengers),
                    capacity=elevator.capacity,
                    moving_to=state.to_floor if isinstance(state, Moving) else None,
                )
            )
        return snapshots

    def _check_floor(self, floor: int, label: str) -> None:
        if not 0 <= floor < self.num_floors:
            raise ValueError(f"{label} {floor} outside [0, {self.num_floors})")

    def _get_elevator(self, elevator_id: int) -> Optional[Elevator]:
        for elevator in self.elevators:
            if elevator.elevator_id == elevator_id:
                return elevator
        return None
