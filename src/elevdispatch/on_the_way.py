from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from .interface import ElevatorSnapshot, PendingRequest
from .utils import pickup_score

logger = logging.getLogger(__name__)


class OnTheWayScheduler:
    """Sends each waiting passenger the nearest parked car or a car passing by.

    Cars at capacity are never considered. Equal scores go to the elevator
    with the lowest id.
    """

    def select_calls(
        self,
        elevator_state: Iterable[ElevatorSnapshot],
        pending_requests: Iterable[PendingRequest],
    ) -> Dict[int, List[int]]:
        assignments: Dict[int, List[int]] = {}
        elevators = sorted(elevator_state, key=lambda e: e.elevator_id)
        for request in sorted(pending_requests, key=lambda req: req.passenger_id):
            candidate = self._choose_elevator(elevators, request)
            if candidate is None:
                logger.debug("No elevator available for passenger %d", request.passenger_id)
                continue
            targets = assignments.setdefault(candidate.elevator_id, [])
            if request.origin not in targets:
                targets.append(request.origin)
        return assignments

    def _choose_elevator(
        self, elevators: List[ElevatorSnapshot], request: PendingRequest
    ) -> Optional[ElevatorSnapshot]:
        best: Optional[ElevatorSnapshot] = None
        best_score: Optional[int] = None
        for elevator in elevators:
            if elevator.available_capacity <= 0:
                continue
            score = pickup_score(elevator, request)
            if score is None:
                continue
            if best_score is None or score < best_score:
                best, best_score = elevator, score
        return best
