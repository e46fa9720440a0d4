from __future__ import annotations

from typing import Iterable, List, Optional

from .interface import ElevatorSnapshot, PendingRequest


def scan_order(floors: Iterable[int], current_floor: int) -> List[int]:
    """Order stops to mirror SCAN behavior relative to ``current_floor``.

    The sweep goes up when any stop lies strictly above the cabin. Stops on
    the committed side come first, closest first, followed by the stops
    behind the cabin, again closest first.
    """

    floors = list(floors)
    if any(floor > current_floor for floor in floors):
        ahead = sorted(f for f in floors if f >= current_floor)
        behind = sorted((f for f in floors if f < current_floor), reverse=True)
    else:
        ahead = sorted((f for f in floors if f <= current_floor), reverse=True)
        behind = sorted(f for f in floors if f > current_floor)
    return ahead + behind


def is_on_the_way(elevator: ElevatorSnapshot, request: PendingRequest) -> bool:
    if not elevator.is_moving or elevator.direction != request.direction:
        return False
    low, high = sorted((elevator.floor, elevator.moving_to))
    return low <= request.origin <= high


def pickup_score(elevator: ElevatorSnapshot, request: PendingRequest) -> Optional[int]:
    """Score an elevator for a pickup; ``None`` disqualifies it.

    A parked cabin scores its floor distance to the caller. A moving cabin
    scores zero when the caller is on its way in the same direction and is
    otherwise not eligible.
    """

    if elevator.is_moving:
        return 0 if is_on_the_way(elevator, request) else None
    return abs(elevator.floor - request.origin)
