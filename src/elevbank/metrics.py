from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List

from .passenger import Passenger


def percentile(values: List[int], fraction: float) -> float:
    """Linear-interpolated percentile; 0.0 for an empty sample."""
    if not values:
        return 0.0
    ordered = sorted(values)
    rank = (len(ordered) - 1) * fraction
    low, high = math.floor(rank), math.ceil(rank)
    if low == high:
        return float(ordered[low])
    return float(ordered[low] * (high - rank) + ordered[high] * (rank - low))


@dataclass
class MetricsSnapshot:
    time_step: int
    average_wait: float
    wait_p95: float
    average_ride: float
    ride_p95: float
    throughput: int
    served_by_elevator: Dict[int, int] = field(default_factory=dict)


class MetricsTracker:
    """Wait and ride times, in ticks, of passengers the bank has served."""

    def __init__(self) -> None:
        self.wait_times: List[int] = []
        self.ride_times: List[int] = []
        self.served_by_elevator: Dict[int, int] = {}

    @property
    def throughput(self) -> int:
        return len(self.ride_times)

    def record_boarding(self, passenger: Passenger) -> None:
        if passenger.wait_time is not None:
            self.wait_times.append(passenger.wait_time)

    def record_alighting(self, passenger: Passenger, elevator_id: int) -> None:
        if passenger.ride_time is None:
            return
        self.ride_times.append(passenger.ride_time)
        self.served_by_elevator[elevator_id] = self.served_by_elevator.get(elevator_id, 0) + 1

    def snapshot(self, time_step: int) -> MetricsSnapshot:
        def mean(values: List[int]) -> float:
            return sum(values) / len(values) if values else 0.0

        return MetricsSnapshot(
            time_step=time_step,
            average_wait=mean(self.wait_times),
            wait_p95=percentile(self.wait_times, 0.95),
            average_ride=mean(self.ride_times),
            ride_p95=percentile(self.ride_times, 0.95),
            throughput=self.throughput,
            served_by_elevator=dict(self.served_by_elevator),
        )
