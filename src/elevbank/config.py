from __future__ import annotations

from dataclasses import dataclass


@dataclass
class SimulationConfig:
    """Building shape, car limits and arrival settings, checked on creation."""

    floor_count: int = 4
    elevator_count: int = 1
    capacity: int = 2
    start_floor: int = 0
    min_open_ticks: int = 1
    max_open_ticks: int = 3
    spawn_probability: float = 0.3
    scheduler_name: str = "on_the_way"

    def __post_init__(self) -> None:
        if self.floor_count < 2:
            raise ValueError(f"floor_count must be at least 2, got {self.floor_count}")
        if self.elevator_count < 1:
            raise ValueError(f"elevator_count must be positive, got {self.elevator_count}")
        if self.capacity < 1:
            raise ValueError(f"capacity must be positive, got {self.capacity}")
        if not 0 <= self.start_floor < self.floor_count:
            raise ValueError(
                f"start_floor {self.start_floor} outside [0, {self.floor_count})"
            )
        if self.min_open_ticks < 1:
            raise ValueError(f"min_open_ticks must be positive, got {self.min_open_ticks}")
        if self.max_open_ticks < self.min_open_ticks:
            raise ValueError("max_open_ticks must not be smaller than min_open_ticks")
        if not 0.0 <= self.spawn_probability <= 1.0:
            raise ValueError(
                f"spawn_probability must be within [0, 1], got {self.spawn_probability}"
            )
