from __future__ import annotations

from typing import Dict, Type

from .interface import ElevatorSnapshot, PendingRequest, Scheduler
from .on_the_way import OnTheWayScheduler
from .utils import pickup_score, scan_order

__all__ = [
    "ElevatorSnapshot",
    "OnTheWayScheduler",
    "PendingRequest",
    "Scheduler",
    "get_scheduler",
    "pickup_score",
    "scan_order",
]


SCHEDULER_REGISTRY: Dict[str, Type[Scheduler]] = {
    "on_the_way": OnTheWayScheduler,
}


def get_scheduler(name: str, **kwargs) -> Scheduler:
    cls = SCHEDULER_REGISTRY.get(name.lower())
    if cls is None:
        raise ValueError(f"Unknown scheduler '{name}'. Available: {', '.join(SCHEDULER_REGISTRY)}")
    return cls(**kwargs)
