"""Simulation primitives for a tick-driven elevator bank."""

from .building import Building
from .config import SimulationConfig
from .elevator import Elevator, ElevatorView, Exchange
from .metrics import MetricsSnapshot, MetricsTracker
from .passenger import Passenger
from .random_source import RandomSource, SeededRandomSource
from .simulation import Simulation
from .states import (
    CabinState,
    DoorState,
    Entering,
    Exiting,
    Holding,
    Idle,
    InCabin,
    Moving,
    PassengerState,
    Standing,
)

__all__ = [
    "Building",
    "CabinState",
    "DoorState",
    "Elevator",
    "ElevatorView",
    "Entering",
    "Exchange",
    "Exiting",
    "Holding",
    "Idle",
    "InCabin",
    "MetricsSnapshot",
    "MetricsTracker",
    "Moving",
    "Passenger",
    "PassengerState",
    "RandomSource",
    "SeededRandomSource",
    "Simulation",
    "SimulationConfig",
    "Standing",
]
