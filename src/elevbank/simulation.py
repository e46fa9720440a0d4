from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from .building import Building
from .config import SimulationConfig
from .elevator import Elevator, ElevatorView, Exchange
from .metrics import MetricsTracker
from .passenger import Passenger
from .random_source import RandomSource, SeededRandomSource

logger = logging.getLogger(__name__)


class Simulation:
    """Tick-driven elevator bank simulation for analytics and UI consumption.

    One :meth:`step` advances every elevator, then dispatches waiting
    passengers, then possibly spawns a new passenger. Every random decision
    goes through a :class:`RandomSource`, so a seeded or scripted source
    replays a run exactly.
    """

    def __init__(
        self,
        building: Building,
        spawn_probability: float = 0.3,
        random_source: Optional[RandomSource] = None,
        random_seed: Optional[int] = None,
        metrics_hook_interval: int = 1,
    ) -> None:
        if not 0.0 <= spawn_probability <= 1.0:
            raise ValueError(f"spawn_probability must be within [0, 1], got {spawn_probability}")
        if random_source is not None and random_seed is not None:
            raise ValueError("Pass either random_source or random_seed, not both")
        self.building = building
        self.spawn_probability = spawn_probability
        self.random_source: RandomSource = (
            SeededRandomSource(random_seed) if random_source is None else random_source
        )
        self.current_time: int = 0
        self.metrics = MetricsTracker()
        self.event_hooks: Dict[str, List[Callable[[object], None]]] = {}
        self.metrics_hook_interval = max(1, metrics_hook_interval)
        self._next_passenger_id = 0

    @classmethod
    def configure(
        cls,
        floor_count: int,
        elevator_count: int,
        capacity: int,
        **options,
    ) -> "Simulation":
        """Build a simulation from the building shape plus optional settings.

        ``options`` accepts the remaining :class:`SimulationConfig` fields and
        the ``random_source``, ``random_seed`` and ``metrics_hook_interval``
        keywords of the constructor.
        """
        sim_options = {
            key: options.pop(key)
            for key in ("random_source", "random_seed", "metrics_hook_interval")
            if key in options
        }
        config = SimulationConfig(
            floor_count=floor_count,
            elevator_count=elevator_count,
            capacity=capacity,
            **options,
        )
        return cls.from_config(config, **sim_options)

    @classmethod
    def from_config(cls, config: SimulationConfig, **kwargs) -> "Simulation":
        elevators = [
            Elevator(
                elevator_id=i,
                capacity=config.capacity,
                start_floor=config.start_floor,
                min_open_ticks=config.min_open_ticks,
                max_open_ticks=config.max_open_ticks,
            )
            for i in range(config.elevator_count)
        ]
        building = Building(
            num_floors=config.floor_count,
            elevators=elevators,
            scheduler_name=config.scheduler_name,
        )
        return cls(building=building, spawn_probability=config.spawn_probability, **kwargs)

    @property
    def elevators(self) -> List[Elevator]:
        return self.building.elevators

    @property
    def passengers(self) -> List[Passenger]:
        return self.building.passengers

    def run(self, duration: int, random_source: Optional[RandomSource] = None) -> None:
        for _ in range(duration):
            self.step(random_source)

    def step(self, random_source: Optional[RandomSource] = None) -> None:
        source = self.random_source if random_source is None else random_source
        for elevator in self.building.elevators:
            exchange = elevator.advance(self.building, self.current_time, self.metrics)
            if exchange is not None:
                self._emit_exchange(exchange)

        self.building.dispatch(self.current_time)
        self._maybe_spawn_passenger(source)

        if self.current_time % self.metrics_hook_interval == 0:
            self._emit_metrics()

        self.current_time += 1

    def on_event(self, event: str, callback: Callable[[object], None]) -> None:
        self.event_hooks.setdefault(event, []).append(callback)

    def add_passenger(self, origin: int, destination: int) -> Passenger:
        passenger = Passenger(
            passenger_id=self._next_passenger_id,
            origin=origin,
            destination=destination,
            arrival_time=self.current_time,
        )
        self.building.add_passenger(passenger)
        self._next_passenger_id += 1
        logger.info(
            "t=%d passenger %d waiting at floor %d for floor %d",
            self.current_time,
            passenger.passenger_id,
            origin,
            destination,
        )
        self._emit("arrival", {"time": self.current_time, "passenger": passenger})
        return passenger

    def spawn_passenger_batch(
        self,
        origin: int,
        count: int,
        destination: Optional[int] = None,
        random_source: Optional[RandomSource] = None,
    ) -> List[int]:
        source = self.random_source if random_source is None else random_source
        spawned: List[int] = []
        for _ in range(count):
            target = destination
            if target is None:
                target = source.choose_destination(self.building.num_floors, origin)
            spawned.append(self.add_passenger(origin, target).passenger_id)
        return spawned

    def waiting_passengers(self) -> List[Passenger]:
        return self.building.waiting_passengers()

    def elevator_views(self) -> List[ElevatorView]:
        return [elevator.view() for elevator in self.building.elevators]

    def _maybe_spawn_passenger(self, source: RandomSource) -> None:
        if not source.should_spawn(self.spawn_probability):
            return
        num_floors = self.building.num_floors
        origin = source.choose_origin(num_floors)
        destination = source.choose_destination(num_floors, origin)
        self.add_passenger(origin, destination)

    def _emit_exchange(self, exchange: Exchange) -> None:
        for passenger in exchange.alighted:
            self._emit(
                "alight",
                {"time": self.current_time, "elevator_id": exchange.elevator_id, "passenger": passenger},
            )
        for passenger in exchange.boarded:
            self._emit(
                "board",
                {"time": self.current_time, "elevator_id": exchange.elevator_id, "passenger": passenger},
            )

    def _emit_metrics(self) -> None:
        snapshot = self.metrics.snapshot(self.current_time)
        self._emit("metrics", {"metrics": snapshot, "building": self.building.snapshot()})

    def _emit(self, event: str, payload: object) -> None:
        for callback in self.event_hooks.get(event, []):
            callback(payload)
