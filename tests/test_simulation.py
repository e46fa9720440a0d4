from __future__ import annotations

import pytest

from elevbank import (
    Building,
    DoorState,
    Elevator,
    Holding,
    InCabin,
    Moving,
    Passenger,
    SeededRandomSource,
    Simulation,
    SimulationConfig,
    Standing,
)


def _check_invariants(simulation: Simulation) -> None:
    num_floors = simulation.building.num_floors
    for elevator in simulation.elevators:
        state = elevator.cabin_state
        assert len(elevator.passengers) <= elevator.capacity
        assert len(elevator.targets) == len(set(elevator.targets))
        assert len({p.passenger_id for p in elevator.passengers}) == len(elevator.passengers)
        assert all(p.destination in elevator.targets for p in elevator.passengers)
        if isinstance(state, Moving):
            assert state.from_floor != state.to_floor
            assert 0 <= state.to_floor < num_floors
        assert 0 <= elevator.floor < num_floors
        if not isinstance(state, Holding):
            assert elevator.door_state is DoorState.CLOSED


class TestConfiguration:
    def test_configure_builds_elevators(self):
        simulation = Simulation.configure(6, 3, 4)
        assert simulation.building.num_floors == 6
        assert [e.elevator_id for e in simulation.elevators] == [0, 1, 2]
        assert all(e.capacity == 4 for e in simulation.elevators)
        assert all(e.cabin_state == Standing(0) for e in simulation.elevators)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"floor_count": 1},
            {"elevator_count": 0},
            {"capacity": 0},
            {"start_floor": 4},
            {"min_open_ticks": 0},
            {"min_open_ticks": 3, "max_open_ticks": 2},
            {"spawn_probability": 1.5},
        ],
    )
    def test_invalid_config_fails_fast(self, overrides):
        with pytest.raises(ValueError):
            SimulationConfig(**overrides)

    def test_unknown_scheduler_fails_fast(self):
        with pytest.raises(ValueError):
            Simulation.configure(4, 1, 2, scheduler_name="nope")

    def test_passenger_outside_building_is_rejected(self):
        simulation = Simulation.configure(4, 1, 2)
        with pytest.raises(ValueError):
            simulation.add_passenger(0, 4)
        with pytest.raises(ValueError):
            simulation.add_passenger(-1, 2)
        assert simulation.passengers == []

    def test_destination_must_differ_from_origin(self):
        simulation = Simulation.configure(4, 1, 2)
        with pytest.raises(ValueError):
            simulation.add_passenger(2, 2)

    def test_duplicate_passenger_id_is_rejected(self):
        building = Building(num_floors=4, elevators=[Elevator(0, capacity=1)])
        building.add_passenger(Passenger(passenger_id=3, origin=0, destination=1))
        with pytest.raises(ValueError):
            building.add_passenger(Passenger(passenger_id=3, origin=2, destination=1))

    def test_elevator_start_floor_outside_building_is_rejected(self):
        with pytest.raises(ValueError):
            Building(num_floors=4, elevators=[Elevator(0, capacity=1, start_floor=4)])

    def test_elevator_ids_must_follow_list_order(self):
        with pytest.raises(ValueError):
            Building(
                num_floors=4,
                elevators=[Elevator(1, capacity=2, start_floor=1), Elevator(0, capacity=2, start_floor=3)],
            )

    def test_seed_and_source_are_mutually_exclusive(self, never_spawn):
        with pytest.raises(ValueError):
            Simulation.configure(4, 1, 2, random_source=never_spawn, random_seed=3)


class TestSingleCarScenario:
    def test_rider_from_ground_to_top(self, never_spawn):
        simulation = Simulation.configure(4, 1, 2, random_source=never_spawn)
        elevator = simulation.elevators[0]
        rider = simulation.add_passenger(0, 3)

        simulation.run(3)
        assert elevator.cabin_state == Holding(0)
        assert elevator.door_state is DoorState.OPEN
        assert isinstance(rider.state, InCabin)
        assert rider in elevator.passengers
        assert 3 in elevator.view().destinations

        simulation.run(2)
        assert elevator.cabin_state == Standing(0)
        assert elevator.targets == [3]

        simulation.run(8)
        assert elevator.cabin_state == Holding(3)
        assert elevator.door_state is DoorState.OPEN
        assert rider not in simulation.passengers
        assert elevator.passengers == []

        simulation.run(2)
        assert elevator.cabin_state == Standing(3)
        assert elevator.door_state is DoorState.CLOSED
        assert elevator.targets == []
        assert rider.wait_time == 2
        assert rider.ride_time == 10

    def test_board_and_alight_events_fire(self, never_spawn):
        simulation = Simulation.configure(4, 1, 2, random_source=never_spawn)
        seen = []
        simulation.on_event("board", lambda payload: seen.append(("board", payload["time"])))
        simulation.on_event("alight", lambda payload: seen.append(("alight", payload["time"])))
        simulation.add_passenger(0, 3)

        simulation.run(15)

        assert seen == [("board", 2), ("alight", 12)]
        assert simulation.metrics.throughput == 1


class TestDispatchTie:
    def test_equidistant_cars_send_the_lower_index(self, never_spawn):
        building = Building(
            num_floors=4,
            elevators=[Elevator(0, capacity=2, start_floor=1), Elevator(1, capacity=2, start_floor=3)],
        )
        simulation = Simulation(building, random_source=never_spawn)
        simulation.add_passenger(2, 0)

        simulation.step()

        assert simulation.elevators[0].targets == [2]
        assert simulation.elevators[1].targets == []


class TestSpawning:
    def test_spawn_uses_injected_source(self, scripted_source):
        source = scripted_source(spawns=[True], origins=[2], destinations=[0])
        simulation = Simulation.configure(4, 1, 2, spawn_probability=0.2)

        simulation.step(source)

        waiting = simulation.waiting_passengers()
        assert [(p.passenger_id, p.origin, p.destination) for p in waiting] == [(0, 2, 0)]
        assert source.probabilities == [0.2]

    def test_ids_are_never_reused(self, scripted_source):
        source = scripted_source(spawns=[True, True], origins=[1, 1], destinations=[0, 0])
        simulation = Simulation.configure(4, 1, 4, random_source=source)

        simulation.run(40)
        simulation.add_passenger(3, 0)

        assert [p.passenger_id for p in simulation.passengers] == [2]

    def test_batch_spawn(self, never_spawn):
        simulation = Simulation.configure(5, 1, 2, random_source=never_spawn)
        assert simulation.spawn_passenger_batch(1, 3, destination=4) == [0, 1, 2]
        assert len(simulation.waiting_passengers()) == 3

    def test_same_seed_replays_the_same_run(self):
        runs = []
        for _ in range(2):
            simulation = Simulation.configure(8, 2, 3, spawn_probability=0.3, random_seed=99)
            simulation.run(120)
            runs.append((simulation.building.snapshot(), simulation.elevator_views()))
        assert runs[0] == runs[1]


class TestProperties:
    def test_invariants_hold_under_random_load(self):
        simulation = Simulation.configure(
            8, 3, 3, spawn_probability=0.3, random_source=SeededRandomSource(1234)
        )
        for _ in range(600):
            simulation.step()
            _check_invariants(simulation)

    def test_invariants_hold_with_single_seat_cars(self):
        simulation = Simulation.configure(
            6, 2, 1, spawn_probability=0.5, max_open_ticks=2, random_seed=7
        )
        for _ in range(600):
            simulation.step()
            _check_invariants(simulation)

    def test_everyone_arrives_once_spawning_stops(self, never_spawn):
        simulation = Simulation.configure(6, 2, 1, random_source=never_spawn)
        trips = [(0, 5), (5, 0), (3, 1), (2, 4), (4, 2), (1, 3), (0, 2), (5, 3)]
        for origin, destination in trips:
            simulation.add_passenger(origin, destination)

        for _ in range(400):
            simulation.step()
            _check_invariants(simulation)
            if not simulation.passengers:
                break

        assert simulation.passengers == []
        assert simulation.metrics.throughput == len(trips)

    def test_backlog_drains_after_random_load(self, never_spawn):
        simulation = Simulation.configure(
            10, 3, 2, spawn_probability=0.6, random_source=SeededRandomSource(5)
        )
        simulation.run(200)

        simulation.run(3000, random_source=never_spawn)

        assert simulation.passengers == []
