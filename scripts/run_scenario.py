"""CLI for running offline elevator bank scenarios defined in JSON configs."""
from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from elevbank import Simulation, SimulationConfig


def build_simulation(config: Dict) -> Simulation:
    building_cfg = config.get("building", {})
    scheduler_cfg = config.get("scheduler", {})

    sim_config = SimulationConfig(
        floor_count=building_cfg.get("floor_count", 4),
        elevator_count=building_cfg.get("elevator_count", 1),
        capacity=building_cfg.get("capacity", 2),
        start_floor=building_cfg.get("start_floor", 0),
        min_open_ticks=building_cfg.get("min_open_ticks", 1),
        max_open_ticks=building_cfg.get("max_open_ticks", 3),
        spawn_probability=config.get("spawn_probability", 0.3),
        scheduler_name=scheduler_cfg.get("name", "on_the_way"),
    )
    return Simulation.from_config(
        sim_config,
        random_seed=config.get("random_seed"),
        metrics_hook_interval=config.get("metrics_hook_interval", 10),
    )


def _add_scripted_passengers(
    simulation: Simulation, passengers: Iterable[Dict], current_time: int
) -> None:
    for entry in passengers:
        if entry.get("time", 0) == current_time:
            simulation.add_passenger(entry["origin"], entry["destination"])


def run_simulation(simulation: Simulation, config: Dict) -> List[Dict]:
    duration = config.get("duration", 300)
    scripted = config.get("passengers", [])
    snapshots: List[Dict] = []

    for _ in range(duration):
        _add_scripted_passengers(simulation, scripted, simulation.current_time)
        simulation.step()
        if simulation.current_time % simulation.metrics_hook_interval == 0:
            metrics = asdict(simulation.metrics.snapshot(simulation.current_time))
            snapshots.append(metrics)
    return snapshots


def save_results(output_path: Optional[Path], data: Dict) -> None:
    if not output_path:
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2))


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("config", type=Path, help="Path to a JSON scenario configuration file")
    parser.add_argument(
        "--output",
        type=Path,
        help="Optional file path to write metrics snapshots as JSON",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Verbosity of the simulation log",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    config = json.loads(args.config.read_text())
    simulation = build_simulation(config)
    snapshots = run_simulation(simulation, config)

    final_metrics = asdict(simulation.metrics.snapshot(simulation.current_time))
    results = {
        "scenario": config.get("name", args.config.stem),
        "description": config.get("description"),
        "duration": config.get("duration", 300),
        "scheduler": simulation.building.scheduler_name,
        "still_waiting": len(simulation.waiting_passengers()),
        "final_metrics": final_metrics,
        "final_state": simulation.building.snapshot(),
        "metrics_over_time": snapshots,
    }

    save_results(args.output, results)

    print(f"Scenario: {results['scenario']}")
    if results["description"]:
        print(results["description"])
    print(f"Scheduler: {results['scheduler']}")
    print(f"Duration: {results['duration']} ticks")
    print(f"Still waiting: {results['still_waiting']}")
    print("Final metrics:")
    for key, value in final_metrics.items():
        print(f"  {key}: {value}")
    if args.output:
        print(f"Saved metrics to {args.output}")


if __name__ == "__main__":
    main()
