"""CLI for running offline LiftFleet scenarios defined in JSON configs."""
from __future__ import annotations

import argparse
import json
import logging
from collections import defaultdict
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from simulation import FleetConfig, FleetError, Simulation

logger = logging.getLogger("run_scenario")


class TickDeferral:
    """Runs deferred callbacks on simulated time instead of wall-clock timers.

    Delays are measured in seconds and converted with the configured tick
    interval; a callback fires once that many ticks have elapsed.
    """

    def __init__(self, tick_interval: float) -> None:
        self.tick_interval = tick_interval
        self.current_time = 0
        self._pending: Dict[int, List[Callable[[], None]]] = defaultdict(list)

    def __call__(self, delay: float, callback: Callable[[], None]) -> None:
        ticks = max(1, round(delay / self.tick_interval))
        self._pending[self.current_time + ticks].append(callback)

    def advance(self, current_time: int) -> None:
        self.current_time = current_time
        for due in sorted(t for t in self._pending if t <= current_time):
            for callback in self._pending.pop(due):
                callback()


def build_simulation(config: Dict) -> Tuple[Simulation, TickDeferral]:
    fleet_config = FleetConfig.from_dict(
        {"random_seed": config.get("random_seed"), **config.get("building", {})}
    )
    deferral = TickDeferral(fleet_config.tick_interval)
    return Simulation(fleet_config, defer=deferral), deferral


def _apply_scheduled_events(simulation: Simulation, config: Dict, current_time: int) -> None:
    for call in config.get("calls", []):
        if call.get("time") != current_time:
            continue
        try:
            simulation.submit_call(call["floor"], call["direction"])
        except FleetError as exc:
            logger.warning("Skipping call at t=%s: %s", current_time, exc)

    for override in config.get("overrides", []):
        if override.get("time") != current_time:
            continue
        try:
            simulation.send_to_floor(override["elevator_id"], override["floor"])
        except FleetError as exc:
            logger.warning("Skipping override at t=%s: %s", current_time, exc)

    for _ in range(config.get("random_calls", []).count(current_time)):
        simulation.random_call()


def run_simulation(simulation: Simulation, deferral: TickDeferral, config: Dict) -> List[Dict]:
    duration = config.get("duration", 60)
    snapshots: List[Dict] = []

    for _ in range(duration):
        _apply_scheduled_events(simulation, config, simulation.current_time)
        simulation.tick()
        deferral.advance(simulation.current_time)
        snapshots.append(simulation.snapshot())
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
        help="Optional file path to write per-tick fleet snapshots as JSON",
    )
    parser.add_argument("--verbose", action="store_true", help="Log every move, boarding and alighting")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = json.loads(args.config.read_text())
    simulation, deferral = build_simulation(config)
    assigned: List[object] = []
    dropped: List[object] = []
    simulation.on_event("unassigned", dropped.append)
    simulation.on_event("assigned", assigned.append)
    snapshots = run_simulation(simulation, deferral, config)

    final_state = simulation.snapshot()
    results = {
        "scenario": config.get("name", args.config.stem),
        "description": config.get("description"),
        "duration": config.get("duration", 60),
        "assigned_calls": len(assigned),
        "dropped_calls": len(dropped),
        "final_state": final_state,
        "snapshots": snapshots,
    }

    save_results(args.output, results)

    print(f"Scenario: {results['scenario']}")
    if results["description"]:
        print(results["description"])
    print(f"Duration: {results['duration']} ticks")
    print(f"Calls assigned: {results['assigned_calls']}, dropped: {results['dropped_calls']}")
    print("Final fleet:")
    for elevator in final_state["elevators"]:
        print(
            f"  #{elevator['id']}: floor {elevator['current_floor']} "
            f"target {elevator['target_floor']} {elevator['status']} "
            f"riders {elevator['passenger_count']} waiting {len(elevator['pending_pickups'])}"
        )
    if args.output:
        print(f"Saved snapshots to {args.output}")


if __name__ == "__main__":
    main()
