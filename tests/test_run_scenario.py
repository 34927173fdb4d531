import json
from pathlib import Path

import run_scenario

SCENARIO = Path(__file__).resolve().parent.parent / "scripts" / "scenarios" / "lobby_rush.json"


def test_tick_deferral_fires_on_simulated_time():
    deferral = run_scenario.TickDeferral(tick_interval=0.5)
    fired = []
    deferral(1.0, lambda: fired.append("a"))
    deferral(0.1, lambda: fired.append("b"))

    deferral.advance(1)
    assert fired == ["b"]
    deferral.advance(2)
    assert fired == ["b", "a"]
    deferral.advance(3)
    assert fired == ["b", "a"]


def test_floor_requests_expire_during_a_run():
    config = {
        "building": {"num_floors": 6, "elevator_count": 2},
        "duration": 3,
        "calls": [{"time": 0, "floor": 3, "direction": "up"}],
    }
    simulation, deferral = run_scenario.build_simulation(config)
    snapshots = run_scenario.run_simulation(simulation, deferral, config)
    assert len(snapshots) == 3
    assert snapshots[-1]["floor_requests"] == []
    assert simulation.config.num_floors == 6


def test_bad_events_are_skipped():
    config = {
        "duration": 2,
        "calls": [{"time": 0, "floor": 40, "direction": "up"}],
        "overrides": [{"time": 1, "elevator_id": 12, "floor": 3}],
    }
    simulation, deferral = run_scenario.build_simulation(config)
    run_scenario.run_simulation(simulation, deferral, config)
    assert simulation.current_time == 2
    assert all(e.target_floor is None for e in simulation.list_elevators())


def test_bundled_scenario_is_repeatable():
    config = json.loads(SCENARIO.read_text())
    first = run_scenario.run_simulation(*run_scenario.build_simulation(config), config)
    second = run_scenario.run_simulation(*run_scenario.build_simulation(config), config)
    assert first == second
    assert len(first) == config["duration"]
    assert all(
        elevator["passenger_count"] <= elevator["capacity"]
        for snapshot in first
        for elevator in snapshot["elevators"]
    )
