from typing import Optional

import pytest

from scheduler import (
    AvailableTier,
    CallRequest,
    DetourTier,
    Direction,
    ElevatorSnapshot,
    ElevatorStatus,
    LastResortTier,
    OnRouteTier,
    Score,
    TieredScheduler,
    default_tiers,
    score_elevator,
)


def snap(
    elevator_id: int = 0,
    current_floor: int = 1,
    target_floor: Optional[int] = None,
    direction: Direction = Direction.IDLE,
    status: ElevatorStatus = ElevatorStatus.STOPPED,
    load: int = 0,
    capacity: int = 8,
) -> ElevatorSnapshot:
    return ElevatorSnapshot(
        elevator_id=elevator_id,
        current_floor=current_floor,
        target_floor=target_floor,
        direction=direction,
        status=status,
        load=load,
        capacity=capacity,
    )


UP_AT_5 = CallRequest(floor=5, direction=Direction.UP)


class TestOnRouteTier:
    def test_moving_up_past_pickup(self):
        car = snap(current_floor=2, target_floor=8, direction=Direction.UP, status=ElevatorStatus.MOVING)
        assert OnRouteTier().evaluate(car, UP_AT_5) == 3

    def test_target_equal_to_pickup_counts(self):
        car = snap(current_floor=2, target_floor=5, direction=Direction.UP, status=ElevatorStatus.MOVING)
        assert OnRouteTier().evaluate(car, UP_AT_5) == 3

    def test_already_past_pickup(self):
        car = snap(current_floor=6, target_floor=9, direction=Direction.UP, status=ElevatorStatus.MOVING)
        assert OnRouteTier().evaluate(car, UP_AT_5) is None

    def test_opposite_direction(self):
        car = snap(current_floor=8, target_floor=2, direction=Direction.DOWN, status=ElevatorStatus.MOVING)
        assert OnRouteTier().evaluate(car, UP_AT_5) is None

    def test_moving_down_towards_down_call(self):
        car = snap(current_floor=9, target_floor=3, direction=Direction.DOWN, status=ElevatorStatus.MOVING)
        assert OnRouteTier().evaluate(car, CallRequest(5, Direction.DOWN)) == 4

    def test_not_moving(self):
        car = snap(current_floor=2, target_floor=8, direction=Direction.UP, status=ElevatorStatus.LOADING)
        assert OnRouteTier().evaluate(car, UP_AT_5) is None


class TestAvailableTier:
    def test_no_target(self):
        assert AvailableTier().evaluate(snap(current_floor=9), UP_AT_5) == 4

    def test_with_target(self):
        assert AvailableTier().evaluate(snap(target_floor=3), UP_AT_5) is None


class TestDetourTier:
    def test_pickup_on_the_way(self):
        car = snap(current_floor=3, target_floor=7, status=ElevatorStatus.LOADING)
        assert DetourTier().evaluate(car, UP_AT_5) == 0

    def test_detour_within_limit(self):
        # 4 -> 6 -> 5 travels 3 floors instead of 1; 4 -> 7 -> 5 travels 5
        car = snap(current_floor=4, target_floor=5, status=ElevatorStatus.STOPPED)
        assert DetourTier().evaluate(car, CallRequest(6, Direction.UP)) == 2
        assert DetourTier().evaluate(car, CallRequest(7, Direction.UP)) is None

    def test_threshold_is_inclusive(self):
        car = snap(current_floor=4, target_floor=6, status=ElevatorStatus.STOPPED)
        # 4 -> 2 -> 6 travels 6 instead of 2
        assert DetourTier(max_detour=4).evaluate(car, CallRequest(2, Direction.UP)) == 4
        assert DetourTier(max_detour=3).evaluate(car, CallRequest(2, Direction.UP)) is None

    def test_moving_car_is_skipped(self):
        car = snap(current_floor=3, target_floor=7, status=ElevatorStatus.MOVING, direction=Direction.UP)
        assert DetourTier().evaluate(car, UP_AT_5) is None


class TestLastResortTier:
    def test_penalised_distance(self):
        assert LastResortTier().evaluate(snap(current_floor=9, load=5), UP_AT_5) == 14

    def test_crowded_car(self):
        assert LastResortTier().evaluate(snap(load=6), UP_AT_5) is None


def test_first_matching_tier_wins():
    # idle car also passes the detour tier, but only the higher tier scores it
    assert score_elevator(snap(current_floor=4), UP_AT_5, default_tiers()) == Score(90, 1)


def test_unscorable_car():
    car = snap(current_floor=10, target_floor=1, status=ElevatorStatus.MOVING, direction=Direction.DOWN, load=7)
    assert score_elevator(car, UP_AT_5, default_tiers()) is None


class TestTieredScheduler:
    def test_idle_beats_detour_and_last_resort(self):
        fleet = [
            snap(elevator_id=0, current_floor=5, target_floor=6, status=ElevatorStatus.LOADING),
            snap(elevator_id=1, current_floor=10, target_floor=1, status=ElevatorStatus.MOVING,
                 direction=Direction.DOWN),
            snap(elevator_id=2, current_floor=1),
        ]
        assignment = TieredScheduler().select_elevator(fleet, UP_AT_5)
        assert assignment.elevator_id == 2
        assert assignment.score == Score(90, 4)

    def test_lower_cost_breaks_priority_tie(self):
        fleet = [snap(elevator_id=0, current_floor=1), snap(elevator_id=1, current_floor=6)]
        assert TieredScheduler().select_elevator(fleet, UP_AT_5).elevator_id == 1

    def test_first_in_order_breaks_full_tie(self):
        fleet = [snap(elevator_id=3, current_floor=3), snap(elevator_id=1, current_floor=7)]
        assert TieredScheduler().select_elevator(fleet, UP_AT_5).elevator_id == 3

    def test_full_car_is_never_selected(self):
        fleet = [snap(elevator_id=0, current_floor=5, load=8)]
        assert TieredScheduler().select_elevator(fleet, UP_AT_5) is None

    def test_full_car_skipped_in_favour_of_worse_car(self):
        fleet = [
            snap(elevator_id=0, current_floor=5, load=8),
            snap(elevator_id=1, current_floor=10, target_floor=9, status=ElevatorStatus.MOVING,
                 direction=Direction.DOWN, load=2),
        ]
        assignment = TieredScheduler().select_elevator(fleet, UP_AT_5)
        assert assignment.elevator_id == 1
        assert assignment.score == Score(50, 15)

    def test_selection_is_deterministic(self):
        fleet = [
            snap(elevator_id=i, current_floor=floor, target_floor=target, status=status)
            for i, (floor, target, status) in enumerate(
                [(2, 9, ElevatorStatus.LOADING), (8, None, ElevatorStatus.STOPPED), (2, None, ElevatorStatus.STOPPED)]
            )
        ]
        scheduler = TieredScheduler()
        results = {scheduler.select_elevator(fleet, UP_AT_5) for _ in range(20)}
        assert len(results) == 1

    @pytest.mark.parametrize("load", [0, 5])
    def test_custom_tiers(self, load):
        scheduler = TieredScheduler([LastResortTier(max_load=6, penalty=0)])
        assignment = scheduler.select_elevator([snap(current_floor=2, load=load)], UP_AT_5)
        assert assignment.score == Score(50, 3)
