from __future__ import annotations

from typing import List, Optional, Sequence

from .interface import CallRequest, ElevatorSnapshot, Score, ScoringRule
from .utils import detour_cost, floor_distance, lies_ahead


class OnRouteTier:
    """Car already travelling the call's way and due to pass the pickup floor."""

    priority = 100

    def evaluate(self, elevator: ElevatorSnapshot, call: CallRequest) -> Optional[int]:
        if not elevator.is_moving or elevator.direction != call.direction:
            return None
        if not lies_ahead(elevator.current_floor, elevator.target_floor, call.floor, call.direction):
            return None
        return floor_distance(elevator.current_floor, call.floor)


class AvailableTier:
    """Car with nothing to do."""

    priority = 90

    def evaluate(self, elevator: ElevatorSnapshot, call: CallRequest) -> Optional[int]:
        if elevator.target_floor is not None:
            return None
        return floor_distance(elevator.current_floor, call.floor)


class DetourTier:
    """Halted car that can fit the pickup in with a short detour."""

    priority = 70

    def __init__(self, max_detour: int = 3) -> None:
        self.max_detour = max_detour

    def evaluate(self, elevator: ElevatorSnapshot, call: CallRequest) -> Optional[int]:
        if elevator.is_moving:
            return None
        detour = detour_cost(elevator.current_floor, call.floor, elevator.target_floor)
        if detour > self.max_detour:
            return None
        return detour


class LastResortTier:
    """Any car that is not too crowded, with a flat distance penalty."""

    priority = 50

    def __init__(self, max_load: int = 6, penalty: int = 10) -> None:
        self.max_load = max_load
        self.penalty = penalty

    def evaluate(self, elevator: ElevatorSnapshot, call: CallRequest) -> Optional[int]:
        if elevator.load >= self.max_load:
            return None
        return floor_distance(elevator.current_floor, call.floor) + self.penalty


def default_tiers(max_detour: int = 3, max_load: int = 6) -> List[ScoringRule]:
    return [OnRouteTier(), AvailableTier(), DetourTier(max_detour), LastResortTier(max_load)]


def score_elevator(
    elevator: ElevatorSnapshot, call: CallRequest, tiers: Sequence[ScoringRule]
) -> Optional[Score]:
    """Score ``elevator`` with the first tier that accepts it, in order."""

    for tier in tiers:
        cost = tier.evaluate(elevator, call)
        if cost is not None:
            return Score(priority=tier.priority, cost=cost)
    return None
