from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    IDLE = "idle"


class ElevatorStatus(str, Enum):
    MOVING = "moving"
    STOPPED = "stopped"
    LOADING = "loading"


@dataclass(frozen=True)
class ElevatorSnapshot:
    """Lightweight view of an elevator for dispatch decisions."""

    elevator_id: int
    current_floor: int
    target_floor: Optional[int]
    direction: Direction
    status: ElevatorStatus
    load: int
    capacity: int

    @property
    def available_capacity(self) -> int:
        return max(0, self.capacity - self.load)

    @property
    def is_moving(self) -> bool:
        return self.status == ElevatorStatus.MOVING


@dataclass(frozen=True)
class CallRequest:
    """A hall call as seen by the scheduler."""

    floor: int
    direction: Direction


@dataclass(frozen=True)
class Score:
    priority: int
    cost: int


@dataclass(frozen=True)
class Assignment:
    """The elevator chosen for a call and the score that won it."""

    elevator_id: int
    score: Score


class ScoringRule(Protocol):
    """One tier of the dispatch heuristic.

    ``evaluate`` returns the cost of serving the call with this elevator,
    or ``None`` when the tier does not apply to it.
    """

    priority: int

    def evaluate(self, elevator: ElevatorSnapshot, call: CallRequest) -> Optional[int]:
        ...
