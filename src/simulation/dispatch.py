from __future__ import annotations

import logging
import random
import threading
from dataclasses import dataclass
from typing import Callable, List, Optional, Union

from scheduler import CallRequest, Direction, Score, TieredScheduler, default_tiers, next_target

from .config import FleetConfig
from .elevator import Elevator
from .errors import ElevatorNotFound, InvalidDirection, InvalidFloor
from .passenger import FloorRequest, Passenger
from .store import FleetStore

logger = logging.getLogger(__name__)

Deferral = Callable[[float, Callable[[], None]], None]
EventSink = Callable[[str, object], None]


def start_timer(delay: float, callback: Callable[[], None]) -> None:
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()


@dataclass(frozen=True)
class CallResult:
    passenger: Passenger
    elevator_id: Optional[int] = None
    score: Optional[Score] = None

    @property
    def assigned(self) -> bool:
        return self.elevator_id is not None

    def to_dict(self) -> dict:
        return {
            "passenger": self.passenger.to_dict(),
            "assigned": self.assigned,
            "elevator_id": self.elevator_id,
            "priority": self.score.priority if self.score else None,
            "cost": self.score.cost if self.score else None,
        }


class DispatchPlanner:
    """Turns hall calls and manual overrides into changes to the fleet."""

    def __init__(
        self,
        store: FleetStore,
        config: FleetConfig,
        scheduler: Optional[TieredScheduler] = None,
        rng: Optional[random.Random] = None,
        defer: Deferral = start_timer,
        emit: Optional[EventSink] = None,
    ) -> None:
        self.store = store
        self.config = config
        self.scheduler = scheduler or TieredScheduler(
            default_tiers(max_detour=config.max_detour, max_load=config.last_resort_max_load)
        )
        self.random = rng or random.Random(config.random_seed)
        self.defer = defer
        self.emit = emit

    def submit_call(self, floor: int, direction: Union[str, Direction]) -> CallResult:
        self._validate_floor(floor)
        call_direction = self._parse_direction(direction)
        logger.info("Processing elevator call: floor %s, direction %s", floor, call_direction.value)

        target = self.generate_target_floor(floor, call_direction)
        passenger = Passenger(
            passenger_id=self.store.allocate_passenger_id(),
            pickup_floor=floor,
            target_floor=target,
        )
        logger.info("Created passenger %s: floor %s -> %s", passenger.passenger_id, floor, target)

        try:
            result = self._assign(passenger, CallRequest(floor=floor, direction=call_direction))
        finally:
            self._register_floor_request(FloorRequest(floor=floor, direction=call_direction))
        return result

    def send_to_floor(self, elevator_id: int, floor: int) -> Elevator:
        self._validate_floor(floor)
        with self.store.transaction():
            elevator = self.store.get_elevator(elevator_id)
            if elevator is None:
                raise ElevatorNotFound(elevator_id)
            # Riders bound for the override floor are dropped, not the ones the reroute strands.
            dropped = elevator.remove_passengers_by_destination(floor)
            elevator.target_floor = floor
            self.store.update_elevator(elevator)
        logger.info(
            "Manual override: elevator %s sent to floor %s (%d passengers removed)",
            elevator_id,
            floor,
            len(dropped),
        )
        self._emit("override", {"elevator_id": elevator_id, "floor": floor, "removed": len(dropped)})
        return elevator

    def random_call(self) -> CallResult:
        floor = self.random.randint(1, self.config.num_floors)
        directions: List[Direction] = []
        if floor < self.config.num_floors:
            directions.append(Direction.UP)
        if floor > 1:
            directions.append(Direction.DOWN)
        return self.submit_call(floor, self.random.choice(directions))

    def generate_target_floor(self, floor: int, direction: Direction) -> int:
        if direction == Direction.UP:
            possible_floors = list(range(floor + 1, self.config.num_floors + 1))
        else:
            possible_floors = list(range(1, floor))
        if not possible_floors:
            possible_floors = [f for f in range(1, self.config.num_floors + 1) if f != floor]
        return self.random.choice(possible_floors)

    def _assign(self, passenger: Passenger, call: CallRequest) -> CallResult:
        with self.store.transaction():
            elevators = sorted(self.store.list_elevators(), key=lambda e: e.elevator_id)
            assignment = self.scheduler.select_elevator([e.snapshot() for e in elevators], call)
            if assignment is not None:
                elevator = next(e for e in elevators if e.elevator_id == assignment.elevator_id)
                elevator.add_pending_passenger(passenger)
                elevator.target_floor = next_target(elevator.current_floor, elevator.direction, elevator.stops())
                self.store.update_elevator(elevator)

        # Event hooks run outside the store lock.
        if assignment is None:
            logger.warning("No suitable elevator found for passenger %s", passenger.passenger_id)
            self._emit("unassigned", {"passenger": passenger, "call": call})
            return CallResult(passenger=passenger)

        logger.info(
            "Assigned passenger %s to elevator %s (priority %s, cost %s); new target %s",
            passenger.passenger_id,
            elevator.elevator_id,
            assignment.score.priority,
            assignment.score.cost,
            elevator.target_floor,
        )
        self._emit("assigned", {"passenger": passenger, "elevator_id": elevator.elevator_id, "score": assignment.score})
        return CallResult(passenger=passenger, elevator_id=elevator.elevator_id, score=assignment.score)

    def _register_floor_request(self, request: FloorRequest) -> None:
        self.store.add_floor_request(request)
        self.defer(
            self.config.floor_request_ttl,
            lambda: self.store.remove_floor_request(request.floor, request.direction),
        )

    def _validate_floor(self, floor: int) -> None:
        if isinstance(floor, bool) or not isinstance(floor, int) or not 1 <= floor <= self.config.num_floors:
            raise InvalidFloor(floor, self.config.num_floors)

    @staticmethod
    def _parse_direction(direction: Union[str, Direction]) -> Direction:
        try:
            parsed = Direction(direction)
        except ValueError:
            raise InvalidDirection(direction) from None
        if parsed == Direction.IDLE:
            raise InvalidDirection(direction)
        return parsed

    def _emit(self, event: str, payload: object) -> None:
        if self.emit is not None:
            self.emit(event, payload)
