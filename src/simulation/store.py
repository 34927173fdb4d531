from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Dict, Iterable, Iterator, List, Optional

from scheduler import Direction

from .config import FleetConfig
from .elevator import Elevator
from .passenger import FloorRequest


class FleetStore:
    """In-memory fleet registry.

    Every operation runs under one re-entrant lock and hands out copies, so
    a reader never sees a record that a concurrent writer is halfway through.
    Callers that read, modify and write back a record wrap the sequence in
    :meth:`transaction`.
    """

    def __init__(self, elevators: Iterable[Elevator] = (), first_passenger_id: int = 1) -> None:
        self._elevators: Dict[int, Elevator] = {e.elevator_id: e.clone() for e in elevators}
        self._floor_requests: List[FloorRequest] = []
        self._next_passenger_id = first_passenger_id
        self._lock = threading.RLock()

    @classmethod
    def from_config(cls, config: FleetConfig) -> "FleetStore":
        return cls(Elevator(i, current_floor=1, capacity=config.capacity) for i in range(config.elevator_count))

    @contextmanager
    def transaction(self) -> Iterator["FleetStore"]:
        with self._lock:
            yield self

    def elevator_ids(self) -> List[int]:
        with self._lock:
            return list(self._elevators)

    def list_elevators(self) -> List[Elevator]:
        with self._lock:
            return [elevator.clone() for elevator in self._elevators.values()]

    def get_elevator(self, elevator_id: int) -> Optional[Elevator]:
        with self._lock:
            elevator = self._elevators.get(elevator_id)
            return elevator.clone() if elevator is not None else None

    def update_elevator(self, elevator: Elevator) -> bool:
        with self._lock:
            if elevator.elevator_id not in self._elevators:
                return False
            self._elevators[elevator.elevator_id] = elevator.clone()
            return True

    def next_passenger_id(self) -> int:
        with self._lock:
            return self._next_passenger_id

    def increment_passenger_id(self) -> None:
        with self._lock:
            self._next_passenger_id += 1

    def allocate_passenger_id(self) -> int:
        with self._lock:
            passenger_id = self.next_passenger_id()
            self.increment_passenger_id()
            return passenger_id

    def list_floor_requests(self) -> List[FloorRequest]:
        with self._lock:
            return list(self._floor_requests)

    def add_floor_request(self, request: FloorRequest) -> None:
        with self._lock:
            self._floor_requests.append(request)

    def remove_floor_request(self, floor: int, direction: Direction) -> None:
        with self._lock:
            for index, request in enumerate(self._floor_requests):
                if request.floor == floor and request.direction == direction:
                    del self._floor_requests[index]
                    return
