from __future__ import annotations

import random
from typing import Callable, Dict, List, Optional, Union

from scheduler import Direction, TieredScheduler

from .config import FleetConfig
from .dispatch import CallResult, Deferral, DispatchPlanner, start_timer
from .elevator import Elevator
from .motion import MotionScheduler
from .passenger import FloorRequest
from .store import FleetStore


class Simulation:
    """Time-stepped elevator fleet for the API and offline scenarios."""

    def __init__(
        self,
        config: Optional[FleetConfig] = None,
        store: Optional[FleetStore] = None,
        scheduler: Optional[TieredScheduler] = None,
        defer: Deferral = start_timer,
    ) -> None:
        self.config = config or FleetConfig()
        self.config.validate()
        self.store = store or FleetStore.from_config(self.config)
        self.random = random.Random(self.config.random_seed)
        self.event_hooks: Dict[str, List[Callable[[object], None]]] = {}
        self.planner = DispatchPlanner(
            self.store,
            self.config,
            scheduler=scheduler,
            rng=self.random,
            defer=defer,
            emit=self._emit,
        )
        self.motion = MotionScheduler(self.store)
        self.current_time: int = 0

    def list_elevators(self) -> List[Elevator]:
        return self.store.list_elevators()

    def get_elevator(self, elevator_id: int) -> Optional[Elevator]:
        return self.store.get_elevator(elevator_id)

    def list_floor_requests(self) -> List[FloorRequest]:
        return self.store.list_floor_requests()

    def submit_call(self, floor: int, direction: Union[str, Direction]) -> CallResult:
        return self.planner.submit_call(floor, direction)

    def send_to_floor(self, elevator_id: int, floor: int) -> Elevator:
        return self.planner.send_to_floor(elevator_id, floor)

    def random_call(self) -> CallResult:
        return self.planner.random_call()

    def run(self, duration: int) -> None:
        for _ in range(duration):
            self.tick()

    def tick(self) -> None:
        self.motion.tick()
        self.current_time += 1
        self._emit("tick", {"time": self.current_time})

    def on_event(self, event: str, callback: Callable[[object], None]) -> None:
        self.event_hooks.setdefault(event, []).append(callback)

    def snapshot(self) -> dict:
        return {
            "time": self.current_time,
            "num_floors": self.config.num_floors,
            "elevators": [elevator.to_dict() for elevator in self.list_elevators()],
            "floor_requests": [request.to_dict() for request in self.list_floor_requests()],
        }

    def _emit(self, event: str, payload: object) -> None:
        for callback in self.event_hooks.get(event, []):
            callback(payload)
