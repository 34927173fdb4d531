from __future__ import annotations

import logging
from typing import Optional

from scheduler import next_target

from .elevator import Elevator
from .store import FleetStore

logger = logging.getLogger(__name__)


class MotionScheduler:
    """Advances every car by one discrete step."""

    def __init__(self, store: FleetStore) -> None:
        self.store = store

    def tick(self) -> None:
        for elevator_id in self.store.elevator_ids():
            with self.store.transaction():
                elevator = self.store.get_elevator(elevator_id)
                if elevator is None:
                    continue
                self.step(elevator)
                self.store.update_elevator(elevator)

    def step(self, elevator: Elevator) -> None:
        """Apply one step to ``elevator`` in place."""

        if elevator.should_stop_here():
            boarded = elevator.board_passengers()
            alighted = elevator.alight_passengers()
            if boarded or alighted:
                logger.debug(
                    "Elevator %s at floor %s: %d boarded, %d alighted",
                    elevator.elevator_id,
                    elevator.current_floor,
                    len(boarded),
                    len(alighted),
                )
            elevator.target_floor = self._route(elevator)
            elevator.open_doors()
            return

        if elevator.target_floor is None or elevator.current_floor == elevator.target_floor:
            elevator.target_floor = self._route(elevator)
            if elevator.target_floor is None:
                elevator.stop()
            else:
                # Brief halt to pick up the new route.
                elevator.open_doors()
            return

        elevator.move_towards_target()
        logger.debug(
            "Elevator %s moving %s to floor %s (target %s)",
            elevator.elevator_id,
            elevator.direction.value,
            elevator.current_floor,
            elevator.target_floor,
        )

    @staticmethod
    def _route(elevator: Elevator) -> Optional[int]:
        return next_target(elevator.current_floor, elevator.direction, elevator.stops())
