from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List, Optional

from scheduler import Direction, ElevatorSnapshot, ElevatorStatus

from .passenger import Passenger


@dataclass
class Elevator:
    """A single car: position, route target, riders and riders still to collect."""

    elevator_id: int
    current_floor: int = 1
    capacity: int = 8
    target_floor: Optional[int] = None
    doors_open: bool = False
    direction: Direction = Direction.IDLE
    status: ElevatorStatus = ElevatorStatus.STOPPED
    passengers: List[Passenger] = field(default_factory=list)
    pending_pickups: List[Passenger] = field(default_factory=list)

    @property
    def load(self) -> int:
        return len(self.passengers)

    @property
    def pending_pickup_floors(self) -> List[int]:
        return sorted({p.pickup_floor for p in self.pending_pickups})

    def stops(self) -> List[int]:
        """Every floor this car still has to visit."""
        return self.pending_pickup_floors + [p.target_floor for p in self.passengers]

    def add_pending_passenger(self, passenger: Passenger) -> None:
        if all(p.passenger_id != passenger.passenger_id for p in self.pending_pickups):
            self.pending_pickups.append(passenger)

    def should_stop_here(self) -> bool:
        has_dropoff = any(p.target_floor == self.current_floor for p in self.passengers)
        # A full car passes its pickup floors; the riders stay pending for a later visit.
        has_pickup = self.load < self.capacity and self.current_floor in self.pending_pickup_floors
        return has_dropoff or has_pickup

    def board_passengers(self) -> List[Passenger]:
        free_space = self.capacity - len(self.passengers)
        boarded: List[Passenger] = []
        waiting: List[Passenger] = []
        for passenger in self.pending_pickups:
            if passenger.pickup_floor == self.current_floor and len(boarded) < free_space:
                boarded.append(passenger)
            else:
                waiting.append(passenger)
        self.pending_pickups = waiting
        self.passengers.extend(boarded)
        return boarded

    def remove_passengers_by_destination(self, floor: int) -> List[Passenger]:
        removed = [p for p in self.passengers if p.target_floor == floor]
        self.passengers = [p for p in self.passengers if p.target_floor != floor]
        return removed

    def alight_passengers(self) -> List[Passenger]:
        return self.remove_passengers_by_destination(self.current_floor)

    def move_towards_target(self) -> None:
        if self.target_floor is None or self.target_floor == self.current_floor:
            return
        if self.target_floor > self.current_floor:
            self.direction = Direction.UP
            self.current_floor += 1
        else:
            self.direction = Direction.DOWN
            self.current_floor -= 1
        self.status = ElevatorStatus.MOVING
        self.doors_open = False

    def open_doors(self) -> None:
        self.status = ElevatorStatus.LOADING
        self.doors_open = True
        self.direction = Direction.IDLE

    def stop(self) -> None:
        self.status = ElevatorStatus.STOPPED
        self.doors_open = False
        self.direction = Direction.IDLE

    def clone(self) -> "Elevator":
        # Passengers are immutable, so copying the lists isolates the clone.
        return replace(
            self,
            passengers=list(self.passengers),
            pending_pickups=list(self.pending_pickups),
        )

    def snapshot(self) -> ElevatorSnapshot:
        return ElevatorSnapshot(
            elevator_id=self.elevator_id,
            current_floor=self.current_floor,
            target_floor=self.target_floor,
            direction=self.direction,
            status=self.status,
            load=self.load,
            capacity=self.capacity,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.elevator_id,
            "current_floor": self.current_floor,
            "target_floor": self.target_floor,
            "doors_open": self.doors_open,
            "direction": self.direction.value,
            "status": self.status.value,
            "passenger_count": self.load,
            "capacity": self.capacity,
            "passengers": [p.to_dict() for p in self.passengers],
            "pending_pickups": [p.to_dict() for p in self.pending_pickups],
            "pending_pickup_floors": self.pending_pickup_floors,
        }
