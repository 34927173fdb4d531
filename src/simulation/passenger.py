from __future__ import annotations

from dataclasses import dataclass

from scheduler import Direction


@dataclass(frozen=True)
class Passenger:
    """Represents a rider moving between floors."""

    passenger_id: int
    pickup_floor: int
    target_floor: int

    def to_dict(self) -> dict:
        return {
            "id": self.passenger_id,
            "pickup_floor": self.pickup_floor,
            "target_floor": self.target_floor,
        }


@dataclass(frozen=True)
class FloorRequest:
    """An active hall call, kept only so clients can light the button."""

    floor: int
    direction: Direction

    def to_dict(self) -> dict:
        return {"floor": self.floor, "direction": self.direction.value}
