from __future__ import annotations


class FleetError(ValueError):
    """Base class for requests the fleet refuses."""


class InvalidFloor(FleetError):
    def __init__(self, floor: object, num_floors: int) -> None:
        super().__init__(f"Invalid floor number: {floor} (valid: 1-{num_floors})")
        self.floor = floor


class InvalidDirection(FleetError):
    def __init__(self, direction: object) -> None:
        super().__init__(f"Invalid direction: {direction!r} (expected 'up' or 'down')")
        self.direction = direction


class ElevatorNotFound(FleetError):
    def __init__(self, elevator_id: int) -> None:
        super().__init__(f"Elevator with ID {elevator_id} not found")
        self.elevator_id = elevator_id
