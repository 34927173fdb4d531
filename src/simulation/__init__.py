"""Simulation primitives for LiftFleet."""

from .config import FleetConfig
from .dispatch import CallResult, DispatchPlanner
from .elevator import Elevator
from .errors import ElevatorNotFound, FleetError, InvalidDirection, InvalidFloor
from .motion import MotionScheduler
from .passenger import FloorRequest, Passenger
from .simulation import Simulation
from .store import FleetStore

__all__ = [
    "CallResult",
    "DispatchPlanner",
    "Elevator",
    "ElevatorNotFound",
    "FleetConfig",
    "FleetError",
    "FleetStore",
    "FloorRequest",
    "InvalidDirection",
    "InvalidFloor",
    "MotionScheduler",
    "Passenger",
    "Simulation",
]
