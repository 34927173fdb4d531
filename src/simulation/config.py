from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional


@dataclass
class FleetConfig:
    """Building size, fleet shape and dispatch thresholds."""

    num_floors: int = 10
    elevator_count: int = 4
    capacity: int = 8
    last_resort_max_load: int = 6
    max_detour: int = 3
    floor_request_ttl: float = 1.0
    tick_interval: float = 1.0
    random_seed: Optional[int] = None

    def validate(self) -> None:
        if self.num_floors < 2:
            raise ValueError("num_floors must be at least 2")
        if self.elevator_count < 1:
            raise ValueError("elevator_count must be at least 1")
        if self.capacity < 1:
            raise ValueError("capacity must be at least 1")
        if self.last_resort_max_load > self.capacity:
            raise ValueError("last_resort_max_load cannot exceed capacity")
        if self.max_detour < 0:
            raise ValueError("max_detour cannot be negative")
        if self.floor_request_ttl < 0 or self.tick_interval <= 0:
            raise ValueError("floor_request_ttl must be >= 0 and tick_interval > 0")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FleetConfig":
        known = {f.name for f in fields(cls)}
        config = cls(**{key: value for key, value in data.items() if key in known})
        config.validate()
        return config
