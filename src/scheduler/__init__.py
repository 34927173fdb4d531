from __future__ import annotations

from .interface import (
    Assignment,
    CallRequest,
    Direction,
    ElevatorSnapshot,
    ElevatorStatus,
    Score,
    ScoringRule,
)
from .targeting import next_target
from .tiered import TieredScheduler
from .tiers import (
    AvailableTier,
    DetourTier,
    LastResortTier,
    OnRouteTier,
    default_tiers,
    score_elevator,
)

__all__ = [
    "Assignment",
    "AvailableTier",
    "CallRequest",
    "DetourTier",
    "Direction",
    "ElevatorSnapshot",
    "ElevatorStatus",
    "LastResortTier",
    "OnRouteTier",
    "Score",
    "ScoringRule",
    "TieredScheduler",
    "default_tiers",
    "next_target",
    "score_elevator",
]
