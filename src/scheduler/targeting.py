from __future__ import annotations

from typing import Iterable, Optional

from .interface import Direction


def next_target(current_floor: int, direction: Direction, stops: Iterable[int]) -> Optional[int]:
    """Pick the next stop using a one-way sweep.

    The car keeps serving stops on the side it is heading to and only wraps
    around to the far end once that side is exhausted. An idle car heads
    towards the side holding the mean of its stops (ties go down).
    """

    candidates = sorted({floor for floor in stops if floor != current_floor})
    if not candidates:
        return None

    if direction == Direction.IDLE:
        mean = sum(candidates) / len(candidates)
        direction = Direction.UP if mean > current_floor else Direction.DOWN

    if direction == Direction.UP:
        above = [floor for floor in candidates if floor > current_floor]
        return above[0] if above else candidates[0]

    below = [floor for floor in candidates if floor < current_floor]
    return below[-1] if below else candidates[-1]
