from __future__ import annotations

from typing import Optional

from .interface import Direction


def floor_distance(origin: int, destination: int) -> int:
    return abs(origin - destination)


def detour_cost(current: int, pickup: int, target: Optional[int]) -> int:
    """Extra floors travelled when a pickup is inserted before ``target``.

    Without a target the existing route is empty, so the whole trip to the
    pickup counts as detour.
    """

    original = floor_distance(current, target) if target is not None else 0
    rerouted = floor_distance(current, pickup)
    if target is not None:
        rerouted += floor_distance(pickup, target)
    return max(0, rerouted - original)


def lies_ahead(current: int, target: Optional[int], floor: int, direction: Direction) -> bool:
    """Return True when ``floor`` is between ``current`` and ``target`` along ``direction``.

    A missing target is treated as an open-ended run in that direction.
    """

    if direction == Direction.UP:
        return current <= floor and (target is None or target >= floor)
    if direction == Direction.DOWN:
        return current >= floor and (target is None or target <= floor)
    return False
