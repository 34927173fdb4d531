from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from .interface import Assignment, CallRequest, ElevatorSnapshot, Score, ScoringRule
from .tiers import default_tiers, score_elevator


class TieredScheduler:
    """Assigns a hall call to the best-scoring elevator.

    Every car with spare capacity is scored by the first tier that accepts
    it. The highest priority wins, then the lowest cost; remaining ties go
    to the car seen first, so callers control tie-breaks through the order
    of ``elevator_state``.
    """

    def __init__(self, tiers: Optional[Sequence[ScoringRule]] = None) -> None:
        self.tiers: List[ScoringRule] = list(tiers) if tiers is not None else default_tiers()

    def score_all(
        self, elevator_state: Iterable[ElevatorSnapshot], call: CallRequest
    ) -> List[Tuple[ElevatorSnapshot, Score]]:
        candidates: List[Tuple[ElevatorSnapshot, Score]] = []
        for elevator in elevator_state:
            if elevator.available_capacity <= 0:
                continue
            score = score_elevator(elevator, call, self.tiers)
            if score is not None:
                candidates.append((elevator, score))
        return candidates

    def select_elevator(
        self, elevator_state: Iterable[ElevatorSnapshot], call: CallRequest
    ) -> Optional[Assignment]:
        best: Optional[Tuple[ElevatorSnapshot, Score]] = None
        for elevator, score in self.score_all(elevator_state, call):
            if best is None or self._beats(score, best[1]):
                best = (elevator, score)
        if best is None:
            return None
        return Assignment(elevator_id=best[0].elevator_id, score=best[1])

    @staticmethod
    def _beats(score: Score, incumbent: Score) -> bool:
        return (score.priority, -score.cost) > (incumbent.priority, -incumbent.cost)
