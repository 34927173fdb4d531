from __future__ import annotations

from typing import Callable, List, Tuple

import pytest

from simulation import FleetConfig, Simulation


class RecordingDeferral:
    """Collects deferred callbacks so tests decide when they fire."""

    def __init__(self) -> None:
        self.calls: List[Tuple[float, Callable[[], None]]] = []

    def __call__(self, delay: float, callback: Callable[[], None]) -> None:
        self.calls.append((delay, callback))

    def fire_all(self) -> None:
        calls, self.calls = self.calls, []
        for _, callback in calls:
            callback()


@pytest.fixture
def deferral() -> RecordingDeferral:
    return RecordingDeferral()


@pytest.fixture
def config() -> FleetConfig:
    return FleetConfig(random_seed=1234)


@pytest.fixture
def simulation(config: FleetConfig, deferral: RecordingDeferral) -> Simulation:
    return Simulation(config, defer=deferral)
