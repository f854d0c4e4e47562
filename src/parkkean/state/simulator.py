"""Fallback occupancy simulation used when no live feed data is available."""

from __future__ import annotations

import random
from typing import Protocol

from parkkean.models import StoredLot


class OccupancySimulator(Protocol):
    def next_occupancy(self, lot: StoredLot) -> float:
        ...


class RandomWalkSimulator:
    """Nudges occupancy by up to ``±fluctuation / 2`` of capacity, clamped to ``[0, capacity]``."""

    def __init__(self, *, fluctuation: float = 0.05, rng: random.Random | None = None) -> None:
        self._fluctuation = fluctuation
        self._rng = rng if rng is not None else random.Random()

    def next_occupancy(self, lot: StoredLot) -> float:
        capacity = lot.capacity or 0
        current = lot.occupancy or 0
        step = round((self._rng.random() - 0.5) * capacity * self._fluctuation)
        return min(capacity, max(0, current + step))
