"""
Sugar field: a fixed capacity map and the current sugar level per cell.
"""
from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np

from sugarscape.core.grid import Cell, distance_to_nearest


def build_capacity(
    dims: Tuple[int, int], peaks: Sequence[Cell], max_sugar: int, decay_divisor: int
) -> np.ndarray:
    """
    Capacity per cell, highest on the peaks and falling off in rings:
    ``max(0, max_sugar - distance_to_nearest_peak // decay_divisor)``.
    """
    width, height = dims
    capacity = np.zeros((width, height), dtype=np.int64)
    for x in range(width):
        for y in range(height):
            dist = distance_to_nearest((x, y), peaks)
            capacity[x, y] = max(0, max_sugar - dist // decay_divisor)
    return capacity


def initialize_levels(capacity: np.ndarray) -> np.ndarray:
    # Every cell starts full.
    return capacity.copy()


def grow(level: np.ndarray, capacity: np.ndarray, growth_rate: int) -> None:
    np.minimum(level + growth_rate, capacity, out=level)


def harvest(level: np.ndarray, cell: Cell) -> int:
    amount = int(level[cell])
    level[cell] = 0
    return amount


def _read_only(array: np.ndarray) -> np.ndarray:
    view = array.copy()
    view.flags.writeable = False
    return view


class ResourceField:
    def __init__(self, capacity: np.ndarray):
        assert (capacity >= 0).all(), "sugar capacity must be non-negative"
        self.capacity = capacity
        self.level = initialize_levels(capacity)

    @classmethod
    def from_peaks(
        cls, dims: Tuple[int, int], peaks: Sequence[Cell], max_sugar: int, decay_divisor: int
    ) -> "ResourceField":
        return cls(build_capacity(dims, peaks, max_sugar, decay_divisor))

    @property
    def shape(self) -> Tuple[int, int]:
        return self.capacity.shape

    def grow(self, growth_rate: int) -> None:
        grow(self.level, self.capacity, growth_rate)
        assert (self.level >= 0).all() and (self.level <= self.capacity).all(), "sugar level out of bounds"

    def harvest(self, cell: Cell) -> int:
        return harvest(self.level, cell)

    def level_at(self, cell: Cell) -> int:
        return int(self.level[cell])

    def capacity_at(self, cell: Cell) -> int:
        return int(self.capacity[cell])

    def total(self) -> int:
        return int(self.level.sum())

    def mean(self) -> float:
        return float(self.level.mean())

    def levels(self) -> np.ndarray:
        return _read_only(self.level)

    def capacities(self) -> np.ndarray:
        return _read_only(self.capacity)
