"""
Grid geometry: bounds, wrapping, peak distances and vision neighborhoods.
Holds no mutable state.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple
import math


Cell = Tuple[int, int]


def distance_to_nearest(cell: Cell, peaks: Iterable[Cell]) -> int:
    """Euclidean distance from ``cell`` to the closest peak, rounded to the nearest integer."""
    x, y = cell
    return min(int(round(math.hypot(x - px, y - py))) for px, py in peaks)


@dataclass(frozen=True)
class Grid:
    width: int
    height: int
    periodic: bool = True

    @property
    def dims(self) -> Tuple[int, int]:
        return self.width, self.height

    def in_bounds(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.width and 0 <= y < self.height

    def wrap(self, cell: Cell) -> Cell:
        x, y = cell
        return x % self.width, y % self.height

    def cells(self) -> Iterator[Cell]:
        for x in range(self.width):
            for y in range(self.height):
                yield x, y

    def neighborhood(self, cell: Cell, radius: int) -> List[Cell]:
        """
        All cells within Chebyshev distance ``radius`` of ``cell``, the cell itself included.

        Order is fixed: dx from -radius to +radius, and for each dx, dy from -radius
        to +radius. Foraging keeps the first maximum it meets, so this order decides ties.
        On a wrapping grid a cell reachable through several offsets is listed once,
        at its first offset.
        """
        x, y = cell
        out: List[Cell] = []
        seen = set()
        for dx in range(-radius, radius + 1):
            for dy in range(-radius, radius + 1):
                pos = (x + dx, y + dy)
                if self.periodic:
                    pos = self.wrap(pos)
                elif not self.in_bounds(pos):
                    continue
                if pos in seen:
                    continue
                seen.add(pos)
                out.append(pos)
        return out
