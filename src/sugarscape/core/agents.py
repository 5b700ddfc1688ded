"""
Agent records and the registry that keeps at most one agent per cell.

The registry is a slot arena: dead agents free their slot onto a free list and
new agents reuse it, while an occupancy array maps every cell to the slot
standing on it (-1 when empty).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple
import logging

import numpy as np

from sugarscape.core.config import SugarscapeConfig
from sugarscape.core.errors import CapacityExhausted
from sugarscape.core.grid import Cell


logger = logging.getLogger(__name__)

EMPTY = -1


@dataclass
class Agent:
    agent_id: int
    position: Cell
    vision: int
    metabolic_rate: int
    max_age: int
    wealth: int
    age: int = 0

    def snapshot(self) -> "AgentSnapshot":
        return AgentSnapshot(
            agent_id=self.agent_id,
            position=self.position,
            vision=self.vision,
            metabolic_rate=self.metabolic_rate,
            age=self.age,
            max_age=self.max_age,
            wealth=self.wealth,
        )


@dataclass(frozen=True)
class AgentSnapshot:
    agent_id: int
    position: Cell
    vision: int
    metabolic_rate: int
    age: int
    max_age: int
    wealth: int


class AgentRegistry:
    def __init__(self, dims: Tuple[int, int]):
        self.dims = tuple(dims)
        self._occupancy = np.full(self.dims, EMPTY, dtype=np.int64)
        self._slots: List[Optional[Agent]] = []
        self._free: List[int] = []
        self._slot_of: Dict[int, int] = {}
        self.next_id = 0

    def __len__(self) -> int:
        return len(self._slot_of)

    def is_alive(self, agent: Agent) -> bool:
        slot = self._slot_of.get(agent.agent_id)
        return slot is not None and self._slots[slot] is agent

    def is_empty(self, cell: Cell) -> bool:
        return bool(self._occupancy[cell] == EMPTY)

    def agent_at(self, cell: Cell) -> Optional[Agent]:
        slot = int(self._occupancy[cell])
        return None if slot == EMPTY else self._slots[slot]

    def agents(self) -> List[Agent]:
        """Live agents in slot order."""
        return [agent for agent in self._slots if agent is not None]

    def empty_cells(self) -> List[Cell]:
        """Unoccupied cells, row-major (x, then y)."""
        return [(int(x), int(y)) for x, y in np.argwhere(self._occupancy == EMPTY)]

    def occupancy(self) -> np.ndarray:
        view = self._occupancy != EMPTY
        view.flags.writeable = False
        return view

    def random_empty_cell(self, rng: np.random.Generator) -> Cell:
        empties = self.empty_cells()
        if not empties:
            raise CapacityExhausted(f"no empty cell left on the {self.dims[0]}x{self.dims[1]} grid")
        return empties[int(rng.integers(len(empties)))]

    def insert(self, agent: Agent) -> Agent:
        assert agent.agent_id not in self._slot_of, f"agent {agent.agent_id} is already registered"
        assert self.is_empty(agent.position), f"cell {agent.position} is already occupied"
        if self._free:
            slot = self._free.pop()
            self._slots[slot] = agent
        else:
            slot = len(self._slots)
            self._slots.append(agent)
        self._slot_of[agent.agent_id] = slot
        self._occupancy[agent.position] = slot
        return agent

    def remove(self, agent: Agent) -> None:
        slot = self._slot_of.pop(agent.agent_id)
        assert self._occupancy[agent.position] == slot, f"agent {agent.agent_id} is not on {agent.position}"
        self._occupancy[agent.position] = EMPTY
        self._slots[slot] = None
        self._free.append(slot)

    def move(self, agent: Agent, cell: Cell) -> None:
        if cell == agent.position:
            return
        slot = self._slot_of[agent.agent_id]
        assert self.is_empty(cell), f"cell {cell} is already occupied"
        self._occupancy[agent.position] = EMPTY
        self._occupancy[cell] = slot
        agent.position = cell

    def spawn(
        self, config: SugarscapeConfig, rng: np.random.Generator, position: Optional[Cell] = None
    ) -> Agent:
        """
        Create an agent with freshly drawn attributes at ``position``, or at a
        uniformly random empty cell when no position is given.

        Draw order on ``rng``: vision, metabolic rate, max age, wealth, then the cell.
        Raises CapacityExhausted when the grid is full; nothing is consumed from
        the id sequence in that case.
        """
        vision = _draw(rng, config.vision_range)
        metabolic_rate = _draw(rng, config.metabolic_rate_range)
        max_age = _draw(rng, config.max_age_range)
        wealth = _draw(rng, config.wealth_range)
        if position is None:
            position = self.random_empty_cell(rng)
        agent = Agent(
            agent_id=self.next_id,
            position=position,
            vision=vision,
            metabolic_rate=metabolic_rate,
            max_age=max_age,
            wealth=wealth,
        )
        self.next_id += 1
        self.insert(agent)
        logger.debug("spawned agent %d at %s", agent.agent_id, agent.position)
        return agent

    def snapshot(self) -> Tuple[AgentSnapshot, ...]:
        return tuple(agent.snapshot() for agent in self.agents())


def _draw(rng: np.random.Generator, bounds: Tuple[int, int]) -> int:
    low, high = bounds
    return int(rng.integers(low, high, endpoint=True))
