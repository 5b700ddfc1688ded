"""
Sugarscape engine: one world, one random stream, discrete ticks.

Each tick the sugar grows back everywhere, then every agent alive at the start
of the tick takes a turn in random order: forage, then die and be replaced if
starved or too old. Newborns wait for the next tick.
"""
from __future__ import annotations

from typing import Dict, Optional, Tuple
import logging

import numpy as np

from sugarscape.core.agents import AgentRegistry, AgentSnapshot
from sugarscape.core.config import SugarscapeConfig
from sugarscape.core.field import ResourceField
from sugarscape.core.foraging import forage
from sugarscape.core.grid import Grid
from sugarscape.core.replacement import apply_replacement


logger = logging.getLogger(__name__)

INITIALIZED = "initialized"
RUNNING = "running"


class SugarscapeModel:
    def __init__(self, config: Optional[SugarscapeConfig] = None):
        self.config = (config or SugarscapeConfig()).validate()
        cfg = self.config
        self.grid = Grid(cfg.width, cfg.height, periodic=cfg.periodic)
        self.field = ResourceField.from_peaks(cfg.dims, cfg.peaks, cfg.max_sugar, cfg.decay_divisor)
        self.rng = np.random.default_rng(cfg.seed)
        self.registry = AgentRegistry(cfg.dims)
        self.tick = 0
        for _ in range(cfg.population):
            self.registry.spawn(cfg, self.rng)
        logger.info(
            "initialized %dx%d sugarscape: %d agents, %d peaks, total sugar %d, seed=%s",
            cfg.width,
            cfg.height,
            len(self.registry),
            len(cfg.peaks),
            self.field.total(),
            cfg.seed,
        )

    @property
    def phase(self) -> str:
        return INITIALIZED if self.tick == 0 else RUNNING

    @property
    def population(self) -> int:
        return len(self.registry)

    def step(self) -> Dict[str, int]:
        births = 0
        deaths = 0
        skipped = 0
        harvested = 0
        self.tick += 1

        self.field.grow(self.config.growth_rate)

        # Turn order is fixed before anyone acts, so newborns never act this tick.
        agents = self.registry.agents()
        for ix in self.rng.permutation(len(agents)):
            agent = agents[ix]
            if not self.registry.is_alive(agent):
                continue
            harvested += forage(agent, self.field, self.registry, self.grid)
            outcome = apply_replacement(agent, self.registry, self.config, self.rng)
            if outcome.died:
                deaths += 1
                if outcome.skipped:
                    skipped += 1
                else:
                    births += 1

        return {"births": births, "deaths": deaths, "skipped_births": skipped, "harvested": harvested}

    def run(self, steps: int, collector=None) -> None:
        for _ in range(steps):
            self.step()
            if collector is not None:
                collector.collect(self)

    # Read-only views for plotting and data collection.

    def sugar_levels(self) -> np.ndarray:
        return self.field.levels()

    def sugar_capacities(self) -> np.ndarray:
        return self.field.capacities()

    def agents(self) -> Tuple[AgentSnapshot, ...]:
        return self.registry.snapshot()

    def check_invariants(self) -> None:
        level, capacity = self.field.level, self.field.capacity
        assert (level >= 0).all(), "negative sugar level"
        assert (level <= capacity).all(), "sugar level above capacity"
        positions = [agent.position for agent in self.registry.agents()]
        assert len(positions) == len(set(positions)), "two agents share a cell"
        assert int(self.registry.occupancy().sum()) == len(positions), "occupancy out of sync with agents"
        for agent in self.registry.agents():
            assert self.registry.agent_at(agent.position) is agent, f"agent {agent.agent_id} not on its cell"


def initialize(config: Optional[SugarscapeConfig] = None) -> SugarscapeModel:
    return SugarscapeModel(config)
