"""
Greedy foraging: look around, walk to the richest empty cell in sight, eat everything there.
"""
from __future__ import annotations

from sugarscape.core.agents import Agent, AgentRegistry
from sugarscape.core.field import ResourceField
from sugarscape.core.grid import Cell, Grid


def best_destination(agent: Agent, field: ResourceField, registry: AgentRegistry, grid: Grid) -> Cell:
    """
    The cell ``agent`` forages on this step.

    The agent's own cell is the starting best and only a strictly richer empty
    cell replaces it, so the own cell wins every tie, even against an equal cell
    met earlier in the neighborhood scan. Among strictly richer cells the first
    maximum in scan order (dx, then dy) wins.
    """
    best_pos = agent.position
    best_sugar = field.level_at(best_pos)
    for pos in grid.neighborhood(agent.position, agent.vision):
        if not registry.is_empty(pos):
            continue
        sugar = field.level_at(pos)
        if sugar > best_sugar:
            best_sugar = sugar
            best_pos = pos
    return best_pos


def forage(agent: Agent, field: ResourceField, registry: AgentRegistry, grid: Grid) -> int:
    """Move, harvest, pay metabolism and age one step. Returns the sugar harvested."""
    destination = best_destination(agent, field, registry, grid)
    registry.move(agent, destination)
    harvested = field.harvest(destination)
    agent.wealth += harvested - agent.metabolic_rate
    agent.age += 1
    return harvested
