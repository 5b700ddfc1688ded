import numpy as np

from sugarscape.core.agents import Agent, AgentRegistry
from sugarscape.core.field import ResourceField
from sugarscape.core.foraging import best_destination, forage
from sugarscape.core.grid import Grid


def _make_world(levels, periodic=False):
    capacity = np.array(levels, dtype=np.int64)
    field = ResourceField(capacity)
    registry = AgentRegistry(capacity.shape)
    grid = Grid(capacity.shape[0], capacity.shape[1], periodic=periodic)
    return field, registry, grid


def _place(registry, agent_id, position, vision=1, metabolic_rate=1, wealth=10):
    return registry.insert(
        Agent(agent_id=agent_id, position=position, vision=vision,
              metabolic_rate=metabolic_rate, max_age=100, wealth=wealth)
    )


def test_agent_moves_to_richest_visible_cell_and_eats_it():
    field, registry, grid = _make_world([
        [0, 0, 0],
        [0, 1, 3],
        [0, 2, 0],
    ])
    agent = _place(registry, 0, (1, 1))
    harvested = forage(agent, field, registry, grid)
    assert harvested == 3
    assert agent.position == (1, 2)
    assert field.level_at((1, 2)) == 0
    assert agent.wealth == 10 + 3 - 1
    assert agent.age == 1
    assert registry.is_empty((1, 1))


def test_occupied_cells_are_not_candidates():
    field, registry, grid = _make_world([
        [0, 0, 0],
        [0, 1, 3],
        [0, 2, 0],
    ])
    agent = _place(registry, 0, (1, 1))
    _place(registry, 1, (1, 2))
    assert best_destination(agent, field, registry, grid) == (2, 1)


def test_own_cell_wins_ties():
    field, registry, grid = _make_world([
        [2, 2, 2],
        [2, 2, 2],
        [2, 2, 2],
    ])
    agent = _place(registry, 0, (1, 1))
    assert best_destination(agent, field, registry, grid) == (1, 1)
    assert forage(agent, field, registry, grid) == 2
    assert field.level_at((1, 1)) == 0


def test_first_maximum_in_scan_order_wins_ties():
    field, registry, grid = _make_world([
        [0, 0, 0],
        [0, 0, 4],
        [4, 0, 0],
    ])
    agent = _place(registry, 0, (1, 1))
    # dx=0 comes before dx=+1, so (1, 2) is met before (2, 0)
    assert best_destination(agent, field, registry, grid) == (1, 2)


def test_vision_limits_the_search():
    field, registry, grid = _make_world([
        [0, 0, 0, 0, 9],
        [0, 0, 0, 0, 0],
        [0, 1, 0, 0, 0],
    ])
    agent = _place(registry, 0, (2, 0), vision=1)
    assert best_destination(agent, field, registry, grid) == (2, 1)
    agent.vision = 4
    assert best_destination(agent, field, registry, grid) == (0, 4)


def test_staying_on_an_empty_neighbourhood_still_costs_metabolism():
    field, registry, grid = _make_world([[0, 0], [0, 0]])
    agent = _place(registry, 0, (0, 0), metabolic_rate=3, wealth=2)
    assert forage(agent, field, registry, grid) == 0
    assert agent.position == (0, 0)
    assert agent.wealth == -1
    assert agent.age == 1
