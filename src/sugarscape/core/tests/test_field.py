import numpy as np
import pytest

from sugarscape.core.field import ResourceField, build_capacity, grow, harvest, initialize_levels


def test_capacity_falls_off_with_distance_from_peak():
    capacity = build_capacity((5, 5), [(0, 0)], max_sugar=4, decay_divisor=1)
    assert capacity[0, 0] == 4
    assert capacity[4, 0] == 0  # distance 4
    assert capacity[0, 3] == 1
    assert capacity[2, 2] == 1  # sqrt(8) rounds to 3
    assert (capacity >= 0).all()


def test_capacity_uses_floor_division_by_decay_divisor():
    capacity = build_capacity((50, 50), [(9, 39), (39, 9)], max_sugar=4, decay_divisor=6)
    assert capacity[9, 39] == 4
    assert capacity[39, 9] == 4
    assert capacity[9 + 5, 39] == 4  # 5 // 6 == 0
    assert capacity[9 + 6, 39] == 3
    assert capacity[0, 0] == 0
    assert capacity.min() == 0 and capacity.max() == 4


def test_levels_start_full_and_independent_of_capacity():
    capacity = build_capacity((4, 4), [(1, 1)], max_sugar=3, decay_divisor=1)
    level = initialize_levels(capacity)
    assert np.array_equal(level, capacity)
    level[1, 1] = 0
    assert capacity[1, 1] == 3


def test_grow_is_capped_at_capacity():
    capacity = np.array([[0, 1], [3, 5]])
    level = np.array([[0, 0], [1, 5]])
    grow(level, capacity, 2)
    assert level.tolist() == [[0, 1], [3, 5]]


def test_harvest_takes_everything():
    level = np.array([[2, 4]])
    assert harvest(level, (0, 1)) == 4
    assert level[0, 1] == 0
    assert harvest(level, (0, 1)) == 0


def test_depleted_cell_regrows_one_unit_per_step():
    field = ResourceField.from_peaks((3, 3), [(1, 1)], max_sugar=2, decay_divisor=1)
    assert field.harvest((1, 1)) == 2
    assert field.level_at((1, 1)) == 0
    field.grow(1)
    assert field.level_at((1, 1)) == 1
    field.grow(1)
    field.grow(1)
    assert field.level_at((1, 1)) == 2


def test_snapshots_are_read_only_copies():
    field = ResourceField.from_peaks((3, 3), [(0, 0)], max_sugar=2, decay_divisor=1)
    levels = field.levels()
    with pytest.raises(ValueError):
        levels[0, 0] = 9
    field.harvest((0, 0))
    assert levels[0, 0] == 2
    assert field.capacities()[0, 0] == 2
    assert field.total() == int(field.level.sum())
