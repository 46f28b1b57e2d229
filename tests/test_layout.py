import random

import pytest

from conftest import brute_force_adjacency
from minesweeper_engine import (
    Grid,
    InvalidConfig,
    compute_adjacency,
    fixed_layout,
    place_mines,
)


@pytest.mark.parametrize(
    "rows, cols, mines",
    [(9, 9, 10), (16, 30, 99), (1, 2, 1), (3, 3, 8), (4, 5, 1)],
)
def test_place_mines_places_exact_count_and_spares_safe_cell(rows, cols, mines):
    rng = random.Random(rows * 100 + cols)
    for _ in range(20):
        safe = (rng.randrange(rows), rng.randrange(cols))
        grid = Grid.create(rows, cols)
        place_mines(grid, mines, *safe, rng=rng)
        assert len(grid.mine_positions()) == mines
        assert grid.mine_count == mines
        assert not grid.cell(*safe).is_mine


def test_place_mines_fills_every_cell_but_the_safe_one():
    grid = Grid.create(3, 3)
    place_mines(grid, 8, 1, 1)
    assert set(grid.mine_positions()) == set(grid.positions()) - {(1, 1)}


def test_place_mines_is_reproducible_with_seeded_rng():
    a, b = Grid.create(9, 9), Grid.create(9, 9)
    place_mines(a, 10, 4, 4, random.Random(5))
    place_mines(b, 10, 4, 4, random.Random(5))
    assert a.mine_positions() == b.mine_positions()


def test_place_mines_rejects_too_many_mines():
    with pytest.raises(InvalidConfig):
        place_mines(Grid.create(2, 2), 4, 0, 0)


def test_place_mines_rejects_negative_count():
    with pytest.raises(InvalidConfig):
        place_mines(Grid.create(2, 2), -1, 0, 0)


def test_place_mines_rejects_out_of_bounds_origin():
    with pytest.raises(InvalidConfig):
        place_mines(Grid.create(2, 2), 1, 2, 0)


def test_place_mines_runs_once_per_grid(rng):
    grid = Grid.create(4, 4)
    place_mines(grid, 3, 0, 0, rng)
    with pytest.raises(InvalidConfig):
        place_mines(grid, 3, 0, 0, rng)


def test_place_mines_is_roughly_uniform():
    rng = random.Random(99)
    counts = {}
    runs = 4000
    for _ in range(runs):
        grid = Grid.create(3, 3)
        place_mines(grid, 2, 0, 0, rng)
        for pos in grid.mine_positions():
            counts[pos] = counts.get(pos, 0) + 1

    assert (0, 0) not in counts
    assert len(counts) == 8
    for pos, hits in counts.items():
        assert hits / runs == pytest.approx(2 / 8, abs=0.05), pos


def test_fixed_layout_places_given_mines():
    grid = Grid.create(3, 3)
    fixed_layout([(1, 1), (2, 2)])(grid, 2, 0, 0)
    assert grid.mine_positions() == [(1, 1), (2, 2)]
    assert grid.mine_count == 2


def test_fixed_layout_rejects_mine_on_safe_origin():
    with pytest.raises(InvalidConfig):
        fixed_layout([(0, 0)])(Grid.create(3, 3), 1, 0, 0)


def test_fixed_layout_rejects_count_mismatch():
    with pytest.raises(InvalidConfig):
        fixed_layout([(1, 1)])(Grid.create(3, 3), 2, 0, 0)


def test_fixed_layout_rejects_out_of_bounds_mine():
    with pytest.raises(InvalidConfig):
        fixed_layout([(3, 3)])(Grid.create(3, 3), 1, 0, 0)


@pytest.mark.parametrize("valid", [(0, 1), (1, 1), (2, 2), (1, 0), (2, 0), (0, 2)])
def test_fixed_layout_with_bad_mine_leaves_grid_untouched(valid):
    grid = Grid.create(3, 3)
    with pytest.raises(InvalidConfig):
        fixed_layout([valid, (9, 9)])(grid, 2, 0, 0)
    assert grid.mine_positions() == []
    assert grid.mine_count == 0


def test_compute_adjacency_for_center_mine():
    grid = Grid.create(3, 3)
    fixed_layout([(1, 1)])(grid, 1, 0, 0)
    compute_adjacency(grid)
    for r, c in grid.positions():
        if (r, c) != (1, 1):
            assert grid.cell(r, c).adjacent_mine_count == 1


def test_compute_adjacency_matches_brute_force(rng):
    for rows, cols, mines in [(9, 9, 10), (16, 16, 40), (16, 30, 99), (5, 5, 24), (1, 8, 3)]:
        grid = Grid.create(rows, cols)
        place_mines(grid, mines, 0, 0, rng)
        compute_adjacency(grid)
        for r, c in grid.positions():
            cell = grid.cell(r, c)
            if cell.is_mine:
                continue
            assert cell.adjacent_mine_count == brute_force_adjacency(grid, r, c)
            assert 0 <= cell.adjacent_mine_count <= 8
