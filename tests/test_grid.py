import pytest

from minesweeper_engine import Cell, Grid, InvalidConfig
from minesweeper_engine.grid import _neighbor_table


def test_create_initializes_blank_cells():
    grid = Grid.create(4, 6)
    assert grid.rows == 4
    assert grid.cols == 6
    assert grid.mine_count == 0
    assert len(grid.cells) == 4
    assert all(len(row) == 6 for row in grid.cells)
    assert all(cell == Cell() for row in grid.cells for cell in row)


@pytest.mark.parametrize("rows, cols", [(0, 5), (5, 0), (-1, 3), (0, 0)])
def test_create_rejects_non_positive_dimensions(rows, cols):
    with pytest.raises(InvalidConfig):
        Grid.create(rows, cols)


def test_invalid_config_is_a_value_error():
    with pytest.raises(ValueError):
        Grid.create(0, 1)


@pytest.mark.parametrize(
    "pos, expected",
    [((0, 0), 3), ((0, 2), 5), ((2, 2), 8), ((4, 4), 3), ((4, 1), 5)],
)
def test_neighbor_counts_at_corners_edges_and_interior(pos, expected):
    grid = Grid.create(5, 5)
    assert len(grid.neighbors(*pos)) == expected


def test_neighbors_are_row_major_and_exclude_self():
    grid = Grid.create(3, 3)
    assert grid.neighbors(1, 1) == (
        (0, 0), (0, 1), (0, 2),
        (1, 0), (1, 2),
        (2, 0), (2, 1), (2, 2),
    )


def test_neighbors_are_at_chebyshev_distance_one():
    grid = Grid.create(4, 7)
    for r, c in grid.positions():
        for nr, nc in grid.neighbors(r, c):
            assert max(abs(nr - r), abs(nc - c)) == 1
            assert grid.in_bounds(nr, nc)


def test_single_cell_grid_has_no_neighbors():
    assert Grid.create(1, 1).neighbors(0, 0) == ()


def test_in_bounds():
    grid = Grid.create(2, 3)
    assert grid.in_bounds(0, 0)
    assert grid.in_bounds(1, 2)
    assert not grid.in_bounds(2, 0)
    assert not grid.in_bounds(0, 3)
    assert not grid.in_bounds(-1, 0)


def test_positions_are_row_major():
    grid = Grid.create(2, 2)
    assert list(grid.positions()) == [(0, 0), (0, 1), (1, 0), (1, 1)]


def test_grids_of_one_shape_share_a_neighbor_table():
    assert Grid.create(3, 4).neighbors(1, 1) is Grid.create(3, 4).neighbors(1, 1)
    assert _neighbor_table(3, 4) is not _neighbor_table(4, 3)


def test_mine_positions_and_safe_cell_count():
    grid = Grid.create(2, 2)
    grid.cells[1][0].is_mine = True
    grid.mine_count = 1
    assert grid.mine_positions() == [(1, 0)]
    assert grid.safe_cell_count == 3
