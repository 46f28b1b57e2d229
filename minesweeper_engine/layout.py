"""Deferred mine placement and adjacency counting."""

import logging
import random
from typing import Callable, FrozenSet, Iterable, List, Optional, Tuple

from .grid import Grid, InvalidConfig

logger = logging.getLogger(__name__)

MinePlacer = Callable[[Grid, int, int, int, Optional[random.Random]], None]


def _check_placement(grid: Grid, mine_count: int, safe_row: int, safe_col: int) -> None:
    if grid.mine_positions():
        raise InvalidConfig("The grid already has mines.")
    if not grid.in_bounds(safe_row, safe_col):
        raise InvalidConfig(
            f"Safe origin ({safe_row}, {safe_col}) is outside the grid."
        )
    if mine_count < 0:
        raise InvalidConfig("mine_count must be non-negative.")
    if mine_count > grid.size - 1:
        raise InvalidConfig(
            f"Cannot place {mine_count} mines on {grid.rows}x{grid.cols} "
            "and keep the first revealed cell safe."
        )


def place_mines(
    grid: Grid,
    mine_count: int,
    safe_row: int,
    safe_col: int,
    rng: Optional[random.Random] = None,
) -> None:
    """
    Lay mines on a blank grid, never on the safe origin.

    Positions are sampled uniformly without replacement from every cell
    except (safe_row, safe_col).

    Args:
        grid: Blank grid to mutate.
        mine_count: Number of mines to place, at most rows*cols - 1.
        safe_row: Row of the first revealed cell.
        safe_col: Column of the first revealed cell.
        rng: Random source; the module-level generator when omitted.

    Raises:
        InvalidConfig: If the grid already holds mines, the safe origin is out
            of bounds, or the mine count cannot fit.
    """
    _check_placement(grid, mine_count, safe_row, safe_col)

    eligible: List[Tuple[int, int]] = [
        (r, c) for r, c in grid.positions() if (r, c) != (safe_row, safe_col)
    ]

    sampler = rng if rng is not None else random
    for mr, mc in sampler.sample(eligible, mine_count):
        grid.cells[mr][mc].is_mine = True
    grid.mine_count = mine_count

    logger.debug(
        "Placed %d mines on %dx%d grid, safe origin (%d, %d)",
        mine_count, grid.rows, grid.cols, safe_row, safe_col,
    )


def fixed_layout(positions: Iterable[Tuple[int, int]]) -> MinePlacer:
    """
    Build a placer that lays a predetermined set of mines.

    The returned callable has the same signature as place_mines, so it can be
    handed to the engine to play a known board.
    """
    mines: FrozenSet[Tuple[int, int]] = frozenset(positions)

    def placer(
        grid: Grid,
        mine_count: int,
        safe_row: int,
        safe_col: int,
        rng: Optional[random.Random] = None,
    ) -> None:
        _check_placement(grid, mine_count, safe_row, safe_col)
        if len(mines) != mine_count:
            raise InvalidConfig(
                f"Layout has {len(mines)} mines but the game expects {mine_count}."
            )
        if (safe_row, safe_col) in mines:
            raise InvalidConfig(
                f"Layout puts a mine on the safe origin ({safe_row}, {safe_col})."
            )
        outside = sorted(p for p in mines if not grid.in_bounds(*p))
        if outside:
            raise InvalidConfig(f"Mines {outside} are outside the grid.")

        for mr, mc in mines:
            grid.cells[mr][mc].is_mine = True
        grid.mine_count = mine_count

    return placer


def compute_adjacency(grid: Grid) -> None:
    """Populate every non-mine cell with its adjacent mine count."""
    for r, c in grid.positions():
        cell = grid.cells[r][c]
        if cell.is_mine:
            continue

        cell.adjacent_mine_count = sum(
            1 for nr, nc in grid.neighbors(r, c) if grid.cells[nr][nc].is_mine
        )
