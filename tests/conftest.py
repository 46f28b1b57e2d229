"""
Pytest configuration and shared fixtures.
"""
import random
from typing import Iterable, Tuple

import matplotlib
import pytest

matplotlib.use("Agg")

from minesweeper_engine import GameConfig, Grid, Minesweeper, fixed_layout


class RecordingTimer:
    """Timer double that records the signals it receives."""

    def __init__(self):
        self.calls = []

    def start(self):
        self.calls.append("start")

    def stop(self):
        self.calls.append("stop")

    def reset(self):
        self.calls.append("reset")

    @property
    def elapsed_seconds(self):
        return 0


def brute_force_adjacency(grid: Grid, row: int, col: int) -> int:
    count = 0
    for r in range(row - 1, row + 2):
        for c in range(col - 1, col + 2):
            if (r, c) == (row, col):
                continue
            if 0 <= r < grid.rows and 0 <= c < grid.cols and grid.cells[r][c].is_mine:
                count += 1
    return count


def make_game(rows: int, cols: int, mines: Iterable[Tuple[int, int]], **kwargs) -> Minesweeper:
    """Build an engine whose first reveal lays exactly the given mines."""
    mines = list(mines)
    return Minesweeper(
        GameConfig(rows, cols, len(mines)), mine_placer=fixed_layout(mines), **kwargs
    )


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def timer() -> RecordingTimer:
    return RecordingTimer()


@pytest.fixture
def center_mine_game() -> Minesweeper:
    """3x3 board with its only mine in the middle."""
    return make_game(3, 3, [(1, 1)])


@pytest.fixture
def top_row_game() -> Minesweeper:
    """5x5 board with the whole top row mined; rows 2-4 are zero cells."""
    return make_game(5, 5, [(0, c) for c in range(5)])
