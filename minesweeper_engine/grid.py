"""Cell records and the rectangular grid that owns them."""

from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Iterator, List, Tuple

Position = Tuple[int, int]

# Row-major offsets, top-left to bottom-right.
_OFFSETS: Tuple[Position, ...] = tuple(
    (dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1) if (dr, dc) != (0, 0)
)


class InvalidConfig(ValueError):
    """Raised when a board configuration cannot produce a playable game."""


@dataclass
class Cell:
    """A single grid position."""

    is_mine: bool = False
    adjacent_mine_count: int = 0
    revealed: bool = False
    flagged: bool = False


class Grid:
    """A rows x cols matrix of cells plus the number of mines laid on it."""

    def __init__(self, rows: int, cols: int) -> None:
        """
        Build a blank grid.

        Args:
            rows: Number of rows, must be > 0.
            cols: Number of columns, must be > 0.

        Raises:
            InvalidConfig: If either dimension is non-positive.
        """
        if rows <= 0 or cols <= 0:
            raise InvalidConfig("rows and cols must be positive.")

        self.rows: int = rows
        self.cols: int = cols
        self.mine_count: int = 0
        self.cells: List[List[Cell]] = [
            [Cell() for _ in range(cols)] for _ in range(rows)
        ]

        self._neighborhoods: Dict[Position, Tuple[Position, ...]] = _neighbor_table(
            rows, cols
        )

    @classmethod
    def create(cls, rows: int, cols: int) -> "Grid":
        """Return a fresh grid with every cell hidden, unflagged and mine-free."""
        return cls(rows, cols)

    @property
    def size(self) -> int:
        return self.rows * self.cols

    @property
    def safe_cell_count(self) -> int:
        """Number of cells that must be revealed to win."""
        return self.size - self.mine_count

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def neighbors(self, row: int, col: int) -> Tuple[Position, ...]:
        """
        Return precomputed neighbor coordinates for a cell.

        Args:
            row: Cell row.
            col: Cell column.

        Returns:
            All valid (nr, nc) neighbors in the 8-neighborhood, row-major.
        """
        return self._neighborhoods[(row, col)]

    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def positions(self) -> Iterator[Position]:
        """Yield every (row, col) in row-major order."""
        for r in range(self.rows):
            for c in range(self.cols):
                yield r, c

    def mine_positions(self) -> List[Position]:
        return [(r, c) for r, c in self.positions() if self.cells[r][c].is_mine]


@lru_cache(maxsize=None)
def _neighbor_table(rows: int, cols: int) -> Dict[Position, Tuple[Position, ...]]:
    """Map every cell of a rows x cols grid to its in-bounds 8-neighbors.

    Grids of the same shape share one table; it is never mutated.
    """
    return {
        (r, c): tuple(
            (r + dr, c + dc)
            for dr, dc in _OFFSETS
            if 0 <= r + dr < rows and 0 <= c + dc < cols
        )
        for r in range(rows)
        for c in range(cols)
    }
