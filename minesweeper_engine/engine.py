"""Minesweeper game engine with first-click safety and breadth-first flood reveal."""

import logging
import random
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, List, Optional, Tuple

from .config import ConfigLike, GameConfig, resolve_config
from .grid import Grid
from .layout import MinePlacer, compute_adjacency, place_mines
from .timer import GameTimer, NullTimer

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    """Lifecycle of one game."""

    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    WON = "WON"
    LOST = "LOST"

    @property
    def is_terminal(self) -> bool:
        return self in (Phase.WON, Phase.LOST)


class RevealStatus(str, Enum):
    UNCHANGED = "UNCHANGED"
    REVEALED = "REVEALED"
    LOST = "LOST"
    WON = "WON"


@dataclass(frozen=True)
class RevealOutcome:
    """Result of a reveal call.

    adjacent_count is the revealed cell's mine count for REVEALED and WON,
    and None otherwise. revealed_cells lists the positions this call
    uncovered, in reveal order; on a loss it holds only the mine that was hit.
    """

    status: RevealStatus
    adjacent_count: Optional[int] = None
    revealed_cells: Tuple[Tuple[int, int], ...] = ()


UNCHANGED = RevealOutcome(RevealStatus.UNCHANGED)


@dataclass(frozen=True)
class FlagOutcome:
    flagged: bool
    flag_count: int
    mines_remaining: int
    changed: bool


@dataclass(frozen=True)
class CellView:
    """What a renderer may know about one cell.

    is_mine is None unless the cell is revealed or the game is lost;
    adjacent_mine_count is None unless the cell is a revealed safe cell.
    """

    revealed: bool
    flagged: bool
    is_mine: Optional[bool]
    adjacent_mine_count: Optional[int]


@dataclass(frozen=True)
class GameSnapshot:
    rows: int
    cols: int
    mine_count: int
    phase: Phase
    flag_count: int
    flags_remaining: int
    revealed_safe_count: int
    elapsed_seconds: int
    cells: Tuple[Tuple[CellView, ...], ...]


@dataclass
class GameState:
    """Mutable state of the game in play; owned by a single Minesweeper engine."""

    config: GameConfig
    grid: Grid
    revealed_safe_count: int = 0
    flag_count: int = 0
    phase: Phase = Phase.NOT_STARTED

    @classmethod
    def new(cls, config: GameConfig) -> "GameState":
        return cls(config=config, grid=Grid.create(config.rows, config.cols))

    @property
    def flags_remaining(self) -> int:
        return max(self.config.mine_count - self.flag_count, 0)


class Minesweeper:
    """Single-player Minesweeper engine.

    Mines are laid lazily on the first reveal, with the revealed cell as the
    safe origin. Every operation runs to completion and mutates only the
    engine's own GameState.
    """

    def __init__(
        self,
        config: ConfigLike = "beginner",
        *,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        timer: Optional[GameTimer] = None,
        mine_placer: MinePlacer = place_mines,
    ) -> None:
        """
        Initialize a Minesweeper game engine.

        Args:
            config: Preset name, custom mapping or GameConfig for the first game.
            seed: Seed for a private random generator; ignored when rng is given.
            rng: Random source for mine placement.
            timer: Collaborator receiving start/stop signals.
            mine_placer: Callable laying mines on the first reveal; place_mines
                by default, or a fixed_layout() for a predetermined board.

        Raises:
            InvalidConfig: If config cannot produce a playable board.
        """
        self.rng: random.Random = rng if rng is not None else random.Random(seed)
        self.timer: GameTimer = timer if timer is not None else NullTimer()
        self.mine_placer: MinePlacer = mine_placer
        self.state: GameState = self._new_game(resolve_config(config))

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def reset(self, config: Optional[ConfigLike] = None) -> GameSnapshot:
        """
        Discard the current game and start a fresh one.

        Args:
            config: New configuration; the current one when omitted.

        Returns:
            Snapshot of the new, not yet started game.

        Raises:
            InvalidConfig: If config is invalid. The current game is kept.
        """
        resolved = self.state.config if config is None else resolve_config(config)
        self.state = self._new_game(resolved)
        return self.snapshot()

    def reveal(self, row: int, col: int) -> RevealOutcome:
        """
        Reveal a cell, cascading through zero-count regions.

        Out-of-bounds coordinates, finished games, and revealed or flagged
        cells are no-ops returning UNCHANGED.
        """
        state = self.state
        grid = state.grid

        if not grid.in_bounds(row, col) or state.phase.is_terminal:
            return UNCHANGED

        cell = grid.cells[row][col]
        if cell.revealed or cell.flagged:
            return UNCHANGED

        if state.phase is Phase.NOT_STARTED:
            self._start(row, col)

        cell.revealed = True

        if cell.is_mine:
            self._lose()
            return RevealOutcome(RevealStatus.LOST, revealed_cells=((row, col),))

        state.revealed_safe_count += 1
        revealed_cells: List[Tuple[int, int]] = [(row, col)]
        if cell.adjacent_mine_count == 0:
            revealed_cells.extend(self._flood_reveal(row, col))

        if state.revealed_safe_count == state.config.safe_cell_count:
            self._win()
            return RevealOutcome(
                RevealStatus.WON, cell.adjacent_mine_count, tuple(revealed_cells)
            )

        return RevealOutcome(
            RevealStatus.REVEALED, cell.adjacent_mine_count, tuple(revealed_cells)
        )

    def toggle_flag(self, row: int, col: int) -> FlagOutcome:
        """Flag or unflag a hidden cell; a no-op on revealed cells and finished games."""
        state = self.state
        grid = state.grid

        if not grid.in_bounds(row, col):
            return FlagOutcome(False, state.flag_count, state.flags_remaining, False)

        cell = grid.cells[row][col]
        if state.phase.is_terminal or cell.revealed:
            return FlagOutcome(
                cell.flagged, state.flag_count, state.flags_remaining, False
            )

        cell.flagged = not cell.flagged
        state.flag_count += 1 if cell.flagged else -1
        return FlagOutcome(cell.flagged, state.flag_count, state.flags_remaining, True)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _new_game(self, config: GameConfig) -> GameState:
        self.timer.reset()
        logger.info(
            "New game: %dx%d with %d mines",
            config.rows, config.cols, config.mine_count,
        )
        return GameState.new(config)

    def _start(self, safe_row: int, safe_col: int) -> None:
        grid = self.state.grid
        self.mine_placer(
            grid, self.state.config.mine_count, safe_row, safe_col, self.rng
        )
        grid.mine_count = self.state.config.mine_count
        compute_adjacency(grid)
        self.state.phase = Phase.IN_PROGRESS
        self.timer.start()

    def _flood_reveal(self, row: int, col: int) -> List[Tuple[int, int]]:
        """
        Breadth-first reveal outward from a revealed zero-count cell.

        Flagged cells are skipped and stay hidden. Numbered cells are revealed
        but not expanded.

        Returns:
            Newly revealed positions, excluding the origin.
        """
        state = self.state
        grid = state.grid
        frontier: Deque[Tuple[int, int]] = deque([(row, col)])
        revealed_cells: List[Tuple[int, int]] = []

        while frontier:
            cr, cc = frontier.popleft()
            for nr, nc in grid.neighbors(cr, cc):
                neighbor = grid.cells[nr][nc]
                if neighbor.revealed or neighbor.flagged:
                    continue

                neighbor.revealed = True
                state.revealed_safe_count += 1
                revealed_cells.append((nr, nc))

                if neighbor.adjacent_mine_count == 0:
                    frontier.append((nr, nc))

        logger.debug("Flood reveal from (%d, %d) opened %d cells", row, col, len(revealed_cells))
        return revealed_cells

    def _lose(self) -> None:
        grid = self.state.grid
        for r, c in grid.mine_positions():
            grid.cells[r][c].revealed = True
        self.state.phase = Phase.LOST
        self.timer.stop()
        logger.info("Game lost after %d safe reveals", self.state.revealed_safe_count)

    def _win(self) -> None:
        self.state.phase = Phase.WON
        self.timer.stop()
        logger.info("Game won in %d seconds", self.timer.elapsed_seconds)

    # -------------------------------------------------------------------------
    # Read-only queries
    # -------------------------------------------------------------------------

    @property
    def rows(self) -> int:
        return self.state.config.rows

    @property
    def cols(self) -> int:
        return self.state.config.cols

    @property
    def mine_count(self) -> int:
        return self.state.config.mine_count

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def is_finished(self) -> bool:
        return self.state.phase.is_terminal

    @property
    def flag_count(self) -> int:
        return self.state.flag_count

    @property
    def flags_remaining(self) -> int:
        return self.state.flags_remaining

    @property
    def revealed_safe_count(self) -> int:
        return self.state.revealed_safe_count

    @property
    def elapsed_seconds(self) -> int:
        return self.timer.elapsed_seconds

    def cell_view(self, row: int, col: int) -> CellView:
        """
        Return what may be shown for one cell.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if not self.state.grid.in_bounds(row, col):
            raise IndexError(f"Cell ({row}, {col}) is outside the board.")

        cell = self.state.grid.cells[row][col]
        exposed = cell.revealed or self.state.phase is Phase.LOST
        return CellView(
            revealed=cell.revealed,
            flagged=cell.flagged,
            is_mine=cell.is_mine if exposed else None,
            adjacent_mine_count=(
                cell.adjacent_mine_count
                if cell.revealed and not cell.is_mine
                else None
            ),
        )

    def snapshot(self) -> GameSnapshot:
        state = self.state
        return GameSnapshot(
            rows=self.rows,
            cols=self.cols,
            mine_count=self.mine_count,
            phase=state.phase,
            flag_count=state.flag_count,
            flags_remaining=state.flags_remaining,
            revealed_safe_count=state.revealed_safe_count,
            elapsed_seconds=self.timer.elapsed_seconds,
            cells=tuple(
                tuple(self.cell_view(r, c) for c in range(self.cols))
                for r in range(self.rows)
            ),
        )

    # -------------------------------------------------------------------------
    # Display methods
    # -------------------------------------------------------------------------

    _ANSI_RESET = "\033[0m"
    _ANSI_COORD = "\033[96m"
    _ANSI_MINE = "\033[91m"

    def _c(self, s: str) -> str:
        """Wrap string in coordinate color."""
        return f"{self._ANSI_COORD}{s}{self._ANSI_RESET}"

    def _m(self, s: str) -> str:
        """Wrap string in mine color (red)."""
        return f"{self._ANSI_MINE}{s}{self._ANSI_RESET}"

    def cell_symbol(self, row: int, col: int, reveal_all: bool = False) -> str:
        """
        Single-character symbol for a cell.

        "." hidden, "F" flagged, "M" mine, "0"-"8" revealed count. With
        reveal_all, hidden cells show their content once mines are placed.
        """
        cell = self.state.grid.cells[row][col]
        placed = self.state.phase is not Phase.NOT_STARTED
        if cell.revealed or (reveal_all and placed):
            return "M" if cell.is_mine else str(cell.adjacent_mine_count)
        if cell.flagged:
            return "F"
        return "."

    def format_board(self, reveal_all: bool = False, color: bool = True) -> str:
        """
        Render the board as a multi-line string for terminal display.

        Args:
            reveal_all: If True, show mines and all underlying values.
            color: If False, omit ANSI escape codes.

        Returns:
            A formatted multi-line string with coordinate labels and the board grid.
        """
        coord = self._c if color else str
        mine = self._m if color else str

        def cell_str(r: int, c: int) -> str:
            s = self.cell_symbol(r, c, reveal_all)
            return mine(s) if s == "M" else s

        # Header: column numbers
        header_cells = " ".join(f"{c:2d}" for c in range(self.cols))
        out = [coord("   ") + coord(header_cells)]

        out.append(coord("   " + "-" * (3 * self.cols - 1)))

        # Rows with row number at left
        for r in range(self.rows):
            row_cells = " ".join(f" {cell_str(r, c)}" for c in range(self.cols))
            out.append(coord(f"{r:2d} ") + coord("|") + row_cells)

        return "\n".join(out)

    def print_board(self) -> None:
        """Print the current visible board state to stdout."""
        print(self.format_board(reveal_all=False))


def play_cli(game: Minesweeper) -> None:
    """
    Run a simple terminal UI for playing Minesweeper.

    Args:
        game: A Minesweeper instance to play against.
    """
    print(
        "Minesweeper CLI (enter: row col to reveal, f row col to flag). "
        "Coordinates are 0-based. Type 'q' to quit.\n"
    )
    print(game.format_board(reveal_all=False))

    while True:
        print(f"\nMines left: {game.flags_remaining}  Time: {game.elapsed_seconds}s")
        s = input("Move: ").strip()
        if s.lower() in {"q", "quit", "exit"}:
            print("Quit.")
            return

        parts = s.replace(",", " ").split()
        flag = bool(parts) and parts[0].lower() == "f"
        if flag:
            parts = parts[1:]
        if len(parts) != 2:
            print("Invalid input. Example: 3 5 or f 3 5")
            continue

        try:
            row = int(parts[0])
            col = int(parts[1])
        except ValueError:
            print("Invalid input. Coordinates must be integers.")
            continue

        if flag:
            outcome = game.toggle_flag(row, col)
            if not outcome.changed:
                print(f"\nCannot flag ({row}, {col}).")
            print()
            print(game.format_board(reveal_all=False))
            continue

        result = game.reveal(row, col)

        print(f"\nYou decided to reveal ({row}, {col}).\n")
        print(game.format_board(reveal_all=False))

        if result.status is RevealStatus.LOST:
            print("\nYou hit a mine. You lost.")
            print("\nFull board:")
            print(game.format_board(reveal_all=True))
            return

        if result.status is RevealStatus.WON:
            print(f"\nYou revealed all safe cells in {game.elapsed_seconds}s. You won!")
            print("\nFull board:")
            print(game.format_board(reveal_all=True))
            return
