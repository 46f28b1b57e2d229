"""Statistics over many simulated games, for checking the generator and the engine."""

import random
from collections import defaultdict
from typing import Dict, List, Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np

from .config import PRESETS, ConfigLike, resolve_config
from .engine import Minesweeper, Phase, RevealStatus
from .grid import Grid
from .layout import place_mines


def mine_frequency(
    config: ConfigLike,
    safe_cell: Tuple[int, int],
    runs: int,
    *,
    seed: Optional[int] = None,
) -> np.ndarray:
    """
    Estimate how often each cell receives a mine.

    Args:
        config: Board configuration.
        safe_cell: (row, col) used as the safe origin for every layout.
        runs: Number of independent layouts to draw, must be > 0.
        seed: Seed for the random generator.

    Returns:
        A rows x cols float array of per-cell mine frequencies in [0, 1].
        The safe cell is always 0; for an unbiased generator every other
        cell tends to mine_count / (rows*cols - 1).

    Raises:
        ValueError: If runs is not positive.
    """
    if runs <= 0:
        raise ValueError("runs must be positive.")

    cfg = resolve_config(config)
    rng = random.Random(seed)
    counts = np.zeros((cfg.rows, cfg.cols), dtype=np.int64)

    for _ in range(runs):
        grid = Grid.create(cfg.rows, cfg.cols)
        place_mines(grid, cfg.mine_count, safe_cell[0], safe_cell[1], rng)
        for r, c in grid.mine_positions():
            counts[r, c] += 1

    return counts / runs


def run_random_play_single_test(
    config: ConfigLike,
    *,
    seed: Optional[int] = None,
    show_board: bool = False,
) -> Dict[str, object]:
    """
    Play one game by revealing uniformly random hidden, unflagged cells.

    Args:
        config: Board configuration.
        seed: Seed for both the mine layout and the move choice.
        show_board: If True, print the final board.

    Returns:
        Dict with "status" (1 win, -1 loss), "reveal_moves_count",
        "revealed_cells_count" and "first_reveal_size" (cells opened by the
        first click, including the cascade).
    """
    rng = random.Random(seed)
    game = Minesweeper(config, rng=rng)

    hidden: List[Tuple[int, int]] = [
        (r, c) for r in range(game.rows) for c in range(game.cols)
    ]
    moves = 0
    first_reveal_size = 0

    while not game.is_finished:
        hidden = [p for p in hidden if not game.cell_view(*p).revealed]
        row, col = rng.choice(hidden)
        outcome = game.reveal(row, col)
        if outcome.status is RevealStatus.UNCHANGED:
            raise RuntimeError(f"Random reveal of ({row}, {col}) had no effect.")
        moves += 1
        if moves == 1:
            first_reveal_size = len(outcome.revealed_cells)

    if show_board:
        print(game.format_board(reveal_all=True))

    return {
        "status": 1 if game.phase is Phase.WON else -1,
        "reveal_moves_count": moves,
        "revealed_cells_count": game.revealed_safe_count,
        "first_reveal_size": first_reveal_size,
    }


def run_random_play_many_tests(
    config: ConfigLike,
    runs: int,
    *,
    seed: Optional[int] = None,
) -> Dict[str, float]:
    """
    Run many random-play games and return averaged metrics plus win rate.

    Returns:
        "avg_reveal_moves_count", "avg_revealed_cells_count",
        "avg_first_reveal_size", "win_rate" and "avg_revealed_fraction"
        (revealed safe cells over all safe cells).
    """
    if runs <= 0:
        raise ValueError("runs must be positive.")

    cfg = resolve_config(config)
    seeder = random.Random(seed)
    sums: Dict[str, float] = defaultdict(float)
    wins = 0

    for _ in range(runs):
        payload = run_random_play_single_test(cfg, seed=seeder.randrange(2**32))
        if payload["status"] == 1:
            wins += 1

        sums["avg_reveal_moves_count"] += float(payload["reveal_moves_count"])  # type: ignore[arg-type]
        sums["avg_revealed_cells_count"] += float(payload["revealed_cells_count"])  # type: ignore[arg-type]
        sums["avg_first_reveal_size"] += float(payload["first_reveal_size"])  # type: ignore[arg-type]

    out: Dict[str, float] = {k: total / runs for k, total in sums.items()}
    out["win_rate"] = wins / runs
    out["avg_revealed_fraction"] = out["avg_revealed_cells_count"] / cfg.safe_cell_count
    return out


def run_preset_analysis(
    runs: int,
    *,
    seed: Optional[int] = None,
    show: bool = True,
) -> Dict[str, Dict[str, float]]:
    """
    Run random-play statistics on every preset and plot summaries.

    Args:
        runs: Number of games per preset.
        seed: Seed for reproducible runs.
        show: If True, display the figures.

    Returns:
        Mapping from preset name to the dict from run_random_play_many_tests().
    """
    results: Dict[str, Dict[str, float]] = {}
    for level, cfg in PRESETS.items():
        results[level] = run_random_play_many_tests(cfg, runs, seed=seed)

    level_names = list(PRESETS.keys())
    x = np.arange(len(level_names))

    # 1) Cells opened per game
    first_reveal = [results[n]["avg_first_reveal_size"] for n in level_names]
    revealed = [results[n]["avg_revealed_cells_count"] for n in level_names]

    bar_w = 0.35
    plt.figure()  # type: ignore[misc]
    plt.bar(x - bar_w / 2, first_reveal, width=bar_w, label="first click")  # type: ignore[misc]
    plt.bar(x + bar_w / 2, revealed, width=bar_w, label="whole game")  # type: ignore[misc]
    plt.xticks(x, level_names)  # type: ignore[misc]
    plt.ylabel("Average cells revealed")  # type: ignore[misc]
    plt.title("Cells revealed by random play (per game)")  # type: ignore[misc]
    plt.legend()  # type: ignore[misc]
    plt.tight_layout()

    # 2) Win rate by level
    win_rates = [results[n]["win_rate"] for n in level_names]

    plt.figure()  # type: ignore[misc]
    plt.bar(x, win_rates)  # type: ignore[misc]
    plt.xticks(x, level_names)  # type: ignore[misc]
    plt.ylabel("Win rate")  # type: ignore[misc]
    plt.ylim(0.0, 1.0)  # type: ignore[misc]
    plt.title("Random play win rate by difficulty level")  # type: ignore[misc]
    plt.tight_layout()

    if show:
        plt.show()  # type: ignore[misc]

    return results


def plot_mine_frequency(freq: np.ndarray, *, show: bool = True) -> plt.Figure:
    """Draw a heat map of per-cell mine frequencies and return the figure."""
    fig, ax = plt.subplots()
    image = ax.imshow(freq, cmap="Reds", vmin=0.0, vmax=max(float(freq.max()), 1e-9))
    ax.set_xlabel("column")
    ax.set_ylabel("row")
    ax.set_title("Mine frequency per cell")
    fig.colorbar(image, ax=ax)
    fig.tight_layout()
    if show:
        plt.show()  # type: ignore[misc]
    return fig
