"""
Minesweeper Engine

A single-player Minesweeper game engine:
- Deferred mine placement that keeps the first revealed cell safe
- Adjacency counts computed once mines are laid
- Breadth-first flood reveal that stops at numbers and flags
- Flag bookkeeping and win/loss tracking
"""

from .analysis import (
    mine_frequency,
    plot_mine_frequency,
    run_preset_analysis,
    run_random_play_many_tests,
    run_random_play_single_test,
)
from .config import PRESETS, GameConfig, config_from_env, resolve_config
from .engine import (
    CellView,
    FlagOutcome,
    GameSnapshot,
    GameState,
    Minesweeper,
    Phase,
    RevealOutcome,
    RevealStatus,
    play_cli,
)
from .grid import Cell, Grid, InvalidConfig
from .layout import compute_adjacency, fixed_layout, place_mines
from .timer import GameTimer, NullTimer, Stopwatch

__version__ = "1.0.0"

__all__ = [
    # Core classes
    "Minesweeper",
    "GameState",
    "Grid",
    "Cell",
    # Outcomes and views
    "Phase",
    "RevealStatus",
    "RevealOutcome",
    "FlagOutcome",
    "CellView",
    "GameSnapshot",
    # Configuration
    "GameConfig",
    "PRESETS",
    "resolve_config",
    "config_from_env",
    "InvalidConfig",
    # Mine layout
    "place_mines",
    "fixed_layout",
    "compute_adjacency",
    # Timers
    "GameTimer",
    "NullTimer",
    "Stopwatch",
    # CLI
    "play_cli",
    # Analysis functions
    "mine_frequency",
    "plot_mine_frequency",
    "run_random_play_single_test",
    "run_random_play_many_tests",
    "run_preset_analysis",
]
