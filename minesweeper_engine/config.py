"""Board configurations: the built-in presets and the custom triple."""

import logging
import os
from dataclasses import dataclass
from typing import Dict, Mapping, Union

from .grid import InvalidConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Board dimensions and mine count for one game."""

    rows: int
    cols: int
    mine_count: int

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise InvalidConfig("rows and cols must be positive.")
        if self.rows * self.cols <= 1:
            raise InvalidConfig("The board needs at least two cells.")
        if self.mine_count <= 0:
            raise InvalidConfig("mine_count must be positive.")
        if self.mine_count > self.max_mines:
            raise InvalidConfig(
                f"mine_count must be at most {self.max_mines} for a "
                f"{self.rows}x{self.cols} board."
            )

    @property
    def max_mines(self) -> int:
        return self.rows * self.cols - 1

    @property
    def safe_cell_count(self) -> int:
        return self.rows * self.cols - self.mine_count

    @classmethod
    def custom(cls, rows: int, cols: int, mine_count: int) -> "GameConfig":
        """
        Build a user-supplied configuration, clamping an excessive mine count.

        A mine count above rows*cols - 1 is lowered to rows*cols - 1 rather
        than rejected, so at least one cell stays safe.

        Raises:
            InvalidConfig: If the dimensions are non-positive, the board has a
                single cell, or the mine count is not positive.
        """
        rows, cols, mine_count = int(rows), int(cols), int(mine_count)
        if rows > 0 and cols > 0 and rows * cols > 1:
            max_mines = rows * cols - 1
            if mine_count > max_mines:
                logger.warning(
                    "Clamping mine count %d to %d for a %dx%d board",
                    mine_count, max_mines, rows, cols,
                )
                mine_count = max_mines
        return cls(rows, cols, mine_count)


PRESETS: Dict[str, GameConfig] = {
    "beginner": GameConfig(9, 9, 10),
    "intermediate": GameConfig(16, 16, 40),
    "expert": GameConfig(16, 30, 99),
}

ConfigLike = Union[GameConfig, str, Mapping[str, int]]


def resolve_config(config: ConfigLike) -> GameConfig:
    """
    Turn a preset name, a mapping or a GameConfig into a validated GameConfig.

    Args:
        config: A GameConfig (returned as-is), a preset name such as
            "beginner" (case-insensitive), or a mapping with "rows", "cols"
            and "mine_count" (or "mines") keys, treated as a custom triple.

    Returns:
        The resolved configuration.

    Raises:
        InvalidConfig: If the preset is unknown or the values are invalid.
    """
    if isinstance(config, GameConfig):
        return config

    if isinstance(config, str):
        key = config.strip().lower()
        if key not in PRESETS:
            raise InvalidConfig(
                f"Unknown difficulty {config!r}; expected one of {sorted(PRESETS)}."
            )
        return PRESETS[key]

    if isinstance(config, Mapping):
        mines = config.get("mine_count", config.get("mines"))
        try:
            return GameConfig.custom(config["rows"], config["cols"], mines)
        except InvalidConfig:
            raise
        except (KeyError, TypeError, ValueError) as error:
            raise InvalidConfig(f"Malformed board configuration: {dict(config)!r}") from error

    raise InvalidConfig(f"Unsupported configuration type: {type(config).__name__}")


def config_from_env() -> GameConfig:
    """
    Read the board configuration from the environment.

    MINESWEEPER_DIFFICULTY selects a preset (default "beginner"); the value
    "custom" reads MINESWEEPER_ROWS, MINESWEEPER_COLS and MINESWEEPER_MINES.
    """
    difficulty = os.getenv("MINESWEEPER_DIFFICULTY", "beginner")
    if difficulty.strip().lower() != "custom":
        return resolve_config(difficulty)

    return resolve_config(
        {
            "rows": os.getenv("MINESWEEPER_ROWS", "9"),
            "cols": os.getenv("MINESWEEPER_COLS", "9"),
            "mine_count": os.getenv("MINESWEEPER_MINES", "10"),
        }
    )
