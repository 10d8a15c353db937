# config.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

# ----- Directions (dx, dy) -----
UP, DOWN, LEFT, RIGHT = (0, -1), (0, 1), (-1, 0), (1, 0)

# ----- Colors (board) -----
EMPTY_CELL = (240, 240, 240)
GRID_LINE  = (221, 221, 221)
BOARD_EDGE = (51, 51, 51)
HEAD       = (56, 142, 60)
BODY       = (76, 175, 80)
FOOD       = (244, 67, 54)

# ----- Colors (screens & buttons) -----
BG         = (255, 255, 255)
TEXT       = (33, 33, 33)
WHITE      = (255, 255, 255)
WELCOME_BG = (76, 175, 80)
OVER_BG    = (244, 67, 54)
DPAD       = (33, 150, 243)
RESET_BTN  = (255, 152, 0)
PAUSE_BTN  = (156, 39, 176)

# ----- Layout (pixels) -----
HUD_H = 64           # title + score strip above the board
CONTROLS_H = 260     # d-pad + menu buttons below the board
MIN_WIDTH = 320
DPAD_SIZE = 60
MENU_W, MENU_H = 100, 40


class ConfigError(ValueError):
    """Raised when a GameConfig describes a board the game cannot run on."""


# ----- Tunables -----
@dataclass(frozen=True)
class GameConfig:
    size: int = 15
    tick_ms: int = 200
    score_step: int = 10
    start: Tuple[int, int] = (5, 5)
    start_length: int = 1
    start_food: Tuple[int, int] = (10, 10)
    seed: Optional[int] = None
    cell_px: int = 24

    def __post_init__(self) -> None:
        if self.size < 2:
            raise ConfigError(f"board size must be at least 2, got {self.size}")
        if self.tick_ms <= 0:
            raise ConfigError(f"tick interval must be positive, got {self.tick_ms} ms")
        if self.score_step <= 0:
            raise ConfigError(f"score step must be positive, got {self.score_step}")
        if self.start_length < 1:
            raise ConfigError(f"start length must be at least 1, got {self.start_length}")
        if self.cell_px <= 0:
            raise ConfigError(f"cell size must be positive, got {self.cell_px} px")

        cells = self.start_cells()
        for cell in cells:
            if not self.in_bounds(cell):
                raise ConfigError(
                    f"starting snake cell {cell} is outside the {self.size}x{self.size} board"
                )
        if not self.in_bounds(self.start_food):
            raise ConfigError(
                f"starting food {self.start_food} is outside the {self.size}x{self.size} board"
            )
        if tuple(self.start_food) in cells:
            raise ConfigError(f"starting food {self.start_food} overlaps the starting snake")

    @classmethod
    def for_size(cls, size: int, **kwargs) -> "GameConfig":
        """Config whose start cell and first food sit a third and two thirds across the board."""
        kwargs.setdefault("start", (size // 3, size // 3))
        kwargs.setdefault("start_food", (2 * size // 3, 2 * size // 3))
        return cls(size=size, **kwargs)

    def in_bounds(self, cell: Tuple[int, int]) -> bool:
        x, y = cell
        return 0 <= x < self.size and 0 <= y < self.size

    def start_cells(self) -> list[Tuple[int, int]]:
        """Head first; the body trails to the left so the first move RIGHT is safe."""
        sx, sy = self.start
        return [(sx - i, sy) for i in range(self.start_length)]

    # ----- Window geometry -----
    @property
    def board_px(self) -> int:
        return self.size * self.cell_px

    @property
    def window_size(self) -> Tuple[int, int]:
        width = max(MIN_WIDTH, self.board_px + 2 * 16)
        return width, HUD_H + self.board_px + CONTROLS_H


CFG = GameConfig()
