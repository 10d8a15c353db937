# game.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple
import logging
import random

import numpy as np  # type: ignore

from .config import UP, DOWN, LEFT, RIGHT, CFG, GameConfig
from .ticker import NullTicker, Ticker

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]

# Cell kinds in Snapshot.grid()
EMPTY, BODY, HEAD, FOOD = 0, 1, 2, 3

COMMANDS = ("UP", "DOWN", "LEFT", "RIGHT", "START", "RESET", "PAUSE")
_COMMAND_DIRECTIONS = {"UP": UP, "DOWN": DOWN, "LEFT": LEFT, "RIGHT": RIGHT}


class GamePhase(Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    PAUSED = "paused"
    OVER = "over"
    WON = "won"   # board full, no cell left for food


# ---------- Helpers ----------
def spawn_food(snake: List[Cell], size: int, rng: random.Random) -> Optional[Cell]:
    """Uniformly pick a free cell by rejection sampling. None when the board is full."""
    occupied = set(snake)
    if len(occupied) >= size * size:
        return None
    while True:
        fx = rng.randrange(size)
        fy = rng.randrange(size)
        if (fx, fy) not in occupied:
            return (fx, fy)


def is_opposite(a: Tuple[int, int], b: Tuple[int, int]) -> bool:
    return a[0] == -b[0] and a[1] == -b[1]


# ---------- State ----------
@dataclass
class GameState:
    snake: List[Cell]            # head at index 0
    direction: Tuple[int, int]   # committed by the last tick
    pending: Tuple[int, int]     # requested by input, committed next tick
    food: Optional[Cell]
    score: int
    phase: GamePhase


def new_game_state(cfg: GameConfig, phase: GamePhase = GamePhase.NOT_STARTED) -> GameState:
    return GameState(
        snake=cfg.start_cells(),
        direction=RIGHT,
        pending=RIGHT,
        food=tuple(cfg.start_food),
        score=0,
        phase=phase,
    )


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of the game handed to renderers once per frame."""

    snake: Tuple[Cell, ...]
    food: Optional[Cell]
    score: int
    phase: GamePhase
    size: int

    @property
    def head(self) -> Cell:
        return self.snake[0]

    def grid(self) -> np.ndarray:
        """
        Board as a (size, size) int8 array indexed [y, x]:
          EMPTY=0, BODY=1, HEAD=2, FOOD=3
        """
        grid = np.zeros((self.size, self.size), dtype=np.int8)
        for x, y in self.snake[1:]:
            grid[y, x] = BODY
        hx, hy = self.head
        grid[hy, hx] = HEAD
        if self.food is not None:
            fx, fy = self.food
            grid[fy, fx] = FOOD
        return grid


# ---------- Simulation ----------
class SnakeGame:
    """
    Owns the game state and the per-tick update rule.

    The periodic tick is external: whoever drives the game polls its ticker
    and calls advance(). The game only starts that ticker when play begins
    and stops it on every way out of RUNNING (game over, won, reset, close).
    """

    def __init__(self, cfg: GameConfig = CFG, ticker: Optional[Ticker] = None):
        self.cfg = cfg
        self.ticker: Ticker = ticker if ticker is not None else NullTicker()
        self.rng = random.Random(cfg.seed)
        self.state = new_game_state(cfg)

    def __enter__(self) -> "SnakeGame":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    @property
    def phase(self) -> GamePhase:
        return self.state.phase

    # ----- Lifecycle -----
    def reset(self) -> None:
        """Back to the welcome state from anywhere. Does not start play."""
        self.ticker.stop()
        self.state = new_game_state(self.cfg)
        logger.debug("game reset")

    def start(self) -> None:
        """Fresh game, then start ticking. Only from NOT_STARTED, OVER or WON."""
        if self.state.phase in (GamePhase.RUNNING, GamePhase.PAUSED):
            return
        self.ticker.stop()
        self.state = new_game_state(self.cfg, GamePhase.RUNNING)
        self.ticker.start()
        logger.debug("game started")

    def toggle_pause(self) -> None:
        if self.state.phase == GamePhase.RUNNING:
            self.state.phase = GamePhase.PAUSED
            logger.debug("game paused")
        elif self.state.phase == GamePhase.PAUSED:
            self.state.phase = GamePhase.RUNNING
            logger.debug("game resumed")

    def close(self) -> None:
        self.ticker.stop()

    # ----- Input -----
    def request_direction(self, direction: Tuple[int, int]) -> None:
        """Latch a new heading for the next tick (no 180° turns)."""
        if self.state.phase != GamePhase.RUNNING:
            return
        if is_opposite(direction, self.state.direction):
            return
        self.state.pending = direction

    def dispatch(self, command: str) -> None:
        if command in _COMMAND_DIRECTIONS:
            self.request_direction(_COMMAND_DIRECTIONS[command])
        elif command == "START":
            self.start()
        elif command == "RESET":
            self.reset()
        elif command == "PAUSE":
            self.toggle_pause()
        else:
            raise ValueError(f"Unknown command: {command!r} (expected one of {COMMANDS})")

    # ----- Update -----
    def advance(self) -> Snapshot:
        """
        Advance the game by one tick:
          commit the latched direction, move the head, then
          - wall or body hit  -> OVER (fatal move is not applied)
          - food              -> grow, score, respawn food (WON if no room)
          - otherwise         -> translate by one cell
        No-op unless RUNNING.
        """
        state = self.state
        if state.phase != GamePhase.RUNNING:
            return self.snapshot()

        # Commit direction once per tick
        state.direction = state.pending

        hx, hy = state.snake[0]
        dx, dy = state.direction
        new_head = (hx + dx, hy + dy)

        # Wall collision
        if not self.cfg.in_bounds(new_head):
            self._finish(GamePhase.OVER, "wall")
            return self.snapshot()

        # Self collision; the current tail is about to move out of the way
        if new_head in state.snake[:-1]:
            self._finish(GamePhase.OVER, "self")
            return self.snapshot()

        # Move / grow
        state.snake.insert(0, new_head)
        if new_head == state.food:
            state.score += self.cfg.score_step
            state.food = spawn_food(state.snake, self.cfg.size, self.rng)
            if state.food is None:
                self._finish(GamePhase.WON, "board full")
        else:
            state.snake.pop()

        return self.snapshot()

    def _finish(self, phase: GamePhase, reason: str) -> None:
        self.state.phase = phase
        self.ticker.stop()
        logger.info("game %s (%s), score=%d", phase.value, reason, self.state.score)

    # ----- Output -----
    def snapshot(self) -> Snapshot:
        state = self.state
        return Snapshot(
            snake=tuple(state.snake),
            food=state.food,
            score=state.score,
            phase=state.phase,
            size=self.cfg.size,
        )
