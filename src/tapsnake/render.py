# render.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np  # type: ignore
import pygame  # type: ignore

from .config import (
    GameConfig,
    EMPTY_CELL, GRID_LINE, BOARD_EDGE, HEAD, BODY, FOOD,
    BG, TEXT, WHITE, WELCOME_BG, OVER_BG, DPAD, RESET_BTN, PAUSE_BTN,
    HUD_H, DPAD_SIZE, MENU_W, MENU_H,
)
from .game import GamePhase, Snapshot
from . import game

CELL_COLORS = {
    game.EMPTY: EMPTY_CELL,
    game.BODY: BODY,
    game.HEAD: HEAD,
    game.FOOD: FOOD,
}

KEY_TO_COMMAND = {
    pygame.K_UP: "UP",
    pygame.K_w: "UP",
    pygame.K_DOWN: "DOWN",
    pygame.K_s: "DOWN",
    pygame.K_LEFT: "LEFT",
    pygame.K_a: "LEFT",
    pygame.K_RIGHT: "RIGHT",
    pygame.K_d: "RIGHT",
    pygame.K_RETURN: "START",
    pygame.K_SPACE: "START",
    pygame.K_r: "RESET",
    pygame.K_p: "PAUSE",
    pygame.K_ESCAPE: "PAUSE",
}


# ---------- Buttons ----------
@dataclass
class Button:
    rect: pygame.Rect
    label: str
    command: str
    color: Tuple[int, int, int]
    circle: bool = False

    def hit(self, pos: Tuple[int, int]) -> bool:
        return self.rect.collidepoint(pos)


def _centered(cx: int, cy: int, w: int, h: int) -> pygame.Rect:
    rect = pygame.Rect(0, 0, w, h)
    rect.center = (cx, cy)
    return rect


def board_origin(cfg: GameConfig) -> Tuple[int, int]:
    width, _ = cfg.window_size
    return (width - cfg.board_px) // 2, HUD_H


def layout_buttons(cfg: GameConfig, phase: GamePhase) -> List[Button]:
    """On-screen touch targets for the screen shown in `phase`."""
    width, height = cfg.window_size
    cx = width // 2

    if phase == GamePhase.NOT_STARTED:
        return [Button(_centered(cx, height // 2 + 60, 200, 56), "Start Game", "START", WHITE)]
    if phase in (GamePhase.OVER, GamePhase.WON):
        return [Button(_centered(cx, height // 2 + 60, 200, 56), "Play Again", "START", WHITE)]

    top = HUD_H + cfg.board_px + 20
    step = DPAD_SIZE
    pause_label = "Resume" if phase == GamePhase.PAUSED else "Pause"
    return [
        Button(_centered(cx, top + step // 2, step, step), "^", "UP", DPAD, circle=True),
        Button(_centered(cx - step, top + step * 3 // 2, step, step), "<", "LEFT", DPAD, circle=True),
        Button(_centered(cx + step, top + step * 3 // 2, step, step), ">", "RIGHT", DPAD, circle=True),
        Button(_centered(cx, top + step * 5 // 2, step, step), "v", "DOWN", DPAD, circle=True),
        Button(_centered(cx - 55, top + step * 3 + 30, MENU_W, MENU_H), "Reset", "RESET", RESET_BTN),
        Button(_centered(cx + 55, top + step * 3 + 30, MENU_W, MENU_H), pause_label, "PAUSE", PAUSE_BTN),
    ]


def hit_test(buttons: List[Button], pos: Tuple[int, int]) -> Optional[str]:
    for button in buttons:
        if button.hit(pos):
            return button.command
    return None


def command_for_event(event: pygame.event.Event, buttons: List[Button],
                      window_size: Tuple[int, int]) -> Optional[str]:
    """Translate a key press, click or touch into a game command (or None)."""
    if event.type == pygame.KEYDOWN:
        return KEY_TO_COMMAND.get(event.key)
    if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
        # SDL follows every FINGERDOWN with a synthetic click; count the tap once
        if getattr(event, "touch", False):
            return None
        return hit_test(buttons, event.pos)
    if event.type == pygame.FINGERDOWN:
        # finger coordinates are normalized to [0, 1]
        w, h = window_size
        return hit_test(buttons, (int(event.x * w), int(event.y * h)))
    return None


# ---------- Draw ----------
class Renderer:
    """Draws whichever screen matches the snapshot's phase."""

    def __init__(self, cfg: GameConfig):
        self.cfg = cfg
        self.title_font = pygame.font.SysFont(None, 56)
        self.font = pygame.font.SysFont(None, 32)
        self.small_font = pygame.font.SysFont(None, 26)

    def draw(self, screen: pygame.Surface, snap: Snapshot) -> List[Button]:
        """Draw one frame; returns the buttons that are live on it."""
        buttons = layout_buttons(self.cfg, snap.phase)
        if snap.phase == GamePhase.NOT_STARTED:
            self.draw_welcome(screen)
        elif snap.phase in (GamePhase.OVER, GamePhase.WON):
            self.draw_game_over(screen, snap)
        else:
            self.draw_game(screen, snap)
        for button in buttons:
            self.draw_button(screen, button)
        return buttons

    def draw_welcome(self, screen: pygame.Surface) -> None:
        screen.fill(WELCOME_BG)
        self._blit_centered(screen, self.title_font, "Snake Game", WHITE, -60)
        self._blit_centered(screen, self.font, "Ready to play?", WHITE, -10)

    def draw_game_over(self, screen: pygame.Surface, snap: Snapshot) -> None:
        screen.fill(OVER_BG if snap.phase == GamePhase.OVER else WELCOME_BG)
        title = "Game Over!" if snap.phase == GamePhase.OVER else "You Win!"
        self._blit_centered(screen, self.title_font, title, WHITE, -60)
        self._blit_centered(screen, self.font, f"Final Score: {snap.score}", WHITE, -10)

    def draw_game(self, screen: pygame.Surface, snap: Snapshot) -> None:
        screen.fill(BG)
        width, _ = self.cfg.window_size
        title = self.font.render("Snake Game", True, TEXT)
        screen.blit(title, title.get_rect(center=(width // 2, 18)))
        score = self.small_font.render(f"Score: {snap.score}", True, TEXT)
        screen.blit(score, score.get_rect(center=(width // 2, 46)))
        self.draw_board(screen, snap)
        if snap.phase == GamePhase.PAUSED:
            self._draw_paused_overlay(screen)

    def draw_board(self, screen: pygame.Surface, snap: Snapshot) -> None:
        ox, oy = board_origin(self.cfg)
        cell = self.cfg.cell_px
        for (gy, gx), kind in np.ndenumerate(snap.grid()):
            rect = pygame.Rect(ox + gx * cell, oy + gy * cell, cell, cell)
            pygame.draw.rect(screen, CELL_COLORS[int(kind)], rect)
            pygame.draw.rect(screen, GRID_LINE, rect, 1)
        edge = pygame.Rect(ox - 2, oy - 2, self.cfg.board_px + 4, self.cfg.board_px + 4)
        pygame.draw.rect(screen, BOARD_EDGE, edge, 2)

    def draw_button(self, screen: pygame.Surface, button: Button) -> None:
        if button.circle:
            pygame.draw.circle(screen, button.color, button.rect.center, button.rect.width // 2)
            fg = WHITE
        else:
            pygame.draw.rect(screen, button.color, button.rect, border_radius=8)
            fg = WHITE if button.color != WHITE else TEXT
        txt = self.small_font.render(button.label, True, fg)
        screen.blit(txt, txt.get_rect(center=button.rect.center))

    def _draw_paused_overlay(self, screen: pygame.Surface) -> None:
        ox, oy = board_origin(self.cfg)
        size = self.cfg.board_px
        overlay = pygame.Surface((size, size), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 120))  # RGBA
        screen.blit(overlay, (ox, oy))
        txt = self.font.render("PAUSED", True, WHITE)
        screen.blit(txt, txt.get_rect(center=(ox + size // 2, oy + size // 2)))

    def _blit_centered(self, screen: pygame.Surface, font: pygame.font.Font,
                       text: str, color, dy: int) -> None:
        width, height = screen.get_size()
        surf = font.render(text, True, color)
        screen.blit(surf, surf.get_rect(center=(width // 2, height // 2 + dy)))
