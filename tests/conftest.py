# tests/conftest.py
import os

# Headless SDL so tests don't open a window
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame as pg
import pytest

from tapsnake.config import GameConfig
from tapsnake.game import SnakeGame


class RecordingTicker:
    """Ticker double that counts start/stop calls."""

    def __init__(self):
        self.running = False
        self.starts = 0
        self.stops = 0

    def start(self):
        self.running = True
        self.starts += 1

    def stop(self):
        if self.running:
            self.stops += 1
        self.running = False


@pytest.fixture(scope="session", autouse=True)
def _pygame_session():
    pg.init()
    yield
    pg.quit()


@pytest.fixture
def ticker():
    return RecordingTicker()


@pytest.fixture
def make_game(ticker):
    def make(**kwargs):
        kwargs.setdefault("seed", 1234)
        return SnakeGame(GameConfig(**kwargs), ticker=ticker)
    return make


@pytest.fixture
def screen():
    # Plain Surface is fine for draw tests (no need for display mode)
    w, h = GameConfig().window_size
    return pg.Surface((w, h))
